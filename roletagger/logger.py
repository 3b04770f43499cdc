"""
Structured logging for roletagger.

Wraps the standard library logger with console and file outputs and keeps
counters of tagging activity (selections, creations, folds, fallbacks).
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for tag commits and store recoveries.
    """

    def __init__(
        self,
        name: str = "roletagger",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "tags_selected": 0,
            "tags_created": 0,
            "tags_removed": 0,
            "creates_folded": 0,
            "stale_commits": 0,
            "store_fallbacks": 0,
            "fallbacks_by_key": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"roletagger_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking

    def record_outcome(self, outcome: str):
        """Count a commit/remove outcome reported by the navigation reducer."""
        if outcome == "selected":
            self.metrics["tags_selected"] += 1
        elif outcome == "folded":
            self.metrics["tags_selected"] += 1
            self.metrics["creates_folded"] += 1
        elif outcome == "created":
            self.metrics["tags_selected"] += 1
            self.metrics["tags_created"] += 1
        elif outcome == "removed":
            self.metrics["tags_removed"] += 1
        elif outcome == "stale":
            self.metrics["stale_commits"] += 1

    def record_store_fallback(self, key: str):
        """Record that a persisted value was unreadable and replaced by its default."""
        self.metrics["store_fallbacks"] += 1
        by_key = self.metrics["fallbacks_by_key"]
        by_key[key] = by_key.get(key, 0) + 1

    def get_metrics(self) -> dict:
        metrics = self.metrics.copy()
        metrics["fallbacks_by_key"] = dict(self.metrics["fallbacks_by_key"])
        return metrics

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Tagging Session Metrics ===")
        self.info(f"Selected: {metrics['tags_selected']} (created {metrics['tags_created']}, folded {metrics['creates_folded']})")
        self.info(f"Removed: {metrics['tags_removed']}")
        self.info(f"Stale commits ignored: {metrics['stale_commits']}")

        if metrics["fallbacks_by_key"]:
            self.info("Store fallbacks:")
            for key, count in metrics["fallbacks_by_key"].items():
                self.info(f"  {key}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "roletagger",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
