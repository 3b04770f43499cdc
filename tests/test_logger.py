"""
Tests for logger functionality.
"""

import pytest

from roletagger.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        assert logger.logger.name == "test"
        assert logger.metrics["tags_selected"] == 0

    def test_log_with_context(self, tmp_path):
        """Context is appended to the message as JSON."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.info("Role created", tag="SRE", entity="7")

        content = next(tmp_path.glob("*.log")).read_text()
        assert "Role created" in content
        assert '"tag": "SRE"' in content

    def test_debug_reaches_file(self, tmp_path):
        logger = StructuredLogger(name="test", level="WARNING", log_dir=tmp_path, enable_console=False)
        logger.debug("quiet detail")
        assert "quiet detail" in next(tmp_path.glob("*.log")).read_text()

    def test_outcome_metrics(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        for outcome in ["selected", "created", "folded", "removed", "stale", "already_selected"]:
            logger.record_outcome(outcome)

        metrics = logger.get_metrics()
        assert metrics["tags_selected"] == 3
        assert metrics["tags_created"] == 1
        assert metrics["creates_folded"] == 1
        assert metrics["tags_removed"] == 1
        assert metrics["stale_commits"] == 1

    def test_store_fallbacks(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_store_fallback("rms-available-roles")
        logger.record_store_fallback("rms-available-roles")

        metrics = logger.get_metrics()
        assert metrics["store_fallbacks"] == 2
        assert metrics["fallbacks_by_key"] == {"rms-available-roles": 2}

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_store_fallback("rms-notes-1")
        logger.log_metrics_summary()
        content = next(tmp_path.glob("*.log")).read_text()
        assert "Tagging Session Metrics" in content
        assert "rms-notes-1: 1" in content


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_outcome("created")

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)
        assert logger2.metrics["tags_created"] == 0
