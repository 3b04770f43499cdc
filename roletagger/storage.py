"""
Key/value persistence for the registry and per-candidate notes.

Values are JSON text stored under string keys. The registry lives under one
fixed application-wide key and is overwritten in full on every change.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import StoreError
from .logger import StructuredLogger, get_logger
from .schema import registry_is_usable, validate_registry

REGISTRY_KEY = "rms-available-roles"
INITIAL_ROLES = ["SWE", "SE", "CLOUD SWE", "CLOUD ARCH", "DBA", "DBE", "SA", "DEVOPS"]


def read_store(path: Path) -> Dict[str, Any]:
    """
    Read the whole store file.

    Raises:
        StoreError: If the file exists but is not a readable JSON object
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
        if not content:
            return {}
        data = json.loads(content)
    except (ValueError, OSError) as e:
        # ValueError covers both JSON and UTF-8 decode errors
        raise StoreError(f"Unreadable store {path}: {e}") from e
    if not isinstance(data, dict):
        raise StoreError(f"Store {path} must hold a JSON object, got {type(data).__name__}")
    return data


def load_store(path: Path) -> Dict[str, str]:
    """Read the store for lookups; an unreadable file reads as empty."""
    try:
        data = read_store(path)
    except StoreError:
        return {}
    return {str(k): v for k, v in data.items() if isinstance(v, str)}


def save_store(path: Path, store: Dict[str, Any]) -> None:
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(store, f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except OSError as e:
        raise StoreError(f"Failed to write store {path}: {e}") from e


class JsonFileStore:
    """
    All keys kept in a single JSON object on disk.

    Lookups on an unreadable file behave as an empty store. Writes refuse
    to run on one (StoreError) and leave the file untouched.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        return load_store(self.path).get(key)

    def set_item(self, key: str, value: str) -> None:
        store = read_store(self.path)
        store[key] = value
        save_store(self.path, store)

    def remove_item(self, key: str) -> None:
        store = read_store(self.path)
        if store.pop(key, None) is not None:
            save_store(self.path, store)

    def keys(self) -> List[str]:
        return list(load_store(self.path).keys())


class MemoryStore:
    """In-process store, for tests and throwaway sessions."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self.items.keys())


class RegistryRepository:
    """Loads and saves the shared role vocabulary."""

    def __init__(
        self,
        store,
        key: str = REGISTRY_KEY,
        defaults: Iterable[str] = INITIAL_ROLES,
        logger: Optional[StructuredLogger] = None,
    ):
        self.store = store
        self.key = key
        self.defaults = list(defaults)
        self.log = logger or get_logger()

    def load(self, seed: bool = True) -> List[str]:
        """
        Read the registry list.

        A missing entry is seeded with the default roles unless `seed` is
        False (read-only callers). An unparsable or non-list entry falls back
        to the defaults (without overwriting the stored value) and is logged,
        never raised. A store that refuses the seeding write is logged the
        same way.
        """
        raw = self.store.get_item(self.key)
        if raw is None:
            if seed:
                try:
                    self.save(self.defaults)
                except StoreError as e:
                    self._fallback(f"could not seed defaults: {e}")
            return list(self.defaults)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self._fallback(f"unparsable JSON: {e}")
            return list(self.defaults)

        if not registry_is_usable(data):
            self._fallback("; ".join(validate_registry(data)))
            return list(self.defaults)

        problems = validate_registry(data)
        if problems:
            self.log.warning("Registry entries dropped on load", key=self.key, problems=problems)
        return data

    def save(self, tags: Iterable[str]) -> None:
        self.store.set_item(self.key, json.dumps(list(tags), ensure_ascii=False))

    def _fallback(self, reason: str) -> None:
        self.log.warning("Malformed registry, using defaults", key=self.key, reason=reason)
        self.log.record_store_fallback(self.key)
