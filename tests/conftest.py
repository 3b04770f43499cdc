"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import List

import pytest

from roletagger.logger import get_logger, reset_logger
from roletagger.registry import TagRegistry
from roletagger.storage import JsonFileStore, MemoryStore


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir and keep the console clean."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def sample_roles() -> List[str]:
    """Two-role registry used by the worked examples."""
    return ["SWE", "SE"]


@pytest.fixture
def registry(sample_roles) -> TagRegistry:
    return TagRegistry(sample_roles)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def temp_store_file(tmp_path) -> Path:
    """Create an empty JSON store file."""
    store_file = tmp_path / "test_store.json"
    store_file.write_text(json.dumps({}))
    return store_file


@pytest.fixture
def populated_store(tmp_path) -> Path:
    """Create a store with a registry and one candidate's notes."""
    store_file = tmp_path / "test_store.json"
    data = {
        "rms-available-roles": json.dumps(["SWE", "SE", "DBA"]),
        "rms-notes-7": json.dumps({
            "salaryRange": "$120k - $140k",
            "potentialContracts": "Project Phoenix",
            "generalNotes": "Strong on infra",
            "potentialRoles": ["SWE"],
        }),
    }
    store_file.write_text(json.dumps(data, indent=2))
    return store_file


@pytest.fixture
def json_store(populated_store) -> JsonFileStore:
    return JsonFileStore(populated_store)
