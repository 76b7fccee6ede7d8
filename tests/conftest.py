"""Shared fixtures for tests."""

from __future__ import annotations

import itertools
import os
import tempfile
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest

# Set up test database before importing storage
_test_db_fd, _test_db_path = tempfile.mkstemp(suffix=".db")
os.environ["TIMESHEET_DB"] = _test_db_path


@pytest.fixture(scope="session", autouse=True)
def setup_test_db() -> Generator[Path, None, None]:
    """Set up a test database for the entire test session."""
    import storage

    # Reinitialise storage module with test db path
    storage.DB_PATH = Path(_test_db_path)
    storage.init_db()

    yield Path(_test_db_path)

    # Cleanup
    os.close(_test_db_fd)
    os.unlink(_test_db_path)


@pytest.fixture
def clean_db(setup_test_db: Path) -> Generator[None, None, None]:
    """Clean the key-value table before each test."""
    import storage

    storage.DB_PATH = setup_test_db
    conn = storage.get_connection()
    conn.execute("DELETE FROM kv_store")
    conn.commit()
    conn.close()

    yield


class MemoryStore:
    """In-memory stand-in for the storage module."""

    def __init__(self, entries=None, theme=None):
        from models import Theme

        self.entries = list(entries or [])
        self.theme = theme or Theme.LIGHT
        self.entry_saves = 0
        self.theme_saves = 0
        self.fail_saves = False

    def load_entries(self):
        return list(self.entries)

    def save_entries(self, entries):
        from errors import StorageUnavailable

        if self.fail_saves:
            raise StorageUnavailable("disk is read-only")
        self.entries = list(entries)
        self.entry_saves += 1

    def load_theme(self):
        return self.theme

    def save_theme(self, theme):
        from errors import StorageUnavailable

        if self.fail_saves:
            raise StorageUnavailable("disk is read-only")
        self.theme = theme
        self.theme_saves += 1


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sequential_ids():
    """Id factory returning 'id-1', 'id-2', ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def fixed_clock():
    """Clock that advances one second per call from 2024-01-05 10:00 UTC."""
    start = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))


@pytest.fixture
def collection(memory_store, sequential_ids, fixed_clock):
    """An empty EntryCollection backed by memory_store."""
    from entries import EntryCollection

    return EntryCollection(memory_store, id_factory=sequential_ids, clock=fixed_clock)


@pytest.fixture
def sample_fields() -> dict:
    """Valid form fields for a new entry."""
    return {
        "date": "2024-01-05",
        "project": "Acme",
        "task": "Design",
        "hours": "4",
        "description": "",
    }


@pytest.fixture
def sample_entry():
    """Create a sample TimesheetEntry for testing."""
    from models import TimesheetEntry

    return TimesheetEntry(
        id="1704448800000",
        date=date(2024, 1, 5),
        project="Acme",
        task="Design",
        hours=4.0,
        description="Wireframes for the landing page",
        created_at=datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc),
    )
