from __future__ import annotations

import json
import logging
import os
import sqlite3
from datetime import date
from pathlib import Path

from errors import ParseFailure, StorageUnavailable
from models import Theme, TimesheetEntry
from validation import validate

logger = logging.getLogger(__name__)

ENTRIES_KEY = "timesheetEntries"
THEME_KEY = "timesheetTheme"
DEFAULT_THEME = Theme.LIGHT


def _get_db_path() -> Path:
    """Get database path from environment variable or default location."""
    if env_path := os.environ.get("TIMESHEET_DB"):
        return Path(env_path)
    return Path(__file__).parent / "data" / "timesheet.db"


DB_PATH = _get_db_path()


def get_connection() -> sqlite3.Connection:
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db():
    """Create the key-value table if it doesn't exist."""
    conn = get_connection()
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
    """)
    conn.commit()
    conn.close()


# --- Key-value primitives ---


def get_value(key: str) -> str | None:
    """Get the raw stored text for a key."""
    try:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        finally:
            conn.close()
    except (sqlite3.Error, OSError) as e:
        raise StorageUnavailable(f"Could not read {key!r}: {e}") from e
    return row["value"] if row else None


def set_value(key: str, value: str) -> None:
    """Insert or replace the stored text for a key."""
    try:
        conn = get_connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()
    except (sqlite3.Error, OSError) as e:
        raise StorageUnavailable(f"Could not write {key!r}: {e}") from e
    logger.debug("Saved %s (%d bytes)", key, len(value))


def delete_value(key: str) -> None:
    """Remove a key. Missing keys are ignored."""
    try:
        conn = get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
    except (sqlite3.Error, OSError) as e:
        raise StorageUnavailable(f"Could not delete {key!r}: {e}") from e


# --- Entries ---


def parse_entries(text: str) -> list[TimesheetEntry]:
    """Deserialise a stored entry collection. Raises ParseFailure."""
    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Stored entries are not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise ParseFailure("Stored entries are not a list")

    entries = []
    for record in records:
        entry = TimesheetEntry.from_record(record)
        # No future-date check: the clock may be behind the one that saved it
        errors = validate(record, today=date.max)
        if errors:
            details = ", ".join(f"{name}: {error}" for name, error in errors.items())
            raise ParseFailure(f"Entry {entry.id!r} fails validation ({details})")
        entries.append(entry)

    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            raise ParseFailure(f"Duplicate entry id {entry.id!r}")
        seen.add(entry.id)

    return entries


def serialize_entries(entries) -> str:
    return json.dumps([entry.to_record() for entry in entries])


def load_entries() -> list[TimesheetEntry]:
    """Load the saved entry collection, newest first.

    Missing, unreadable or corrupt data gives an empty list.
    """
    try:
        text = get_value(ENTRIES_KEY)
        if text is None:
            return []
        return parse_entries(text)
    except (StorageUnavailable, ParseFailure) as e:
        logger.warning("Error loading saved entries, starting empty: %s", e)
        return []


def save_entries(entries) -> None:
    """Replace the saved entry collection."""
    set_value(ENTRIES_KEY, serialize_entries(entries))


# --- Theme ---


def load_theme() -> Theme:
    """Load the saved theme, defaulting to light."""
    try:
        token = get_value(THEME_KEY)
    except StorageUnavailable as e:
        logger.warning("Error loading saved theme: %s", e)
        return DEFAULT_THEME

    if token is None:
        return DEFAULT_THEME

    try:
        return Theme(token)
    except ValueError:
        logger.warning("Unknown saved theme %r, using %s", token, DEFAULT_THEME.value)
        return DEFAULT_THEME


def save_theme(theme: Theme) -> None:
    set_value(THEME_KEY, theme.value)
