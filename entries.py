"""In-memory timesheet entry collection, kept in sync with storage."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterator, Mapping
from datetime import datetime
from typing import Any, Protocol

from errors import EntryNotFoundError, StorageError
from models import TimesheetEntry
from utils import new_entry_id, utc_now
from validation import clean

logger = logging.getLogger(__name__)


class EntryStore(Protocol):
    def load_entries(self) -> list[TimesheetEntry]: ...

    def save_entries(self, entries: tuple[TimesheetEntry, ...]) -> None: ...


class EntryCollection:
    """Owns the ordered list of entries, newest first.

    Every mutating call writes the whole collection back to the store. Fields
    passed to add() and update() must already have passed validation.
    """

    def __init__(
        self,
        store: EntryStore,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.id_factory = id_factory or new_entry_id
        self.clock = clock or utc_now
        self.last_save_error: StorageError | None = None
        self._entries: list[TimesheetEntry] = list(store.load_entries())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimesheetEntry]:
        return iter(tuple(self._entries))

    def __contains__(self, entry_id: object) -> bool:
        return self._index_of(entry_id) is not None

    def _index_of(self, entry_id: object) -> int | None:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return i
        return None

    def _unique_id(self) -> str:
        entry_id = self.id_factory()
        if entry_id not in self:
            return entry_id
        suffix = 1
        while f"{entry_id}-{suffix}" in self:
            suffix += 1
        return f"{entry_id}-{suffix}"

    def _persist(self) -> None:
        try:
            self.store.save_entries(tuple(self._entries))
        except StorageError as e:
            # In-memory state stays authoritative for the session
            logger.warning("Could not save entries: %s", e)
            self.last_save_error = e
        else:
            self.last_save_error = None

    def add(self, fields: Mapping[str, Any]) -> TimesheetEntry:
        """Create an entry from validated fields and put it first."""
        values = clean(fields)
        entry = TimesheetEntry(
            id=self._unique_id(),
            date=values["date"],
            project=values["project"],
            task=values["task"],
            hours=values["hours"],
            description=values.get("description", ""),
            created_at=self.clock(),
        )
        self._entries.insert(0, entry)
        self._persist()
        return entry

    def update(self, entry_id: str, fields: Mapping[str, Any]) -> TimesheetEntry:
        """Replace the supplied fields on an entry, keeping its id and position.

        Raises EntryNotFoundError if the id is not in the collection.
        """
        index = self._index_of(entry_id)
        if index is None:
            raise EntryNotFoundError(entry_id)

        updated = dataclasses.replace(self._entries[index], **clean(fields))
        self._entries[index] = updated
        self._persist()
        return updated

    def delete(self, entry_id: str) -> bool:
        """Remove an entry. Returns False if it was not there."""
        index = self._index_of(entry_id)
        if index is None:
            return False
        del self._entries[index]
        self._persist()
        return True

    def get(self, entry_id: str) -> TimesheetEntry | None:
        index = self._index_of(entry_id)
        return self._entries[index] if index is not None else None

    def list(self) -> tuple[TimesheetEntry, ...]:
        return tuple(self._entries)

    def total_hours(self) -> float:
        return sum((entry.hours for entry in self._entries), 0.0)
