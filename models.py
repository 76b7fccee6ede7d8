from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from errors import ParseFailure

RECORD_FIELDS = ("id", "date", "project", "task", "hours", "description", "createdAt")
EDITABLE_FIELDS = ("date", "project", "task", "hours", "description")


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def opposite(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


@dataclass
class TimesheetEntry:
    id: str
    date: date
    project: str
    task: str
    hours: float
    created_at: datetime
    description: str = ""

    def to_record(self) -> dict[str, Any]:
        """Serialise to the persisted JSON object."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "project": self.project,
            "task": self.task,
            "hours": self.hours,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: Any) -> TimesheetEntry:
        """Rebuild an entry from a persisted JSON object.

        Raises ParseFailure if the record is missing fields or holds values of
        the wrong type.
        """
        if not isinstance(record, dict):
            raise ParseFailure(f"Entry record is not an object: {record!r}")

        missing = [name for name in RECORD_FIELDS if name not in record]
        if missing:
            raise ParseFailure(f"Entry record missing fields: {', '.join(missing)}")

        for name in ("id", "date", "project", "task", "description", "createdAt"):
            if not isinstance(record[name], str):
                raise ParseFailure(f"Entry field {name!r} is not a string")

        hours = record["hours"]
        # bool is an int subclass
        if isinstance(hours, bool) or not isinstance(hours, (int, float)):
            raise ParseFailure("Entry field 'hours' is not a number")

        try:
            hours = float(hours)
        except OverflowError as e:
            raise ParseFailure(f"Entry {record['id']!r} has out-of-range hours") from e
        if not math.isfinite(hours):
            raise ParseFailure(f"Entry {record['id']!r} has non-finite hours")

        try:
            entry_date = date.fromisoformat(record["date"])
            created_at = datetime.fromisoformat(record["createdAt"])
        except ValueError as e:
            raise ParseFailure(f"Entry {record['id']!r} has a bad date: {e}") from e

        return cls(
            id=record["id"],
            date=entry_date,
            project=record["project"],
            task=record["task"],
            hours=hours,
            description=record["description"],
            created_at=created_at,
        )
