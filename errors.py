"""Error codes and exceptions for timesheet operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ErrorCode(Enum):
    """Standardized error codes."""

    # Validation errors, reported per field
    MISSING_FIELD = auto()
    NOT_A_NUMBER = auto()
    OUT_OF_RANGE = auto()
    INVALID_DATE = auto()

    # Collection errors
    NOT_FOUND = auto()

    # Persistence errors
    STORAGE_UNAVAILABLE = auto()
    PARSE_FAILURE = auto()


@dataclass(frozen=True)
class FieldError:
    """A validation failure for a single form field."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return self.message


class TimesheetError(Exception):
    """Base class for timesheet errors."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EntryNotFoundError(TimesheetError):
    """An update referenced an entry id that is no longer in the collection."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, entry_id: str):
        super().__init__(f"No timesheet entry with id {entry_id!r}")
        self.entry_id = entry_id


class StorageError(TimesheetError):
    """Base class for persistence failures."""


class StorageUnavailable(StorageError):
    """The local database could not be read or written."""

    code = ErrorCode.STORAGE_UNAVAILABLE


class ParseFailure(StorageError):
    """Stored data is present but not in the expected shape."""

    code = ErrorCode.PARSE_FAILURE
