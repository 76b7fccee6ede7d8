"""Validation rules for timesheet entry fields.

The validator checks every field independently and collects the failures into
a mapping of field name to FieldError, so a form can show all problems at once.
An empty mapping means the candidate can be handed to the entry collection.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from errors import ErrorCode, FieldError
from models import EDITABLE_FIELDS

MAX_HOURS = 24


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_date(value: Any) -> date | None:
    """Parse a YYYY-MM-DD string (or pass through a date). None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_hours(value: Any) -> float | None:
    """Parse an hours value to float. None if it is not a number."""
    if isinstance(value, bool):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(hours):
        return None
    return hours


def _check_date(value: Any, today: date) -> FieldError | None:
    if _is_blank(value):
        return FieldError(ErrorCode.MISSING_FIELD, "Date is required")
    parsed = parse_date(value)
    if parsed is None:
        return FieldError(ErrorCode.INVALID_DATE, "Date must be YYYY-MM-DD")
    if parsed > today:
        return FieldError(ErrorCode.OUT_OF_RANGE, "Date cannot be in the future")
    return None


def _check_hours(value: Any) -> FieldError | None:
    if _is_blank(value):
        return FieldError(ErrorCode.MISSING_FIELD, "Hours are required")
    hours = parse_hours(value)
    if hours is None:
        return FieldError(ErrorCode.NOT_A_NUMBER, "Hours must be a number")
    if hours <= 0:
        return FieldError(ErrorCode.OUT_OF_RANGE, "Hours must be a positive number")
    if hours > MAX_HOURS:
        return FieldError(ErrorCode.OUT_OF_RANGE, f"Hours cannot exceed {MAX_HOURS}")
    return None


def validate(fields: Mapping[str, Any], today: date | None = None) -> dict[str, FieldError]:
    """Return a FieldError for every field that fails its rule."""
    today = today or date.today()
    errors: dict[str, FieldError] = {}

    date_error = _check_date(fields.get("date"), today)
    if date_error:
        errors["date"] = date_error

    if _is_blank(fields.get("project")):
        errors["project"] = FieldError(ErrorCode.MISSING_FIELD, "Project name is required")

    if _is_blank(fields.get("task")):
        errors["task"] = FieldError(ErrorCode.MISSING_FIELD, "Task description is required")

    hours_error = _check_hours(fields.get("hours"))
    if hours_error:
        errors["hours"] = hours_error

    return errors


def is_valid(fields: Mapping[str, Any], today: date | None = None) -> bool:
    return not validate(fields, today)


def clean(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Coerce validated fields to their stored types.

    Only editable keys present in ``fields`` are returned, so a partial update
    stays partial. Raises ValueError if a field cannot be coerced.
    """
    cleaned: dict[str, Any] = {}
    for name in EDITABLE_FIELDS:
        if name not in fields:
            continue
        value = fields[name]
        if name == "date":
            parsed_date = parse_date(value)
            if parsed_date is None:
                raise ValueError(f"Invalid date: {value!r}")
            cleaned[name] = parsed_date
        elif name == "hours":
            hours = parse_hours(value)
            if hours is None:
                raise ValueError(f"Invalid hours: {value!r}")
            cleaned[name] = hours
        elif name == "description":
            cleaned[name] = "" if value is None else str(value)
        else:
            cleaned[name] = str(value).strip()
    return cleaned
