"""Utility functions for timesheet display and entry identity."""

from __future__ import annotations

import time
from datetime import date, datetime, timezone


def format_date(d: date) -> str:
    """Format a date for display, e.g. 'Jan 05, 2024'."""
    return d.strftime("%b %d, %Y")


def format_hours(hours: float) -> str:
    """Format hours to one decimal place."""
    return f"{hours:.1f}"


def format_description(description: str) -> str:
    return description.strip() or "-"


def new_entry_id() -> str:
    """Generate an entry id from a nanosecond timestamp."""
    return str(time.time_ns())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
