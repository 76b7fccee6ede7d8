"""Custom widgets for the timesheet application."""

from __future__ import annotations

from textual.widgets import Static
from rich.text import Text

from models import Theme
from utils import format_hours


class AppHeader(Static):
    """Shows the app title on the left and the theme toggle hint on the right."""

    HEADER_TITLE = "Timesheet Tracker"

    def __init__(self, line_width: int = 74, **kwargs):
        super().__init__(**kwargs)
        self.line_width = line_width

    def update_display(self, theme: Theme):
        # Offer the theme the user would switch to
        toggle = "[t] Dark" if theme is Theme.LIGHT else "[t] Light"

        text = Text()
        text.append(self.HEADER_TITLE, style="bold")
        spacing = self.line_width - len(self.HEADER_TITLE) - len(toggle)
        text.append(" " * max(spacing, 2))
        text.append(toggle, style="bold")

        self.update(text)


class TotalHours(Static):
    """Shows the running total of hours and the entry count."""

    def update_display(self, total: float, count: int):
        text = Text()
        text.append("Total Hours: ")
        text.append(format_hours(total), style="bold")
        noun = "entry" if count == 1 else "entries"
        text.append(f"   ({count} {noun})", style="dim")
        self.update(text)


class EmptyState(Static):
    """Placeholder shown when there are no entries."""

    def update_display(self, is_empty: bool):
        if is_empty:
            text = Text()
            text.append("No timesheet entries yet.\n", style="bold")
            text.append("Add your first entry by pressing 'a'.", style="dim")
            self.update(text)
            self.remove_class("hidden")
        else:
            self.update("")
            self.add_class("hidden")
