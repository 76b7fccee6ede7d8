"""Modal screens for the timesheet application."""

from __future__ import annotations

from datetime import date
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label
from textual.screen import ModalScreen

from errors import FieldError
from models import TimesheetEntry
from utils import format_date, format_hours
from validation import validate


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Asks before deleting an entry, showing what will be removed."""

    CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }

    #delete-dialog {
        width: 56;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    #delete-title {
        width: 100%;
        text-style: bold;
        margin-bottom: 1;
    }

    #delete-summary {
        color: $text-muted;
        margin-bottom: 1;
    }

    #delete-buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
    }

    #delete-buttons Button {
        width: 1fr;
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Keep"),
        Binding("y", "confirm", "Delete"),
        Binding("n", "cancel", "Keep"),
    ]

    MESSAGE = "Are you sure you want to delete this entry?"

    def __init__(self, entry: TimesheetEntry):
        super().__init__()
        self.entry = entry

    def summary(self) -> str:
        """One-line description of the entry being deleted."""
        return (
            f"{format_date(self.entry.date)}  {self.entry.project} / {self.entry.task}"
            f"  {format_hours(self.entry.hours)}h"
        )

    def compose(self) -> ComposeResult:
        with Vertical(id="delete-dialog"):
            yield Label("Delete entry", id="delete-title")
            yield Label(self.summary(), id="delete-summary")
            yield Label(self.MESSAGE)
            with Horizontal(id="delete-buttons"):
                yield Button("Delete (Y)", variant="error", id="delete")
                yield Button("Keep (N)", variant="default", id="keep")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class EntryFormScreen(ModalScreen[dict | None]):
    """Modal form for adding a new entry or editing an existing one.

    Dismisses with the raw field values once they pass validation, or None if
    cancelled. Validation errors are shown under each field.
    """

    CSS = """
    EntryFormScreen {
        align: center middle;
    }

    #entry-dialog {
        width: 70;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    #entry-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .field-group {
        width: 1fr;
        height: auto;
        margin: 0 1 0 0;
    }

    .field-group:last-of-type {
        margin-right: 0;
    }

    .field-label {
        height: 1;
        margin-bottom: 0;
        color: $text-muted;
    }

    .field-error {
        height: auto;
        color: $error;
    }

    .field-row {
        width: 100%;
        height: auto;
        margin-bottom: 1;
    }

    .field-row Input {
        width: 100%;
    }

    #entry-buttons {
        width: 100%;
        height: auto;
        margin-top: 1;
        align: center middle;
    }

    #entry-buttons Button {
        width: auto;
        min-width: 12;
        margin: 0 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    # Field order for Enter key navigation
    FIELD_ORDER = ["date", "project", "task", "hours", "description"]

    LABELS = {
        "date": "Date (YYYY-MM-DD) *",
        "project": "Project *",
        "task": "Task *",
        "hours": "Hours *",
        "description": "Description",
    }

    PLACEHOLDERS = {
        "date": "2024-01-05",
        "project": "Enter project name",
        "task": "Enter task name",
        "hours": "0.0",
        "description": "Enter additional details (optional)",
    }

    def __init__(self, entry: TimesheetEntry | None = None, today: date | None = None):
        super().__init__()
        self.entry = entry  # None means adding
        self.today = today
        self.errors: dict[str, FieldError] = {}

    def initial_values(self) -> dict[str, str]:
        """Input values to pre-fill the form with."""
        if not self.entry:
            return {name: "" for name in self.FIELD_ORDER}
        return {
            "date": self.entry.date.isoformat(),
            "project": self.entry.project,
            "task": self.entry.task,
            "hours": f"{self.entry.hours:g}",
            "description": self.entry.description,
        }

    def _field(self, name: str, value: str) -> ComposeResult:
        with Vertical(classes="field-group", id=f"{name}-group"):
            yield Label(self.LABELS[name], classes="field-label")
            yield Input(value=value, placeholder=self.PLACEHOLDERS[name], id=name)
            yield Label("", classes="field-error", id=f"{name}-error")

    def compose(self) -> ComposeResult:
        title = "Edit Timesheet Entry" if self.entry else "Add Timesheet Entry"
        values = self.initial_values()
        with Vertical(id="entry-dialog"):
            yield Label(title, id="entry-title")

            with Horizontal(classes="field-row"):
                yield from self._field("date", values["date"])
                yield from self._field("project", values["project"])

            with Horizontal(classes="field-row"):
                yield from self._field("task", values["task"])
                yield from self._field("hours", values["hours"])

            with Horizontal(classes="field-row"):
                yield from self._field("description", values["description"])

            with Horizontal(id="entry-buttons"):
                yield Button("Save" if self.entry else "Add Entry", variant="primary", id="save")
                yield Button("Cancel", variant="default", id="cancel")

    def on_mount(self) -> None:
        """Focus the first field on mount."""
        self.query_one("#date", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Move to next field on Enter, or save if on last field."""
        current_id = event.input.id
        if current_id in self.FIELD_ORDER:
            current_idx = self.FIELD_ORDER.index(current_id)
            if current_idx < len(self.FIELD_ORDER) - 1:
                next_id = self.FIELD_ORDER[current_idx + 1]
                self.query_one(f"#{next_id}", Input).focus()
            else:
                self._save_entry()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Clear a field's error once the user starts typing in it."""
        name = event.input.id
        if name in self.errors:
            del self.errors[name]
            self.query_one(f"#{name}-error", Label).update("")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "save":
            self._save_entry()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def check_fields(self, fields: dict[str, Any]) -> dict[str, FieldError]:
        """Validate fields and remember the errors for display."""
        self.errors = validate(fields, self.today)
        return self.errors

    def _show_errors(self) -> None:
        for name in self.FIELD_ORDER:
            error = self.errors.get(name)
            self.query_one(f"#{name}-error", Label).update(error.message if error else "")

    def _save_entry(self) -> None:
        fields = {name: self.query_one(f"#{name}", Input).value for name in self.FIELD_ORDER}

        if self.check_fields(fields):
            self._show_errors()
            first_invalid = next(name for name in self.FIELD_ORDER if name in self.errors)
            self.query_one(f"#{first_invalid}", Input).focus()
            self.app.notify("Please fix the highlighted fields", severity="error")
            return

        self.dismiss(fields)
