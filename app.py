#!/usr/bin/env python3
"""Timesheet TUI application."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.coordinate import Coordinate
from textual.widgets import DataTable, Footer

import storage
from entries import EntryCollection
from errors import EntryNotFoundError
from models import TimesheetEntry
from screens import ConfirmDeleteScreen, EntryFormScreen
from theme import ThemeManager
from utils import format_date, format_description, format_hours
from widgets import AppHeader, EmptyState, TotalHours

logger = logging.getLogger(__name__)


class TimesheetApp(App):
    """Main timesheet application."""

    CSS = """
    Screen {
        background: $surface;
    }

    #app-header {
        height: auto;
        background: $primary;
        color: $text;
        padding: 0 1;
        text-style: bold;
    }

    #entries-table {
        height: 1fr;
        margin: 1 2;
    }

    #empty-state {
        height: auto;
        padding: 1 2;
        color: $text;
    }

    #total-hours {
        height: auto;
        padding: 0 2 1 2;
        color: $text;
    }

    .hidden {
        display: none;
    }

    DataTable {
        height: 100%;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_entry", "Add"),
        Binding("e", "edit_entry", "Edit"),
        Binding("d", "delete_entry", "Delete"),
        Binding("t", "toggle_theme", "Theme"),
    ]

    def __init__(self, store=storage):
        super().__init__()
        if store is storage:
            storage.init_db()

        self.collection = EntryCollection(store)
        self.theme_manager = ThemeManager(store)
        logger.info(
            "Loaded %d entries, theme %s",
            len(self.collection),
            self.theme_manager.theme.value,
        )

    def compose(self) -> ComposeResult:
        yield AppHeader(id="app-header")
        yield Container(DataTable(id="entries-table"), id="table-container")
        yield EmptyState(id="empty-state")
        yield TotalHours(id="total-hours")
        yield Footer()

    def on_mount(self):
        table = self.query_one("#entries-table", DataTable)
        table.cursor_type = "row"
        table.add_column("Date", width=12)
        table.add_column("Project", width=16)
        table.add_column("Task", width=16)
        table.add_column("Hours", width=6)
        table.add_column("Description", width=30)

        self._apply_theme()
        self._refresh_display()
        table.focus()

    def _entry_row(self, entry: TimesheetEntry) -> tuple[str, str, str, str, str]:
        """Display cells for one entry."""
        return (
            format_date(entry.date),
            entry.project,
            entry.task,
            format_hours(entry.hours),
            format_description(entry.description),
        )

    def _refresh_display(self):
        """Re-read the collection and redraw the table and totals."""
        table = self.query_one("#entries-table", DataTable)
        cursor_row = table.cursor_row
        table.clear()

        entries = self.collection.list()
        for entry in entries:
            table.add_row(*self._entry_row(entry), key=entry.id)

        if entries:
            table.move_cursor(row=min(cursor_row, len(entries) - 1))

        self.query_one("#empty-state", EmptyState).update_display(not entries)
        self.query_one("#total-hours", TotalHours).update_display(
            self.collection.total_hours(), len(entries)
        )

    def _apply_theme(self):
        self.theme = self.theme_manager.textual_theme
        self.query_one("#app-header", AppHeader).update_display(self.theme_manager.theme)

    def _warn_if_unsaved(self, manager) -> None:
        """Tell the user when the last change could not be written to disk."""
        if manager.last_save_error:
            self.notify(
                "Could not save changes. They are kept for this session only.",
                severity="warning",
            )

    def _get_selected_entry(self) -> TimesheetEntry | None:
        """Get the entry under the table cursor."""
        table = self.query_one("#entries-table", DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(Coordinate(table.cursor_row, 0)).row_key
        if row_key:
            return self.collection.get(str(row_key.value))
        return None

    def action_add_entry(self):
        """Open the form for a new entry."""
        self.push_screen(EntryFormScreen(), self._on_add_complete)

    def _on_add_complete(self, result: dict | None) -> None:
        """Handle result from the add form."""
        if not result:
            return
        entry = self.collection.add(result)
        self.notify(f"Added {format_hours(entry.hours)}h to {entry.project}")
        self._warn_if_unsaved(self.collection)
        self._refresh_display()

    def action_edit_entry(self):
        """Open the form for the selected entry."""
        entry = self._get_selected_entry()
        if not entry:
            self.notify("No entry selected", severity="warning")
            return
        self.push_screen(
            EntryFormScreen(entry),
            lambda result: self._on_edit_complete(result, entry.id),
        )

    def _on_edit_complete(self, result: dict | None, entry_id: str) -> None:
        """Handle result from the edit form."""
        if not result:
            return
        try:
            entry = self.collection.update(entry_id, result)
        except EntryNotFoundError:
            logger.warning("Edited entry %s no longer exists", entry_id)
            self.notify("That entry no longer exists. The list has been refreshed.", severity="error")
        else:
            self.notify(f"Updated {entry.project} on {format_date(entry.date)}")
            self._warn_if_unsaved(self.collection)
        self._refresh_display()

    def action_delete_entry(self):
        """Ask before deleting the selected entry."""
        entry = self._get_selected_entry()
        if not entry:
            self.notify("No entries to delete", severity="warning")
            return
        self.push_screen(
            ConfirmDeleteScreen(entry),
            lambda confirmed: self._on_delete_confirmed(confirmed, entry.id),
        )

    def _on_delete_confirmed(self, confirmed: bool | None, entry_id: str) -> None:
        """Handle delete confirmation."""
        if not confirmed:
            return
        if self.collection.delete(entry_id):
            self.notify("Deleted entry")
            self._warn_if_unsaved(self.collection)
        self._refresh_display()

    def action_toggle_theme(self):
        """Switch between light and dark."""
        self.theme_manager.toggle()
        self._apply_theme()
        self._warn_if_unsaved(self.theme_manager)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter on a row edits it."""
        self.action_edit_entry()


def _configure_logging(db_path: Path) -> None:
    """Log to a rotating file beside the database so output never draws over the TUI."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(logging.INFO)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        db_path.parent / "timesheet.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)


def db_info_lines(db_path: Path) -> list[str]:
    """Describe the database file and what it holds."""
    from datetime import datetime

    lines = [f"Database: {db_path}"]
    if not db_path.exists():
        lines.append("Status: Does not exist (will be created on first run)")
        return lines

    stat = db_path.stat()
    modified = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    lines.append(f"Modified: {modified}  Size: {stat.st_size:,} bytes")

    entries = storage.load_entries()
    total = sum(entry.hours for entry in entries)
    lines.append(f"Entries: {len(entries)}  Total Hours: {format_hours(total)}")
    lines.append(f"Theme: {storage.load_theme().value}")
    return lines


def main():
    import sys
    if len(sys.argv) > 1 and sys.argv[1] == "--db-info":
        print("\n".join(db_info_lines(storage.DB_PATH)))
        return

    _configure_logging(storage.DB_PATH)
    app = TimesheetApp()
    app.run()


if __name__ == "__main__":
    main()
