"""Light/dark display preference, persisted on every change."""

from __future__ import annotations

import logging
from typing import Protocol

from errors import StorageError
from models import Theme

logger = logging.getLogger(__name__)

TEXTUAL_THEMES = {
    Theme.LIGHT: "textual-light",
    Theme.DARK: "textual-dark",
}


class ThemeStore(Protocol):
    def load_theme(self) -> Theme: ...

    def save_theme(self, theme: Theme) -> None: ...


class ThemeManager:
    def __init__(self, store: ThemeStore):
        self.store = store
        self.last_save_error: StorageError | None = None
        self._theme = store.load_theme()

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def is_dark(self) -> bool:
        return self._theme is Theme.DARK

    @property
    def textual_theme(self) -> str:
        """Name of the matching built-in Textual theme."""
        return TEXTUAL_THEMES[self._theme]

    def set_theme(self, value: Theme | str) -> Theme:
        """Select a theme by member or token ('light'/'dark') and save it.

        Raises ValueError for anything else.
        """
        theme = value if isinstance(value, Theme) else Theme(value)
        self._theme = theme
        try:
            self.store.save_theme(theme)
        except StorageError as e:
            logger.warning("Could not save theme: %s", e)
            self.last_save_error = e
        else:
            self.last_save_error = None
        return theme

    def toggle(self) -> Theme:
        return self.set_theme(self._theme.opposite)
