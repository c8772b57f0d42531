"""Filter panel: search text entry and interactive value selection."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

from controller.commands import Command
from controller.events import KeyPressed
from controller.modes import FilterInput, FilterSelect, MainMode
from engine.filtering import STATE_GROUPS, unique_categories, unique_states, unique_tags, unique_trackers
from model.view_spec import FilterKind, FilterSpec

log = logging.getLogger(__name__)

# Main view letters that open a filter dimension
FILTER_SHORTCUTS = {
    "s": FilterKind.STATE,
    "c": FilterKind.CATEGORY,
    "t": FilterKind.TRACKER,
    "T": FilterKind.TAG,
}


def printable(event: KeyPressed) -> str | None:
    """The character a key types into a text field, if any."""
    if event.char and len(event.char) == 1 and event.char.isprintable():
        return event.char
    return None


class FilterKeysMixin:
    """Filter shortcuts on the main view and the two filter panel modes."""

    mode: Any
    filter: FilterSpec
    reconciler: Any
    _rederive: Callable

    def _filter_shortcut(self, key: str) -> list[Command] | None:
        """Handle a main view filter key. None if the key isn't one."""
        if key in ("f", "/"):
            self.mode = FilterInput(text=self.filter.search, backup=self.filter)
        elif key in FILTER_SHORTCUTS:
            kind = FILTER_SHORTCUTS[key]
            self.mode = FilterSelect(kind, self.filter_options(kind), backup=self.filter)
        elif key == "x":
            self.filter = FilterSpec()
            self._rederive()
        else:
            return None
        return []

    def filter_options(self, kind: FilterKind) -> list[str]:
        """Values offered for a dimension, taken from what the mirror holds."""
        torrents = self.reconciler.torrents()
        if kind is FilterKind.STATE:
            groups = list(STATE_GROUPS)
            return groups + [s for s in unique_states(torrents) if s not in STATE_GROUPS]
        if kind is FilterKind.CATEGORY:
            return sorted(set(self.reconciler.categories()) | set(unique_categories(torrents)))
        if kind is FilterKind.TRACKER:
            return unique_trackers(torrents)
        return sorted(set(self.reconciler.tags()) | set(unique_tags(torrents)))

    def _set_search(self, text: str) -> None:
        self.mode.text = text
        self.filter = replace(self.filter, search=text)
        self._rederive()

    def _filter_input_key(self, event: KeyPressed) -> list[Command]:
        mode: FilterInput = self.mode
        key = event.key
        if key == "escape":
            self.filter = mode.backup
            self.mode = MainMode()
            self._rederive()
        elif key == "enter":
            log.debug(f"Search committed: {mode.text!r}")
            self.mode = MainMode()
        elif key == "backspace":
            self._set_search(mode.text[:-1])
        elif key == "ctrl+u":
            self._set_search("")
        else:
            char = printable(event)
            if char is not None:
                self._set_search(mode.text + char)
        return []

    def _filter_select_key(self, event: KeyPressed) -> list[Command]:
        mode: FilterSelect = self.mode
        key = event.token
        if key == "escape":
            self.filter = mode.backup
            self.mode = MainMode()
            self._rederive()
        elif key == "enter":
            self.mode = MainMode()
        elif key in ("up", "k"):
            mode.cursor = max(0, mode.cursor - 1)
        elif key in ("down", "j"):
            mode.cursor = max(0, min(len(mode.options) - 1, mode.cursor + 1))
        elif key == "space":
            if 0 <= mode.cursor < len(mode.options):
                self.filter = self.filter.toggle(mode.kind, mode.options[mode.cursor])
                self._rederive()
        elif key == "a":
            if mode.kind is not FilterKind.CATEGORY:
                self.filter = self.filter.with_values(mode.kind, tuple(mode.options))
                self._rederive()
        elif key == "n":
            self.filter = self.filter.with_values(mode.kind, ())
            self._rederive()
        return []
