"""Key handling for the torrent list, the details view and the column configurator."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable

from controller.browser import RemoteBrowser
from controller.commands import Command, FetchDetails, FetchSync, PauseTorrents, ResumeTorrents
from controller.events import KeyPressed
from controller.modes import (
    AddDialog,
    ColumnConfig,
    DeleteDialog,
    DetailsMode,
    DetailsTab,
    MainMode,
    RelocateDialog,
)
from engine.sorting import set_sort, toggle_sort
from model.columns import COLUMN_CATALOG, toggle_column
from model.view_spec import SortDirection

if TYPE_CHECKING:
    from model.torrent import Torrent

log = logging.getLogger(__name__)

# Digits sort ascending by visible column, shifted digits on a US layout descending
SORT_DIGITS = {str(n): n for n in range(1, 10)}
SHIFTED_DIGITS = {"!": 1, "@": 2, "#": 3, "$": 4, "%": 5, "^": 6, "&": 7, "*": 8, "(": 9}

# Column configurator: one key per catalog column, in declaration order
COLUMN_TOGGLE_KEYS = ("1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "q", "w", "e", "r")

DETAILS_TAB_KEYS = {"1": DetailsTab.GENERAL, "2": DetailsTab.TRACKERS, "3": DetailsTab.PEERS, "4": DetailsTab.FILES}


class ListKeysMixin:
    """Main view, details view and column configurator keys."""

    mode: Any
    view: list
    cursor: int
    columns: tuple
    sort: Any
    show_help: bool
    filter: Any
    selected_hash: str | None
    polls_in_flight: int
    reconciler: Any
    _rederive: Callable
    _show_error: Callable
    _new_generation: Callable
    _new_file_browser: Callable
    _request_listing: Callable
    _filter_shortcut: Callable
    visible_column_keys: Callable
    page_size: Callable
    details_max_scroll: Callable

    def _main_key(self, event: KeyPressed) -> list[Command]:
        key = event.token
        if key in ("up", "k"):
            self._move_cursor(-1)
        elif key in ("down", "j"):
            self._move_cursor(1)
        elif key == "pageup":
            self._move_cursor(-self.page_size())
        elif key == "pagedown":
            self._move_cursor(self.page_size())
        elif key in ("home", "g"):
            self._move_cursor(-len(self.view))
        elif key in ("end", "G"):
            self._move_cursor(len(self.view))
        elif key == "enter":
            return self._open_details()
        elif key == "escape":
            self._main_escape()
        elif key == "C":
            self.mode = ColumnConfig()
        elif key in SORT_DIGITS:
            self._sort_by_index(SORT_DIGITS[key], None)
        elif key in SHIFTED_DIGITS:
            self._sort_by_index(SHIFTED_DIGITS[key], SortDirection.DESC)
        else:
            commands = self._filter_shortcut(key)
            if commands is not None:
                return commands
            return self._common_key(key)
        return []

    def _main_escape(self) -> None:
        if self.show_help:
            self.show_help = False
        elif self.filter.search:
            self.filter = replace(self.filter, search="")
            self._rederive()

    def _common_key(self, key: str) -> list[Command]:
        """Keys shared by the list and the details view."""
        if key in ("r", "ctrl+r"):
            return self.refresh()
        if key == "?":
            self.show_help = not self.show_help
        elif key == "p":
            return self._pause_or_resume(pause=True)
        elif key == "u":
            return self._pause_or_resume(pause=False)
        elif key == "d":
            return self._open_delete()
        elif key == "l":
            return self._open_relocate()
        elif key == "a":
            self.mode = AddDialog(previous=self.mode, browser=self._new_file_browser())
        return []

    def _move_cursor(self, delta: int) -> None:
        if not self.view:
            self.cursor = 0
            self.selected_hash = None
            return
        self.cursor = max(0, min(len(self.view) - 1, self.cursor + delta))
        self.selected_hash = self.view[self.cursor].hash

    def _sort_by_index(self, index: int, direction: SortDirection | None) -> None:
        keys = self.visible_column_keys()
        if index > len(keys):
            return
        column = keys[index - 1]
        if direction is None:
            self.sort = toggle_sort(self.sort, column)
        else:
            self.sort = set_sort(self.sort, column, direction)
        log.debug(f"Sort: {self.sort.column} {self.sort.direction.value}")
        self._rederive()

    def action_target(self) -> Torrent | None:
        """Torrent the action keys apply to."""
        if isinstance(self.mode, DetailsMode):
            return self.reconciler.get(self.mode.torrent_hash)
        if 0 <= self.cursor < len(self.view):
            return self.view[self.cursor]
        return None

    def _pause_or_resume(self, pause: bool) -> list[Command]:
        torrent = self.action_target()
        if torrent is None:
            return self._show_error("no torrent selected")
        if pause:
            return [PauseTorrents((torrent.hash,), torrent.name)]
        return [ResumeTorrents((torrent.hash,), torrent.name)]

    def _open_delete(self) -> list[Command]:
        torrent = self.action_target()
        if torrent is None:
            return self._show_error("no torrent selected")
        self.mode = DeleteDialog(torrent.hash, torrent.name, previous=self.mode)
        return []

    def _open_relocate(self) -> list[Command]:
        torrent = self.action_target()
        if torrent is None:
            return self._show_error("no torrent selected")
        start = torrent.save_path or "/"
        dialog = RelocateDialog(
            torrent.hash,
            torrent.name,
            previous=self.mode,
            generation=self._new_generation(),
            text=torrent.save_path,
            browser=RemoteBrowser(start),
        )
        self.mode = dialog
        return self._request_listing(dialog, start)

    def _open_details(self) -> list[Command]:
        torrent = self.action_target()
        if torrent is None:
            return []
        self.mode = DetailsMode(torrent.hash)
        self.show_help = False
        return [FetchDetails(torrent.hash)]

    def _details_key(self, event: KeyPressed) -> list[Command]:
        mode: DetailsMode = self.mode
        key = event.token
        if key == "escape":
            if self.show_help:
                self.show_help = False
            else:
                self.mode = MainMode()
        elif key in DETAILS_TAB_KEYS:
            mode.tab = DETAILS_TAB_KEYS[key]
            mode.scroll = 0
        elif key == "tab":
            mode.tab = DetailsTab((mode.tab.value + 1) % len(DetailsTab))
            mode.scroll = 0
        elif key == "right":
            mode.tab = DetailsTab(min(mode.tab.value + 1, len(DetailsTab) - 1))
            mode.scroll = 0
        elif key == "left":
            mode.tab = DetailsTab(max(mode.tab.value - 1, 0))
            mode.scroll = 0
        elif key in ("up", "k"):
            mode.scroll = max(0, mode.scroll - 1)
        elif key in ("down", "j"):
            mode.scroll = min(self.details_max_scroll(), mode.scroll + 1)
        elif key == "g":
            mode.scroll = 0
        elif key == "G":
            mode.scroll = self.details_max_scroll()
        else:
            return self._common_key(key)
        return []

    def _column_config_key(self, event: KeyPressed) -> list[Command]:
        key = event.token
        if key in ("C", "c", "escape"):
            self.mode = MainMode()
        elif key in COLUMN_TOGGLE_KEYS:
            column = COLUMN_CATALOG[COLUMN_TOGGLE_KEYS.index(key)]
            toggled = toggle_column(self.columns, column.key)
            if not any(c.visible for c in toggled):
                log.debug("Refusing to hide the last visible column")
                return []
            self.columns = toggled
        return []

    def refresh(self) -> list[Command]:
        """Poll now, regardless of the poll timer."""
        self.polls_in_flight += 1
        commands: list[Command] = [FetchSync(self.reconciler.rid)]
        if isinstance(self.mode, DetailsMode):
            commands.append(FetchDetails(self.mode.torrent_hash))
        return commands
