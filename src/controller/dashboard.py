"""Dashboard state machine.

`Dashboard.update(event)` is the single entry point: it mutates the
dashboard state and returns the commands the shell should carry out. It
never performs network I/O itself; results of commands come back later as
events.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from controller.browser import LocalFileBrowser
from controller.commands import Command, FetchSync, Quit, StartTimer
from controller.dialog_keys import DialogKeysMixin, edit_text
from controller.events import (
    DetailsLoaded,
    DirectoryListed,
    KeyPressed,
    MutationFailed,
    MutationSucceeded,
    Pasted,
    PollTick,
    Resized,
    SyncFailed,
    SyncReceived,
    TimerFired,
    TimerKind,
    UiTick,
)
from controller.filter_keys import FilterKeysMixin
from controller.list_keys import ListKeysMixin
from controller.modes import (
    AddDialog,
    AddSource,
    ColumnConfig,
    DeleteDialog,
    DetailsMode,
    DetailsTab,
    FilterInput,
    FilterSelect,
    MainMode,
    Mode,
    RelocateDialog,
    RelocateInput,
    is_dialog,
)
from engine.filtering import apply_filter
from engine.layout import ColumnWidth, compute_layout
from engine.reconciler import SyncReconciler
from engine.sorting import sort_torrents
from model.columns import catalog_with_visible
from model.torrent import Torrent
from model.view_spec import FilterSpec, SortDirection, SortSpec

if TYPE_CHECKING:
    from config import AppConfig

log = logging.getLogger(__name__)

QUIT_KEY = "ctrl+c"

ERROR_BANNER_SECONDS = 5.0
SUCCESS_BANNER_SECONDS = 3.0
DELAYED_REFRESH_SECONDS = 0.5

# Separator between list columns
COLUMN_GAP = 1
# Rows taken by the chrome around the list (stats, filter bar, header, banner, hints)
LIST_CHROME_ROWS = 6
# Rows taken by the chrome around a details tab
DETAILS_CHROME_ROWS = 9
GENERAL_TAB_ROWS = 24


class Dashboard(DialogKeysMixin, FilterKeysMixin, ListKeysMixin):
    """All state behind the dashboard, and the transitions between states."""

    def __init__(
        self,
        config: AppConfig,
        file_browser_factory: Callable[[], LocalFileBrowser] | None = None,
    ) -> None:
        self.config = config
        self.reconciler = SyncReconciler()
        self.filter = FilterSpec()
        default_sort = config.ui.default_sort
        self.sort = SortSpec(
            column=default_sort.column,
            direction=SortDirection(default_sort.direction),
            secondary=None if default_sort.column == "name" else "name",
        )
        self.columns = catalog_with_visible(config.ui.columns)
        self.mode: Mode = MainMode()
        self.view: list[Torrent] = []
        self.cursor = 0
        self.selected_hash: str | None = None
        self.width = 120
        self.height = 40
        self.show_help = False
        self.loading = True
        self.error: str | None = None
        self.success: str | None = None
        self._error_token = 0
        self._success_token = 0
        self.polls_in_flight = 0
        self.last_update: float | None = None
        self.now = 0.0
        self._generation = 0
        self._file_browser_factory = file_browser_factory or LocalFileBrowser
        self._key_handlers: dict[type, Callable[[KeyPressed], list[Command]]] = {
            AddDialog: self._add_key,
            RelocateDialog: self._relocate_key,
            DeleteDialog: self._delete_key,
            FilterInput: self._filter_input_key,
            FilterSelect: self._filter_select_key,
            ColumnConfig: self._column_config_key,
            DetailsMode: self._details_key,
            MainMode: self._main_key,
        }

    # =========================================================================
    # Event dispatch
    # =========================================================================

    def start(self) -> list[Command]:
        """Commands to issue when the shell starts: the initial full sync."""
        self.polls_in_flight += 1
        return [FetchSync(self.reconciler.rid)]

    def update(self, event) -> list[Command]:
        """Apply one event and return the commands it produces."""
        if isinstance(event, KeyPressed):
            if event.key == QUIT_KEY:
                return [Quit()]
            return self._key_handlers[type(self.mode)](event)
        if isinstance(event, Pasted):
            self._on_paste(event.text)
        elif isinstance(event, Resized):
            self.width, self.height = event.width, event.height
        elif isinstance(event, PollTick):
            return self._on_poll_tick()
        elif isinstance(event, UiTick):
            self.now = event.now
        elif isinstance(event, SyncReceived):
            self._on_sync(event)
        elif isinstance(event, SyncFailed):
            self.polls_in_flight = max(0, self.polls_in_flight - 1)
            return self._show_error(event.message)
        elif isinstance(event, MutationSucceeded):
            commands = self._show_success(event.message)
            commands.append(StartTimer(TimerKind.DELAYED_REFRESH, DELAYED_REFRESH_SECONDS))
            return commands
        elif isinstance(event, MutationFailed):
            return self._show_error(event.message)
        elif isinstance(event, DirectoryListed):
            return self._on_directory_listed(event)
        elif isinstance(event, DetailsLoaded):
            self._on_details_loaded(event)
        elif isinstance(event, TimerFired):
            return self._on_timer(event)
        else:
            log.warning(f"Unhandled event {event!r}")
        return []

    def _on_poll_tick(self) -> list[Command]:
        if self.polls_in_flight:
            log.debug("Poll still in flight, skipping tick")
            return []
        return self.refresh()

    def _on_sync(self, event: SyncReceived) -> None:
        self.polls_in_flight = max(0, self.polls_in_flight - 1)
        result = self.reconciler.apply(event.delta)
        self.loading = False
        self.last_update = event.received_at
        self.now = max(self.now, event.received_at)
        if result.changed or event.delta.full_update:
            self._rederive()
        if isinstance(self.mode, DetailsMode) and self.mode.torrent_hash not in self.reconciler:
            log.info(f"Torrent {self.mode.torrent_hash} removed, leaving details")
            self.mode = MainMode()

    def _on_details_loaded(self, event: DetailsLoaded) -> None:
        mode = self.base_mode
        if not isinstance(mode, DetailsMode) or mode.torrent_hash != event.torrent_hash:
            return
        mode.loading = False
        mode.error = event.error
        if event.details is not None:
            mode.details = event.details

    def _on_timer(self, event: TimerFired) -> list[Command]:
        if event.kind is TimerKind.CLEAR_ERROR and event.token == self._error_token:
            self.error = None
        elif event.kind is TimerKind.CLEAR_SUCCESS and event.token == self._success_token:
            self.success = None
        elif event.kind is TimerKind.DELAYED_REFRESH:
            return self.refresh()
        return []

    def _on_paste(self, text: str) -> None:
        text = " ".join(text.splitlines()).strip()
        if not text:
            return
        mode = self.mode
        for char in text:
            key = KeyPressed(char, char)
            if isinstance(mode, FilterInput):
                self._set_search(mode.text + char)
            elif isinstance(mode, RelocateDialog) and mode.input is RelocateInput.TEXT:
                mode.text = edit_text(mode.text, key)
            elif isinstance(mode, AddDialog) and mode.source is AddSource.URL:
                mode.url = edit_text(mode.url, key)
            elif isinstance(mode, AddDialog) and mode.browser.search_mode:
                mode.browser.type_text(char)

    # =========================================================================
    # Banners
    # =========================================================================

    def _show_error(self, message: str) -> list[Command]:
        log.error(message)
        self.error = message
        self._error_token += 1
        return [StartTimer(TimerKind.CLEAR_ERROR, ERROR_BANNER_SECONDS, self._error_token)]

    def _show_success(self, message: str) -> list[Command]:
        log.info(message)
        self.success = message
        self._success_token += 1
        return [StartTimer(TimerKind.CLEAR_SUCCESS, SUCCESS_BANNER_SECONDS, self._success_token)]

    # =========================================================================
    # Derived view
    # =========================================================================

    def _rederive(self) -> None:
        """Recompute the filtered, sorted view and keep the cursor on its torrent."""
        filtered = apply_filter(self.reconciler.torrents(), self.filter)
        self.view = sort_torrents(filtered, self.sort)
        if self.selected_hash is not None:
            for i, torrent in enumerate(self.view):
                if torrent.hash == self.selected_hash:
                    self.cursor = i
                    break
        self.cursor = max(0, min(self.cursor, len(self.view) - 1))
        self.selected_hash = self.view[self.cursor].hash if self.view else None

    def _new_file_browser(self) -> LocalFileBrowser:
        return self._file_browser_factory()

    @property
    def list_width(self) -> int:
        return max(1, self.width - 2)

    def layout(self) -> list[ColumnWidth]:
        return compute_layout(self.columns, self.list_width, gap=COLUMN_GAP)

    def visible_column_keys(self) -> list[str]:
        return [cw.column.key for cw in self.layout()]

    def page_size(self) -> int:
        return max(1, self.height - LIST_CHROME_ROWS)

    def details_max_scroll(self) -> int:
        mode = self.mode
        if not isinstance(mode, DetailsMode):
            return 0
        rows = GENERAL_TAB_ROWS
        if mode.details is not None:
            rows = {
                DetailsTab.GENERAL: GENERAL_TAB_ROWS,
                DetailsTab.TRACKERS: len(mode.details.trackers) * 2,
                DetailsTab.PEERS: len(mode.details.peers) + 1,
                DetailsTab.FILES: len(mode.details.files) + 1,
            }[mode.tab]
        return max(0, rows - max(1, self.height - DETAILS_CHROME_ROWS))

    @property
    def base_mode(self) -> Mode:
        """The list or details view underneath an open dialog."""
        return self.mode.previous if is_dialog(self.mode) else self.mode

    @property
    def selected(self) -> Torrent | None:
        if 0 <= self.cursor < len(self.view):
            return self.view[self.cursor]
        return None

    @property
    def seconds_since_update(self) -> float | None:
        if self.last_update is None:
            return None
        return max(0.0, self.now - self.last_update)
