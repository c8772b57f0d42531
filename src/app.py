"""Main TUI application for qbt-tui."""

from __future__ import annotations

import logging
import time
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import ContentSwitcher

from controller import (
    REMOTE_COMMANDS,
    Command,
    CommandExecutor,
    Dashboard,
    DetailsMode,
    KeyPressed,
    LocalFileBrowser,
    Pasted,
    PollTick,
    Quit,
    Resized,
    StartTimer,
    TimerFired,
    UiTick,
)
from ui import (
    DetailsPanel,
    FilterBar,
    KeyHints,
    Overlay,
    StatsBar,
    StatusLine,
    TitleData,
    TorrentTable,
    render_title,
    set_terminal_title,
    torrent_counts,
)
from ui.ids import css
import ui.ids as ids

if TYPE_CHECKING:
    from api import QBittorrentClient
    from config import AppConfig

log = logging.getLogger(__name__)

# Load CSS from file
APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()

# Elapsed-time fields are re-rendered this often
UI_TICK_SECONDS = 2.0


class DashboardView(Vertical, can_focus=True):
    """Root container. Holds focus so every key and paste reaches the dashboard."""

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        char = event.character if event.is_printable else None
        self.app.feed_event(KeyPressed(event.key, char))

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.app.feed_event(Pasted(event.text))

    def on_resize(self, event: events.Resize) -> None:
        # Layout decisions use the whole terminal, not this container
        self.app.feed_event(Resized(self.app.size.width, self.app.size.height))


class QbtApp(App):
    """Terminal dashboard for a qBittorrent server."""

    TITLE = "qbt-tui"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    # Keys Textual would otherwise claim for itself
    BINDINGS = [
        Binding("ctrl+c", "forward_key('ctrl+c')", "Quit", show=False, priority=True),
        Binding("tab", "forward_key('tab')", show=False, priority=True),
        Binding("escape", "forward_key('escape')", show=False, priority=True),
    ]

    def __init__(
        self,
        config: AppConfig,
        client: QBittorrentClient,
        executor: CommandExecutor | None = None,
        file_browser_factory: Callable[[], LocalFileBrowser] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__()
        self.config = config
        self.client = client
        self.clock = clock
        self.executor = executor or CommandExecutor(client, clock)
        self.dashboard = Dashboard(config, file_browser_factory)
        self._last_title: str | None = None

    def compose(self) -> ComposeResult:
        with DashboardView(id=ids.DASHBOARD):
            yield StatsBar(id=ids.STATS_BAR)
            yield FilterBar(id=ids.FILTER_BAR)
            with ContentSwitcher(id=ids.MAIN_SWITCHER, initial=ids.TORRENT_TABLE):
                yield TorrentTable(id=ids.TORRENT_TABLE)
                yield DetailsPanel(id=ids.DETAILS_PANEL)
            yield StatusLine(id=ids.STATUS_BAR)
            yield KeyHints(id=ids.KEY_HINTS)
        yield Overlay(id=ids.OVERLAY)

    def on_mount(self) -> None:
        log.info(f"Connecting to {self.config.server.url}")
        self.query_one(css(ids.DASHBOARD), DashboardView).focus()
        self.dashboard.update(Resized(self.size.width, self.size.height))
        self._run_commands(self.dashboard.start())
        self.set_interval(self.config.ui.refresh_interval, partial(self.feed_event, PollTick()))
        self.set_interval(UI_TICK_SECONDS, self._ui_tick)
        self.refresh_view()

    def action_forward_key(self, key: str) -> None:
        self.feed_event(KeyPressed(key))

    def _ui_tick(self) -> None:
        self.feed_event(UiTick(self.clock()))

    # =========================================================================
    # Event loop glue
    # =========================================================================

    def feed_event(self, event) -> None:
        """Apply an event to the dashboard, run its commands and redraw."""
        commands = self.dashboard.update(event)
        self._run_commands(commands)
        self.refresh_view()

    def _run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            if isinstance(command, Quit):
                log.info("Quit requested")
                self.exit()
            elif isinstance(command, StartTimer):
                fired = TimerFired(command.kind, command.token)
                self.set_timer(command.delay, partial(self.feed_event, fired))
            elif isinstance(command, REMOTE_COMMANDS):
                self._run_remote(command)
            else:
                log.warning(f"Unhandled command {command!r}")

    @work(thread=True, group="remote")
    def _run_remote(self, command: Command) -> None:
        """Run a network command off the event loop and feed its result back."""
        event = self.executor.run(command)
        self.call_from_thread(self.feed_event, event)

    # =========================================================================
    # Rendering
    # =========================================================================

    def refresh_view(self) -> None:
        """Redraw every widget from the dashboard state."""
        dashboard = self.dashboard
        self.query_one(css(ids.STATS_BAR), StatsBar).show(dashboard)
        self.query_one(css(ids.FILTER_BAR), FilterBar).show(dashboard)

        switcher = self.query_one(css(ids.MAIN_SWITCHER), ContentSwitcher)
        if isinstance(dashboard.base_mode, DetailsMode):
            switcher.current = ids.DETAILS_PANEL
            self.query_one(css(ids.DETAILS_PANEL), DetailsPanel).show(dashboard)
        else:
            switcher.current = ids.TORRENT_TABLE
            self.query_one(css(ids.TORRENT_TABLE), TorrentTable).show(dashboard)

        self.query_one(css(ids.STATUS_BAR), StatusLine).show(dashboard)
        self.query_one(css(ids.KEY_HINTS), KeyHints).show(dashboard)
        self.query_one(css(ids.OVERLAY), Overlay).show(dashboard)
        self._update_title()

    def _update_title(self) -> None:
        title_config = self.config.ui.terminal_title
        if not title_config.enabled or not title_config.template:
            return
        reconciler = self.dashboard.reconciler
        state = reconciler.server_state
        data = TitleData(
            dl_speed=state.dl_speed,
            up_speed=state.up_speed,
            session_downloaded=state.dl_total,
            session_uploaded=state.up_total,
            server_url=self.config.server.url,
            counts=torrent_counts(reconciler.torrents()),
        )
        title = render_title(title_config.template, data)
        if title == self._last_title:
            return
        self._last_title = title
        self.title = title
        if not self.is_headless:
            set_terminal_title(title)
