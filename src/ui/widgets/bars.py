"""Single-line widgets: StatsBar, FilterBar, StatusLine, KeyHints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from controller.modes import (
    AddDialog,
    ColumnConfig,
    DeleteDialog,
    DetailsMode,
    FilterInput,
    FilterSelect,
    RelocateDialog,
)
from model.columns import COLUMN_CATALOG
from ui.format import format_bytes, format_duration, format_speed
from ui.helpers import key_hint
from ui.title import torrent_counts

if TYPE_CHECKING:
    from controller.dashboard import Dashboard

CONNECTION_STYLES = {
    "connected": "green",
    "firewalled": "yellow",
    "disconnected": "red",
}

COLUMN_TITLES = {c.key: c.title for c in COLUMN_CATALOG}


def format_age(seconds: float | None) -> str:
    if seconds is None:
        return "never"
    if seconds < 60:
        return f"{int(seconds)}s ago"
    return f"{format_duration(int(seconds))} ago"


def render_stats(dashboard: Dashboard) -> Text:
    """Connection, global speeds, torrent counts and disk space."""
    state = dashboard.reconciler.server_state
    counts = torrent_counts(dashboard.reconciler.torrents())
    status = state.connection_status or ("connecting" if dashboard.loading else "unknown")

    text = Text()
    text.append("● ", style=CONNECTION_STYLES.get(status, "dim"))
    text.append(status)
    text.append(f"  ↓ {format_speed(state.dl_speed)}", style="green")
    text.append(f"  ↑ {format_speed(state.up_speed)}", style="blue")
    text.append(
        f"  │ {counts.total} torrents: {counts.active} active, "
        f"{counts.downloading} down, {counts.uploading} up, {counts.paused} paused"
    )
    text.append(f"  │ session ↓ {format_bytes(state.dl_total)} ↑ {format_bytes(state.up_total)}", style="dim")
    if state.free_disk:
        text.append(f"  │ free {format_bytes(state.free_disk)}", style="dim")
    if state.dht_nodes:
        text.append(f"  │ DHT {state.dht_nodes}", style="dim")
    text.append(f"  │ updated {format_age(dashboard.seconds_since_update)}", style="dim")
    return text


def render_filter_bar(dashboard: Dashboard) -> Text:
    text = Text()
    mode = dashboard.mode
    if isinstance(mode, FilterInput):
        text.append("Search: ", style="bold")
        text.append(mode.text)
        text.append("█", style="blink")
    else:
        parts = dashboard.filter.describe()
        text.append("Filter: ", style="bold")
        text.append(" | ".join(parts) if parts else "none", style="yellow" if parts else "dim")
    sort = dashboard.sort
    text.append(f"  │ sort: {COLUMN_TITLES.get(sort.column, sort.column)} {sort.direction.value}", style="dim")
    text.append(f"  │ {len(dashboard.view)}/{len(dashboard.reconciler)} shown", style="dim")
    return text


def render_status(dashboard: Dashboard) -> Text:
    """Error banner, else success banner, else nothing."""
    if dashboard.error:
        return Text(f" {dashboard.error} ", style="bold white on red")
    if dashboard.success:
        return Text(f" {dashboard.success} ", style="bold black on green")
    if dashboard.loading:
        return Text(" connecting... ", style="dim")
    return Text("")


def hints_for(dashboard: Dashboard) -> list[tuple[str, str]]:
    mode = dashboard.mode
    if isinstance(mode, AddDialog):
        return [("tab", "file/url"), ("enter", "add"), ("/", "search"), ("esc", "cancel")]
    if isinstance(mode, RelocateDialog):
        return [("tab", "text/browse"), ("l/h", "into/up"), ("enter", "move here"), ("esc", "cancel")]
    if isinstance(mode, DeleteDialog):
        return [("y", "delete"), ("f", "toggle files"), ("n", "cancel")]
    if isinstance(mode, FilterInput):
        return [("enter", "apply"), ("ctrl+u", "clear"), ("esc", "cancel")]
    if isinstance(mode, FilterSelect):
        return [("space", "toggle"), ("a", "all"), ("n", "none"), ("enter", "apply"), ("esc", "cancel")]
    if isinstance(mode, ColumnConfig):
        return [("1-0 q w e r", "toggle column"), ("esc", "close")]
    if isinstance(mode, DetailsMode):
        return [("1-4", "tab"), ("j/k", "scroll"), ("p/u", "pause/resume"), ("d", "delete"), ("esc", "back")]
    return [
        ("enter", "details"),
        ("/", "search"),
        ("s c t T", "filter"),
        ("1-9", "sort"),
        ("p/u", "pause/resume"),
        ("a", "add"),
        ("d", "delete"),
        ("?", "help"),
        ("ctrl+c", "quit"),
    ]


class StatsBar(Static):
    def show(self, dashboard: Dashboard) -> None:
        self.update(render_stats(dashboard))


class FilterBar(Static):
    def show(self, dashboard: Dashboard) -> None:
        self.update(render_filter_bar(dashboard))


class StatusLine(Static):
    """Timed error and success banners."""

    def show(self, dashboard: Dashboard) -> None:
        self.update(render_status(dashboard))


class KeyHints(Static):
    def show(self, dashboard: Dashboard) -> None:
        self.update(key_hint(hints_for(dashboard)))
