"""Torrent list widget: TorrentTable."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rich.text import Text
from textual.widgets import Static

from engine.filtering import extract_domain
from engine.layout import ColumnWidth
from model.torrent import Torrent
from model.view_spec import SortDirection, SortSpec
from ui.format import (
    format_bytes,
    format_date,
    format_duration,
    format_progress,
    format_ratio,
    format_speed,
    pad,
    state_name,
    state_style,
)
from ui.helpers import CURSOR_STYLE, scroll_window

if TYPE_CHECKING:
    from controller.dashboard import Dashboard


CELL_FORMATTERS: dict[str, Callable[[Torrent], str]] = {
    "name": lambda t: t.name,
    "size": lambda t: format_bytes(t.size),
    "progress": lambda t: format_progress(t.progress),
    "status": lambda t: state_name(t.state),
    "down": lambda t: format_speed(t.dl_speed) if t.dl_speed else "-",
    "up": lambda t: format_speed(t.up_speed) if t.up_speed else "-",
    "seeds": lambda t: f"{t.num_seeds} ({t.num_complete})",
    "peers": lambda t: f"{t.num_leechs} ({t.num_incomplete})",
    "ratio": lambda t: format_ratio(t.ratio),
    "eta": lambda t: format_duration(t.eta) if t.is_downloading else "-",
    "added_on": lambda t: format_date(t.added_on),
    "category": lambda t: t.category or "-",
    "tags": lambda t: t.tags or "-",
    "tracker": lambda t: extract_domain(t.tracker) or "-",
}

RIGHT_ALIGNED = frozenset({"size", "progress", "down", "up", "seeds", "peers", "ratio", "eta"})

SORT_ARROWS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}


def cell_text(torrent: Torrent, key: str) -> str:
    formatter = CELL_FORMATTERS.get(key)
    return formatter(torrent) if formatter else ""


def render_header(layout: list[ColumnWidth], sort: SortSpec, gap: int = 1) -> Text:
    """Column titles, with an arrow on the sorted column."""
    text = Text(style="bold")
    for i, cw in enumerate(layout):
        if i:
            text.append(" " * gap)
        title = cw.column.title
        if cw.column.key == sort.column:
            title = f"{title} {SORT_ARROWS[sort.direction]}"
        style = "bold underline" if cw.column.key == sort.column else "bold"
        text.append(pad(title, cw.width, cw.column.key in RIGHT_ALIGNED), style=style)
    return text


def render_row(torrent: Torrent, layout: list[ColumnWidth], selected: bool, gap: int = 1) -> Text:
    text = Text(style=CURSOR_STYLE if selected else "")
    for i, cw in enumerate(layout):
        if i:
            text.append(" " * gap)
        key = cw.column.key
        style = state_style(torrent.state) if key == "status" else ""
        text.append(pad(cell_text(torrent, key), cw.width, key in RIGHT_ALIGNED), style=style)
    return text


def empty_message(dashboard: Dashboard) -> str:
    if dashboard.loading:
        return "Loading torrents..."
    if len(dashboard.reconciler) == 0:
        return "No torrents. Press a to add one."
    return "No torrents match the filter. Press x to clear it."


class TorrentTable(Static):
    """Header plus the visible window of the filtered, sorted torrent view."""

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._offset = 0

    def show(self, dashboard: Dashboard, gap: int = 1) -> None:
        layout = dashboard.layout()
        text = render_header(layout, dashboard.sort, gap)
        if not dashboard.view:
            self._offset = 0
            text.append("\n\n")
            text.append(empty_message(dashboard), style="dim italic")
            self.update(text)
            return

        rows = dashboard.page_size()
        self._offset = scroll_window(dashboard.cursor, len(dashboard.view), rows, self._offset)
        for index in range(self._offset, min(len(dashboard.view), self._offset + rows)):
            text.append("\n")
            text.append_text(render_row(dashboard.view[index], layout, index == dashboard.cursor, gap))
        self.update(text)
