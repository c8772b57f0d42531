"""UI module containing widgets, styles, formatting and the terminal title."""

from ui.widgets import (
    DetailsPanel,
    FilterBar,
    KeyHints,
    Overlay,
    StatsBar,
    StatusLine,
    TorrentTable,
)
from ui.title import TitleData, render_title, set_terminal_title, torrent_counts
from ui import ids

__all__ = [
    # Widgets
    "DetailsPanel",
    "FilterBar",
    "KeyHints",
    "Overlay",
    "StatsBar",
    "StatusLine",
    "TorrentTable",
    # Title
    "TitleData",
    "render_title",
    "set_terminal_title",
    "torrent_counts",
]
