"""Custom Textual widgets for qbt-tui.

Each widget renders a slice of the dashboard state through `show(dashboard)`.
"""

from ui.widgets.bars import FilterBar, KeyHints, StatsBar, StatusLine
from ui.widgets.details import DetailsPanel
from ui.widgets.overlay import Overlay
from ui.widgets.torrent_table import TorrentTable

__all__ = [
    # Bars
    "FilterBar",
    "KeyHints",
    "StatsBar",
    "StatusLine",
    # Main content
    "DetailsPanel",
    "TorrentTable",
    # Overlay
    "Overlay",
]
