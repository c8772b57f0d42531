"""Widget ID constants for the TUI.

Using constants prevents typos and makes refactoring easier.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, STATUS_BAR
        self.query_one(css(STATUS_BAR), Static)
    """
    return f"#{widget_id}"

# Root container (holds focus and receives every key)
DASHBOARD = "dashboard"

# Top bars
STATS_BAR = "stats-bar"
FILTER_BAR = "filter-bar"

# Main content
MAIN_SWITCHER = "main-switcher"
TORRENT_TABLE = "torrent-table"
DETAILS_PANEL = "details-panel"

# Bottom lines
STATUS_BAR = "status-bar"
KEY_HINTS = "key-hints"

# Dialogs, column configurator, filter selection, help
OVERLAY = "overlay"
