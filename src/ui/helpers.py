"""UI helper functions for qbt-tui."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from rich.text import Text

log = logging.getLogger(__name__)

CURSOR_STYLE = "reverse"


def scroll_window(cursor: int, count: int, rows: int, offset: int = 0) -> int:
    """Return the first row to show so the cursor stays inside `rows` lines.

    Args:
        cursor: Index of the highlighted row
        count: Total number of rows
        rows: Number of rows that fit on screen
        offset: First row shown last time (kept when the cursor is still visible)
    """
    rows = max(1, rows)
    if count <= rows:
        return 0
    if cursor < offset:
        offset = cursor
    elif cursor >= offset + rows:
        offset = cursor - rows + 1
    return max(0, min(offset, count - rows))


def cursor_list(
    items: Sequence[str],
    cursor: int,
    rows: int,
    active: bool = True,
    marker: Callable[[int], str] | None = None,
) -> Text:
    """Render a list with the cursor row highlighted, scrolled to keep it visible.

    Args:
        items: Display text per row
        cursor: Highlighted row
        rows: Maximum rows to render
        active: Highlight the cursor row (False when the list doesn't have input)
        marker: Optional prefix per row index, e.g. a checkbox
    """
    text = Text()
    start = scroll_window(cursor, len(items), rows)
    for i in range(start, min(len(items), start + max(1, rows))):
        prefix = marker(i) if marker else ""
        style = CURSOR_STYLE if active and i == cursor else ""
        if i > start:
            text.append("\n")
        text.append(f" {prefix}{items[i]} ", style=style)
    return text


def key_hint(pairs: Sequence[tuple[str, str]]) -> Text:
    """Render "key action" pairs for the hint line."""
    text = Text()
    for i, (key, action) in enumerate(pairs):
        if i:
            text.append("  ")
        text.append(key, style="bold")
        text.append(f" {action}", style="dim")
    return text
