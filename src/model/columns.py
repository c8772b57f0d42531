"""Torrent list column catalog."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ColumnSpec:
    """A torrent list column.

    Lower priority numbers are hidden later when the terminal is narrow.
    """

    key: str
    title: str
    min_width: int
    max_width: int | None = None  # None = unbounded
    flex_grow: float = 0.0
    priority: int = 1
    visible: bool = True


# Declaration order is display order
COLUMN_CATALOG: tuple[ColumnSpec, ...] = (
    ColumnSpec("name", "Name", 20, None, 0.6, 1),
    ColumnSpec("size", "Size", 8, 12, 0.0, 3),
    ColumnSpec("progress", "Progress", 10, 13, 0.0, 2),
    ColumnSpec("status", "Status", 8, 15, 0.1, 2),
    ColumnSpec("down", "Down", 6, 15, 0.1, 3),
    ColumnSpec("up", "Up", 4, 15, 0.1, 4),
    ColumnSpec("seeds", "Seeds", 7, 12, 0.05, 4),
    ColumnSpec("peers", "Peers", 7, 12, 0.05, 5),
    ColumnSpec("ratio", "Ratio", 7, 10, 0.0, 5),
    ColumnSpec("eta", "ETA", 5, 15, 0.05, 6),
    ColumnSpec("added_on", "Added", 7, 20, 0.05, 7),
    ColumnSpec("category", "Category", 10, 20, 0.1, 8),
    ColumnSpec("tags", "Tags", 6, 25, 0.1, 9),
    ColumnSpec("tracker", "Tracker", 9, 25, 0.1, 10),
)

COLUMN_KEYS: tuple[str, ...] = tuple(c.key for c in COLUMN_CATALOG)

DEFAULT_COLUMNS: tuple[str, ...] = (
    "name", "size", "progress", "status", "down", "up", "seeds", "peers", "ratio",
)


def catalog_with_visible(visible_keys) -> tuple[ColumnSpec, ...]:
    """Return the catalog with visibility set from a list of keys."""
    keys = set(visible_keys)
    return tuple(replace(c, visible=c.key in keys) for c in COLUMN_CATALOG)


def toggle_column(columns: tuple[ColumnSpec, ...], key: str) -> tuple[ColumnSpec, ...]:
    """Flip the visibility of one column. Unknown keys leave columns unchanged."""
    return tuple(replace(c, visible=not c.visible) if c.key == key else c for c in columns)


def visible_keys(columns: tuple[ColumnSpec, ...]) -> list[str]:
    return [c.key for c in columns if c.visible]
