"""Column width allocation for the torrent list."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from model.columns import ColumnSpec

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnWidth:
    """A column together with the width it was given."""

    column: ColumnSpec
    width: int


def _hide_for_width(columns: list[ColumnSpec], available: int, gap: int) -> list[ColumnSpec]:
    """Drop the highest priority numbers until the minimums fit."""
    kept = list(columns)
    while len(kept) > 1 and sum(c.min_width for c in kept) + gap * (len(kept) - 1) > available:
        # max() keeps the first of equal priorities, so scan reversed to hide the later one
        victim = max(reversed(kept), key=lambda c: c.priority)
        kept.remove(victim)
    return kept


def _share(pool: int, weights: list[float]) -> list[int]:
    """Split an integer pool by weight using largest-remainder rounding."""
    total = sum(weights)
    exact = [pool * w / total for w in weights]
    shares = [math.floor(x) for x in exact]
    remainder = pool - sum(shares)
    order = sorted(range(len(weights)), key=lambda i: exact[i] - shares[i], reverse=True)
    for i in order[:remainder]:
        shares[i] += 1
    return shares


def compute_layout(
    columns: Sequence[ColumnSpec], available_width: int, gap: int = 0
) -> list[ColumnWidth]:
    """Assign widths to visible columns for the given total width.

    Args:
        columns: Columns in declaration order; invisible ones are skipped
        available_width: Total width to fill
        gap: Separator width between adjacent columns

    Returns:
        ColumnWidth entries in declaration order. Their widths plus gaps add
        up to available_width unless every growable column hit its maximum.
    """
    visible = [c for c in columns if c.visible]
    if not visible:
        return []
    kept = _hide_for_width(visible, available_width, gap)
    widths = {c.key: c.min_width for c in kept}

    pool = available_width - gap * (len(kept) - 1) - sum(widths.values())
    growable = [c for c in kept if c.flex_grow > 0]
    while pool > 0 and growable:
        shares = _share(pool, [c.flex_grow for c in growable])
        pool = 0
        still_growable = []
        for column, share in zip(growable, shares):
            room = math.inf if column.max_width is None else max(0, column.max_width - widths[column.key])
            given = int(min(share, room))
            widths[column.key] += given
            pool += share - given
            if column.max_width is None or widths[column.key] < column.max_width:
                still_growable.append(column)
        growable = still_growable

    if pool > 0:
        log.debug(f"{pool} cells left unassigned, every growable column is at its max")
    return [ColumnWidth(c, widths[c.key]) for c in kept]
