"""Torrent ordering by column."""

from __future__ import annotations

import re
from dataclasses import replace
from functools import cmp_to_key
from typing import Any, Callable, Iterable

from model.torrent import Torrent
from model.view_spec import SortDirection, SortSpec

_DIGITS = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    """Case-insensitive key that orders digit runs numerically ("ep2" < "ep10")."""
    parts = _DIGITS.split(text.casefold())
    return tuple((0, int(p), "") if p.isdecimal() else (1, 0, p) for p in parts if p)


SORT_KEYS: dict[str, Callable[[Torrent], Any]] = {
    "name": lambda t: natural_key(t.name),
    "size": lambda t: t.size,
    "progress": lambda t: t.progress,
    "status": lambda t: natural_key(t.state),
    "down": lambda t: t.dl_speed,
    "up": lambda t: t.up_speed,
    "seeds": lambda t: t.num_seeds,
    "peers": lambda t: t.num_leechs,
    "ratio": lambda t: t.ratio,
    "eta": lambda t: t.eta,
    "added_on": lambda t: t.added_on,
    "category": lambda t: natural_key(t.category),
    "tags": lambda t: natural_key(t.tags),
    "tracker": lambda t: natural_key(t.tracker),
}


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare(a: Torrent, b: Torrent, spec: SortSpec) -> int:
    """-1, 0 or 1 for a before, tied with, or after b."""
    result = 0
    key = SORT_KEYS.get(spec.column)
    if key is not None:
        result = _cmp(key(a), key(b))
    if result == 0 and spec.secondary and spec.secondary != spec.column:
        secondary = SORT_KEYS.get(spec.secondary)
        if secondary is not None:
            result = _cmp(secondary(a), secondary(b))
    if spec.direction is SortDirection.DESC:
        result = -result
    return result


def sort_torrents(torrents: Iterable[Torrent], spec: SortSpec) -> list[Torrent]:
    """Stable sort: ties keep their input order."""
    return sorted(torrents, key=cmp_to_key(lambda a, b: compare(a, b, spec)))


def toggle_sort(spec: SortSpec, column: str) -> SortSpec:
    """Same column flips direction, a new column starts ascending."""
    if column == spec.column:
        return replace(spec, direction=spec.direction.flipped())
    return replace(spec, column=column, direction=SortDirection.ASC)


def set_sort(spec: SortSpec, column: str, direction: SortDirection) -> SortSpec:
    return replace(spec, column=column, direction=direction)
