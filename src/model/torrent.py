"""Torrent mirror entry and partial-update merging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

log = logging.getLogger(__name__)


# Literal states reported by qBittorrent (stoppedDL/stoppedUP are the 5.x names)
STATE_ERROR = "error"
STATE_MISSING_FILES = "missingFiles"
STATE_UPLOADING = "uploading"
STATE_PAUSED_UP = "pausedUP"
STATE_STOPPED_UP = "stoppedUP"
STATE_QUEUED_UP = "queuedUP"
STATE_STALLED_UP = "stalledUP"
STATE_CHECKING_UP = "checkingUP"
STATE_FORCED_UP = "forcedUP"
STATE_ALLOCATING = "allocating"
STATE_DOWNLOADING = "downloading"
STATE_META_DL = "metaDL"
STATE_PAUSED_DL = "pausedDL"
STATE_STOPPED_DL = "stoppedDL"
STATE_QUEUED_DL = "queuedDL"
STATE_STALLED_DL = "stalledDL"
STATE_CHECKING_DL = "checkingDL"
STATE_FORCED_DL = "forcedDL"
STATE_QUEUED_FOR_CHECKING = "queuedForChecking"
STATE_CHECKING_RESUME_DATA = "checkingResumeData"
STATE_MOVING = "moving"
STATE_UNKNOWN = "unknown"

PAUSED_STATES = frozenset({STATE_PAUSED_DL, STATE_PAUSED_UP, STATE_STOPPED_DL, STATE_STOPPED_UP})
DOWNLOADING_STATES = frozenset({STATE_DOWNLOADING, STATE_META_DL, STATE_FORCED_DL, STATE_ALLOCATING})
UPLOADING_STATES = frozenset({STATE_UPLOADING, STATE_FORCED_UP, STATE_STALLED_UP})


@dataclass
class Torrent:
    """One torrent as mirrored from the server."""

    hash: str = ""
    name: str = ""
    size: int = 0
    progress: float = 0.0
    state: str = ""
    dl_speed: int = 0
    up_speed: int = 0
    priority: int = 0
    num_seeds: int = 0
    num_leechs: int = 0
    num_complete: int = 0
    num_incomplete: int = 0
    ratio: float = 0.0
    eta: int = 0
    category: str = ""
    tags: str = ""  # comma separated, as sent by the server
    tracker: str = ""
    added_on: int = 0
    completion_on: int = 0
    save_path: str = ""
    downloaded: int = 0
    uploaded: int = 0
    amount_left: int = 0
    time_active: int = 0
    auto_tmm: bool = False
    total_size: int = 0
    max_ratio: float = 0.0
    max_seeding_time: int = 0
    seeding_time_limit: int = 0

    @property
    def is_paused(self) -> bool:
        return self.state in PAUSED_STATES

    @property
    def is_downloading(self) -> bool:
        return self.state in DOWNLOADING_STATES

    @property
    def is_uploading(self) -> bool:
        return self.state in UPLOADING_STATES

    @property
    def is_active(self) -> bool:
        return self.is_downloading or self.is_uploading

    def merge(self, partial: Mapping[str, Any]) -> bool:
        """Overwrite the fields present in a partial update.

        Keys are wire names. Missing keys, None values, unknown keys and
        values that don't coerce to the field's type are skipped.

        Returns:
            True if any field changed value.
        """
        changed = False
        for wire_key, value in partial.items():
            attr = WIRE_NAMES.get(wire_key)
            if attr is None or value is None:
                continue
            try:
                coerced = _COERCERS[attr](value)
            except (TypeError, ValueError):
                log.debug(f"Skipping {wire_key}={value!r} for {self.hash}")
                continue
            if getattr(self, attr) != coerced:
                setattr(self, attr, coerced)
                changed = True
        return changed

    @classmethod
    def from_partial(cls, torrent_hash: str, partial: Mapping[str, Any]) -> Torrent:
        """Create a torrent from zero values, then merge the partial into it."""
        torrent = cls(hash=torrent_hash)
        torrent.merge(partial)
        return torrent


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not a count")
    return int(value)


def _to_str(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise TypeError("expected a scalar")
    return str(value)


_TYPE_COERCERS = {"str": _to_str, "int": _to_int, "float": float, "bool": _to_bool}

# Attribute names whose wire key differs
_RENAMED = {"dlspeed": "dl_speed", "upspeed": "up_speed"}

_COERCERS = {f.name: _TYPE_COERCERS[f.type] for f in fields(Torrent) if f.name != "hash"}
WIRE_NAMES: dict[str, str] = {
    **{name: name for name in _COERCERS if name not in _RENAMED.values()},
    **_RENAMED,
}
