"""Sync delta, category and server state models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

log = logging.getLogger(__name__)


@dataclass
class Category:
    """A category and its default save location."""

    name: str
    save_path: str = ""
    download_path: str = ""

    def merge(self, partial: Mapping[str, Any]) -> bool:
        """Apply the present fields of a category update. Returns True on change."""
        changed = False
        for wire_key, attr in (("savePath", "save_path"), ("download_path", "download_path")):
            value = partial.get(wire_key)
            # download_path is sent as false when unset
            if value is None or isinstance(value, bool):
                continue
            if getattr(self, attr) != str(value):
                setattr(self, attr, str(value))
                changed = True
        return changed


# wire key -> ServerState attribute
_SERVER_STATE_FIELDS = {
    "connection_status": "connection_status",
    "dht_nodes": "dht_nodes",
    "dl_info_speed": "dl_speed",
    "up_info_speed": "up_speed",
    "dl_info_data": "dl_total",
    "up_info_data": "up_total",
    "free_space_on_disk": "free_disk",
}


@dataclass
class ServerState:
    """Global transfer statistics reported alongside each delta."""

    connection_status: str = ""
    dht_nodes: int = 0
    dl_speed: int = 0
    up_speed: int = 0
    dl_total: int = 0
    up_total: int = 0
    free_disk: int = 0

    def merge(self, partial: Mapping[str, Any]) -> None:
        for wire_key, attr in _SERVER_STATE_FIELDS.items():
            value = partial.get(wire_key)
            if value is None:
                continue
            current = getattr(self, attr)
            try:
                setattr(self, attr, type(current)(value))
            except (TypeError, ValueError):
                log.debug(f"Skipping server_state {wire_key}={value!r}")


@dataclass
class SyncDelta:
    """One response of the incremental sync protocol.

    `torrents` and `categories` hold partial updates keyed by hash / name.
    """

    rid: int = 0
    full_update: bool = False
    torrents: dict[str, dict[str, Any]] = field(default_factory=dict)
    torrents_removed: list[str] = field(default_factory=list)
    categories: dict[str, dict[str, Any]] = field(default_factory=dict)
    categories_removed: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    tags_removed: list[str] = field(default_factory=list)
    server_state: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> SyncDelta:
        """Build a delta from a decoded maindata response.

        Entries of the wrong shape are dropped rather than rejected.
        """
        try:
            rid = int(data.get("rid", 0))
        except (TypeError, ValueError):
            rid = 0
        return cls(
            rid=rid,
            full_update=bool(data.get("full_update", False)),
            torrents=_mapping_of_mappings(data.get("torrents")),
            torrents_removed=_string_list(data.get("torrents_removed")),
            categories=_mapping_of_mappings(data.get("categories")),
            categories_removed=_string_list(data.get("categories_removed")),
            tags=_string_list(data.get("tags")),
            tags_removed=_string_list(data.get("tags_removed")),
            server_state=_mapping(data.get("server_state")),
        )


def _mapping(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _mapping_of_mappings(value: Any) -> dict[str, dict[str, Any]]:
    if not isinstance(value, Mapping):
        return {}
    return {str(k): dict(v) for k, v in value.items() if isinstance(v, Mapping)}


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, (str, int))]
