"""Per-torrent detail records shown in the details view."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping


def _from_mapping(cls, data: Mapping[str, Any]):
    """Build a flat dataclass from a JSON object, ignoring unknown keys."""
    kwargs = {}
    for f in fields(cls):
        if f.name in data and data[f.name] is not None:
            default = f.default
            try:
                kwargs[f.name] = type(default)(data[f.name])
            except (TypeError, ValueError):
                continue
    return cls(**kwargs)


@dataclass
class TorrentProperties:
    """General properties (torrents/properties)."""

    save_path: str = ""
    creation_date: int = 0
    piece_size: int = 0
    comment: str = ""
    total_wasted: int = 0
    total_uploaded: int = 0
    total_downloaded: int = 0
    up_limit: int = 0
    dl_limit: int = 0
    time_elapsed: int = 0
    seeding_time: int = 0
    nb_connections: int = 0
    nb_connections_limit: int = 0
    share_ratio: float = 0.0
    addition_date: int = 0
    completion_date: int = 0
    created_by: str = ""
    dl_speed_avg: int = 0
    up_speed_avg: int = 0
    eta: int = 0
    last_seen: int = 0
    peers: int = 0
    peers_total: int = 0
    seeds: int = 0
    seeds_total: int = 0
    pieces_have: int = 0
    pieces_num: int = 0

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TorrentProperties:
        return _from_mapping(cls, data)


@dataclass
class TrackerInfo:
    """One tracker entry (torrents/trackers)."""

    url: str = ""
    status: int = 0
    tier: int = 0
    num_peers: int = 0
    num_seeds: int = 0
    num_leeches: int = 0
    num_downloaded: int = 0
    msg: str = ""

    @property
    def status_text(self) -> str:
        return TRACKER_STATUS.get(self.status, "Unknown")

    @property
    def is_pseudo(self) -> bool:
        """DHT, PeX and LSD rows are reported as trackers too."""
        return self.url.startswith("** [")

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TrackerInfo:
        # tier is "" for the pseudo trackers and is left at 0
        return _from_mapping(cls, data)


TRACKER_STATUS = {
    0: "Disabled",
    1: "Not contacted",
    2: "Working",
    3: "Updating",
    4: "Not working",
}


@dataclass
class PeerInfo:
    """One connected peer (sync/torrentPeers)."""

    ip: str = ""
    port: int = 0
    country: str = ""
    connection: str = ""
    flags: str = ""
    client: str = ""
    progress: float = 0.0
    dl_speed: int = 0
    up_speed: int = 0
    downloaded: int = 0
    uploaded: int = 0
    relevance: float = 0.0

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> PeerInfo:
        return _from_mapping(cls, data)


@dataclass
class FileInfo:
    """One file inside a torrent (torrents/files)."""

    index: int = 0
    name: str = ""
    size: int = 0
    progress: float = 0.0
    priority: int = 0
    is_seed: bool = False
    availability: float = 0.0

    @property
    def priority_text(self) -> str:
        return FILE_PRIORITY.get(self.priority, "Normal")

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> FileInfo:
        return _from_mapping(cls, data)


FILE_PRIORITY = {
    0: "Skip",
    1: "Normal",
    6: "High",
    7: "Maximum",
}


@dataclass
class TorrentDetails:
    """Everything fetched for the details view of one torrent."""

    hash: str
    properties: TorrentProperties = field(default_factory=TorrentProperties)
    trackers: list[TrackerInfo] = field(default_factory=list)
    peers: list[PeerInfo] = field(default_factory=list)
    files: list[FileInfo] = field(default_factory=list)
