"""Data model: torrents, sync deltas, detail records, column and view specs."""

from model.columns import (
    COLUMN_CATALOG,
    COLUMN_KEYS,
    DEFAULT_COLUMNS,
    ColumnSpec,
    catalog_with_visible,
    toggle_column,
    visible_keys,
)
from model.details import FileInfo, PeerInfo, TorrentDetails, TorrentProperties, TrackerInfo
from model.sync import Category, ServerState, SyncDelta
from model.torrent import Torrent
from model.view_spec import FilterKind, FilterSpec, SortDirection, SortSpec

__all__ = [
    # Torrents and sync
    "Torrent",
    "Category",
    "ServerState",
    "SyncDelta",
    # Details
    "FileInfo",
    "PeerInfo",
    "TorrentDetails",
    "TorrentProperties",
    "TrackerInfo",
    # Columns
    "COLUMN_CATALOG",
    "COLUMN_KEYS",
    "DEFAULT_COLUMNS",
    "ColumnSpec",
    "catalog_with_visible",
    "toggle_column",
    "visible_keys",
    # View specs
    "FilterKind",
    "FilterSpec",
    "SortDirection",
    "SortSpec",
]
