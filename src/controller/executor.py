"""Runs remote commands against the qBittorrent client and turns results into events."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from api.errors import QBittorrentError
from controller.commands import (
    AddTorrentFile,
    AddTorrentURL,
    DeleteTorrents,
    FetchDetails,
    FetchSync,
    ListDirectories,
    PauseTorrents,
    ResumeTorrents,
    SetLocation,
)
from controller.events import (
    DetailsLoaded,
    DirectoryListed,
    MutationFailed,
    MutationSucceeded,
    SyncFailed,
    SyncReceived,
)
from ui.format import truncate

if TYPE_CHECKING:
    from api.client import QBittorrentClient

log = logging.getLogger(__name__)

NAME_WIDTH = 40
RELOCATE_NAME_WIDTH = 30


class CommandExecutor:
    """Blocking execution of remote commands. Called from worker threads.

    Every command maps to exactly one event; client errors become failure
    events instead of propagating.
    """

    def __init__(self, client: QBittorrentClient, clock: Callable[[], float] = time.time) -> None:
        self.client = client
        self.clock = clock
        self._handlers = {
            FetchSync: self._fetch_sync,
            FetchDetails: self._fetch_details,
            PauseTorrents: self._pause,
            ResumeTorrents: self._resume,
            DeleteTorrents: self._delete,
            AddTorrentFile: self._add_file,
            AddTorrentURL: self._add_url,
            SetLocation: self._set_location,
            ListDirectories: self._list_directories,
        }

    def run(self, command):
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Not a remote command: {command!r}")
        log.debug(f"Running {command!r}")
        return handler(command)

    def _fetch_sync(self, command: FetchSync):
        try:
            delta = self.client.sync_maindata(command.rid)
        except QBittorrentError as e:
            return SyncFailed(f"failed to refresh: {e}")
        return SyncReceived(delta, self.clock())

    def _fetch_details(self, command: FetchDetails):
        try:
            details = self.client.torrent_details(command.torrent_hash)
        except QBittorrentError as e:
            return DetailsLoaded(command.torrent_hash, error=f"failed to load details: {e}")
        return DetailsLoaded(command.torrent_hash, details)

    def _pause(self, command: PauseTorrents):
        try:
            self.client.pause(list(command.hashes))
        except QBittorrentError as e:
            return MutationFailed(f"failed to pause torrent: {e}")
        return MutationSucceeded(f"paused: {truncate(command.name, NAME_WIDTH)}")

    def _resume(self, command: ResumeTorrents):
        try:
            self.client.resume(list(command.hashes))
        except QBittorrentError as e:
            return MutationFailed(f"failed to resume torrent: {e}")
        return MutationSucceeded(f"resumed: {truncate(command.name, NAME_WIDTH)}")

    def _delete(self, command: DeleteTorrents):
        try:
            self.client.delete(list(command.hashes), command.delete_files)
        except QBittorrentError as e:
            return MutationFailed(f"failed to delete torrent: {e}")
        suffix = " (with files)" if command.delete_files else ""
        return MutationSucceeded(f"deleted: {truncate(command.name, NAME_WIDTH)}{suffix}")

    def _add_file(self, command: AddTorrentFile):
        try:
            self.client.add_torrent_file(command.path)
        except QBittorrentError as e:
            return MutationFailed(f"failed to add torrent: {e}")
        return MutationSucceeded(f"added torrent: {Path(command.path).name}")

    def _add_url(self, command: AddTorrentURL):
        try:
            self.client.add_torrent_url(command.url)
        except QBittorrentError as e:
            return MutationFailed(f"failed to add torrent from URL: {e}")
        return MutationSucceeded("added torrent from URL")

    def _set_location(self, command: SetLocation):
        try:
            self.client.set_location(list(command.hashes), command.location)
        except QBittorrentError as e:
            return MutationFailed(f"failed to set location: {e}")
        return MutationSucceeded(f"{truncate(command.name, RELOCATE_NAME_WIDTH)} -> {command.location}")

    def _list_directories(self, command: ListDirectories):
        try:
            directories = self.client.list_directories(command.path)
        except QBittorrentError as e:
            return DirectoryListed(command.generation, command.path, error=str(e))
        return DirectoryListed(command.generation, command.path, tuple(directories))
