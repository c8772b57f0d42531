"""Commands emitted by the dashboard for the shell to carry out."""

from __future__ import annotations

from dataclasses import dataclass

from controller.events import TimerKind


@dataclass(frozen=True)
class FetchSync:
    rid: int


@dataclass(frozen=True)
class FetchDetails:
    torrent_hash: str


@dataclass(frozen=True)
class PauseTorrents:
    hashes: tuple[str, ...]
    name: str


@dataclass(frozen=True)
class ResumeTorrents:
    hashes: tuple[str, ...]
    name: str


@dataclass(frozen=True)
class DeleteTorrents:
    hashes: tuple[str, ...]
    name: str
    delete_files: bool = False


@dataclass(frozen=True)
class AddTorrentFile:
    path: str


@dataclass(frozen=True)
class AddTorrentURL:
    url: str


@dataclass(frozen=True)
class SetLocation:
    hashes: tuple[str, ...]
    name: str
    location: str


@dataclass(frozen=True)
class ListDirectories:
    """List subdirectories of a server-side path for the relocate dialog."""

    path: str
    generation: int


@dataclass(frozen=True)
class StartTimer:
    kind: TimerKind
    delay: float
    token: int = 0


@dataclass(frozen=True)
class Quit:
    pass


# Commands that talk to the server and run off the event loop
REMOTE_COMMANDS = (
    FetchSync,
    FetchDetails,
    PauseTorrents,
    ResumeTorrents,
    DeleteTorrents,
    AddTorrentFile,
    AddTorrentURL,
    SetLocation,
    ListDirectories,
)

Command = (
    FetchSync
    | FetchDetails
    | PauseTorrents
    | ResumeTorrents
    | DeleteTorrents
    | AddTorrentFile
    | AddTorrentURL
    | SetLocation
    | ListDirectories
    | StartTimer
    | Quit
)
