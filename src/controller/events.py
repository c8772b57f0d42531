"""Events fed into the dashboard state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from model.details import TorrentDetails
from model.sync import SyncDelta


@dataclass(frozen=True)
class KeyPressed:
    """A keystroke. `char` is the printable character, if any."""

    key: str
    char: str | None = None

    @property
    def token(self) -> str:
        """The character for printable keys, otherwise the key name."""
        if self.char and len(self.char) == 1 and self.char.isprintable() and self.char != " ":
            return self.char
        return self.key


@dataclass(frozen=True)
class Pasted:
    text: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class PollTick:
    pass


@dataclass(frozen=True)
class UiTick:
    now: float


@dataclass(frozen=True)
class SyncReceived:
    delta: SyncDelta
    received_at: float


@dataclass(frozen=True)
class SyncFailed:
    """A sync poll failed."""

    message: str


@dataclass(frozen=True)
class MutationSucceeded:
    message: str


@dataclass(frozen=True)
class MutationFailed:
    message: str


@dataclass(frozen=True)
class DirectoryListed:
    """Result of a remote directory listing, tagged with its dialog session."""

    generation: int
    path: str
    directories: tuple[str, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class DetailsLoaded:
    torrent_hash: str
    details: TorrentDetails | None = None
    error: str | None = None


class TimerKind(Enum):
    """One-shot timers the dashboard asks the shell to start."""

    CLEAR_ERROR = "clear_error"
    CLEAR_SUCCESS = "clear_success"
    DELAYED_REFRESH = "delayed_refresh"


@dataclass(frozen=True)
class TimerFired:
    kind: TimerKind
    token: int = 0


Event = (
    KeyPressed
    | Pasted
    | Resized
    | PollTick
    | UiTick
    | SyncReceived
    | SyncFailed
    | MutationSucceeded
    | MutationFailed
    | DirectoryListed
    | DetailsLoaded
    | TimerFired
)
