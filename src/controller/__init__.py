"""Dashboard state machine, its events and commands, and the command executor."""

from controller.browser import FileEntry, LocalFileBrowser, RemoteBrowser
from controller.commands import (
    AddTorrentFile,
    AddTorrentURL,
    Command,
    DeleteTorrents,
    FetchDetails,
    FetchSync,
    ListDirectories,
    PauseTorrents,
    Quit,
    REMOTE_COMMANDS,
    ResumeTorrents,
    SetLocation,
    StartTimer,
)
from controller.dashboard import Dashboard
from controller.events import (
    DetailsLoaded,
    DirectoryListed,
    Event,
    KeyPressed,
    MutationFailed,
    MutationSucceeded,
    Pasted,
    PollTick,
    Resized,
    SyncFailed,
    SyncReceived,
    TimerFired,
    TimerKind,
    UiTick,
)
from controller.executor import CommandExecutor
from controller.modes import (
    AddDialog,
    AddSource,
    ColumnConfig,
    DeleteDialog,
    DetailsMode,
    DetailsTab,
    FilterInput,
    FilterSelect,
    MainMode,
    Mode,
    RelocateDialog,
    RelocateInput,
)

__all__ = [
    "Dashboard",
    "CommandExecutor",
    # Browsers
    "FileEntry",
    "LocalFileBrowser",
    "RemoteBrowser",
    # Commands
    "AddTorrentFile",
    "AddTorrentURL",
    "Command",
    "DeleteTorrents",
    "FetchDetails",
    "FetchSync",
    "ListDirectories",
    "PauseTorrents",
    "Quit",
    "REMOTE_COMMANDS",
    "ResumeTorrents",
    "SetLocation",
    "StartTimer",
    # Events
    "DetailsLoaded",
    "DirectoryListed",
    "Event",
    "KeyPressed",
    "MutationFailed",
    "MutationSucceeded",
    "Pasted",
    "PollTick",
    "Resized",
    "SyncFailed",
    "SyncReceived",
    "TimerFired",
    "TimerKind",
    "UiTick",
    # Modes
    "AddDialog",
    "AddSource",
    "ColumnConfig",
    "DeleteDialog",
    "DetailsMode",
    "DetailsTab",
    "FilterInput",
    "FilterSelect",
    "MainMode",
    "Mode",
    "RelocateDialog",
    "RelocateInput",
]
