"""Input contexts of the dashboard.

Exactly one mode is active at a time. Each variant carries only the data
its context needs. PRECEDENCE lists them from the top-most overlay down.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from controller.browser import LocalFileBrowser, RemoteBrowser
from model.details import TorrentDetails
from model.view_spec import FilterKind, FilterSpec


class AddSource(Enum):
    FILE = "file"
    URL = "url"


class RelocateInput(Enum):
    TEXT = "text"
    BROWSER = "browser"


class DetailsTab(Enum):
    GENERAL = 0
    TRACKERS = 1
    PEERS = 2
    FILES = 3


@dataclass
class MainMode:
    """Torrent list."""


@dataclass
class DetailsMode:
    """Drill-down into one torrent."""

    torrent_hash: str
    tab: DetailsTab = DetailsTab.GENERAL
    scroll: int = 0
    details: TorrentDetails | None = None
    loading: bool = True
    error: str | None = None


@dataclass
class ColumnConfig:
    """Column visibility toggles."""


@dataclass
class FilterSelect:
    """Choosing values for one filter dimension.

    `backup` is restored when the selection is cancelled.
    """

    kind: FilterKind
    options: list[str]
    backup: FilterSpec
    cursor: int = 0


@dataclass
class FilterInput:
    """Typing the name search text."""

    text: str
    backup: FilterSpec


# Modes a dialog can return to
BaseMode = MainMode | DetailsMode


@dataclass
class DeleteDialog:
    torrent_hash: str
    name: str
    previous: BaseMode
    delete_files: bool = False


@dataclass
class RelocateDialog:
    torrent_hash: str
    name: str
    previous: BaseMode
    generation: int
    text: str = ""
    input: RelocateInput = RelocateInput.TEXT
    browser: RemoteBrowser = field(default_factory=lambda: RemoteBrowser("/"))


@dataclass
class AddDialog:
    previous: BaseMode
    browser: LocalFileBrowser
    source: AddSource = AddSource.FILE
    url: str = ""


Mode = (
    AddDialog
    | RelocateDialog
    | DeleteDialog
    | FilterInput
    | FilterSelect
    | ColumnConfig
    | DetailsMode
    | MainMode
)

PRECEDENCE: tuple[type, ...] = (
    AddDialog,
    RelocateDialog,
    DeleteDialog,
    FilterInput,
    FilterSelect,
    ColumnConfig,
    DetailsMode,
    MainMode,
)

DIALOGS = (AddDialog, RelocateDialog, DeleteDialog)


def is_dialog(mode: Mode) -> bool:
    return isinstance(mode, DIALOGS)
