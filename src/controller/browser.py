"""Local file browser (add dialog) and remote directory browser (relocate dialog)."""

from __future__ import annotations

import fnmatch
import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)

PARENT_ENTRY = ".."
TORRENT_PATTERN = "*.torrent"


@dataclass
class FileEntry:
    """A row in the local browser."""

    name: str
    path: Path
    is_dir: bool


class LocalFileBrowser:
    """Navigates the local filesystem to pick a .torrent file.

    Directories are always listed. Files are listed when they match the
    current pattern: `*.torrent` normally, or the typed search text while
    search mode is on.
    """

    def __init__(self, start_dir: Path | None = None, show_hidden: bool = False) -> None:
        self.current = (start_dir or Path.home()).expanduser().resolve()
        self.show_hidden = show_hidden
        self.entries: list[FileEntry] = []
        self.cursor = 0
        self.search_mode = False
        self.search_text = ""
        self.error: str | None = None
        self.refresh()

    @property
    def pattern(self) -> str:
        if not self.search_mode:
            return TORRENT_PATTERN
        if not self.search_text:
            return "*"
        if any(ch in self.search_text for ch in "*?["):
            return self.search_text
        return f"*{self.search_text}*"

    @property
    def selected(self) -> FileEntry | None:
        if 0 <= self.cursor < len(self.entries):
            return self.entries[self.cursor]
        return None

    def refresh(self) -> None:
        """Re-read the current directory."""
        entries: list[FileEntry] = []
        if self.current.parent != self.current:
            entries.append(FileEntry(PARENT_ENTRY, self.current.parent, True))
        self.error = None
        dirs: list[FileEntry] = []
        files: list[FileEntry] = []
        try:
            for child in self.current.iterdir():
                if child.name.startswith(".") and not self.show_hidden:
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    continue
                if is_dir:
                    dirs.append(FileEntry(child.name, child, True))
                elif fnmatch.fnmatch(child.name.lower(), self.pattern.lower()):
                    files.append(FileEntry(child.name, child, False))
        except OSError as e:
            log.debug(f"Cannot list {self.current}: {e}")
            self.error = f"cannot read {self.current}: {e.strerror or e}"
        dirs.sort(key=lambda e: e.name.lower())
        files.sort(key=lambda e: e.name.lower())
        self.entries = entries + dirs + files
        self.cursor = min(self.cursor, max(0, len(self.entries) - 1))

    def move(self, delta: int) -> None:
        if self.entries:
            self.cursor = max(0, min(len(self.entries) - 1, self.cursor + delta))

    def change_dir(self, path: Path) -> None:
        self.current = path
        self.cursor = 0
        self.refresh()

    def parent(self) -> None:
        if self.current.parent != self.current:
            previous = self.current
            self.change_dir(self.current.parent)
            # Put the cursor back on the directory we came from
            for i, entry in enumerate(self.entries):
                if entry.path == previous:
                    self.cursor = i
                    break

    def activate(self) -> Path | None:
        """Enter the selected directory, or return the selected file."""
        entry = self.selected
        if entry is None:
            return None
        if entry.name == PARENT_ENTRY:
            self.parent()
            return None
        if entry.is_dir:
            self.change_dir(entry.path)
            return None
        return entry.path

    def toggle_search(self) -> None:
        self.search_mode = not self.search_mode
        self.search_text = ""
        self.cursor = 0
        self.refresh()

    def type_text(self, text: str) -> None:
        self.search_text += text
        self.cursor = 0
        self.refresh()

    def backspace(self) -> None:
        if self.search_text:
            self.search_text = self.search_text[:-1]
            self.cursor = 0
            self.refresh()


@dataclass
class RemoteBrowser:
    """Server-side directory listing shown in the relocate dialog.

    Listings arrive asynchronously; `loading` is set between the request
    and the matching DirectoryListed event.
    """

    path: str
    directories: list[str] = field(default_factory=list)
    cursor: int = 0
    loading: bool = False
    error: str | None = None

    @property
    def at_root(self) -> bool:
        return self.path in ("", "/")

    @property
    def entries(self) -> list[str]:
        """Display names: ".." (unless at root) followed by directory basenames."""
        names = [] if self.at_root else [PARENT_ENTRY]
        names.extend(posixpath.basename(d.rstrip("/")) or d for d in self.directories)
        return names

    def selected_path(self) -> str | None:
        """Full path of the entry under the cursor. ".." maps to the parent."""
        entries = self.entries
        if not 0 <= self.cursor < len(entries):
            return None
        if entries[self.cursor] == PARENT_ENTRY:
            return self.parent_path()
        offset = 0 if self.at_root else 1
        return self.directories[self.cursor - offset]

    def parent_path(self) -> str:
        parent = posixpath.dirname(self.path.rstrip("/"))
        return parent or "/"

    def move(self, delta: int) -> None:
        count = len(self.entries)
        if count:
            self.cursor = max(0, min(count - 1, self.cursor + delta))

    def begin_listing(self, path: str) -> None:
        self.path = path
        self.directories = []
        self.cursor = 0
        self.loading = True
        self.error = None

    def finish_listing(self, directories: tuple[str, ...], error: str | None) -> None:
        self.loading = False
        self.error = error
        self.directories = sorted(directories, key=str.lower) if error is None else []
        self.cursor = 0
