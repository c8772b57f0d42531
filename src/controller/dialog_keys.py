"""Key handling for the add, relocate and delete dialogs."""

from __future__ import annotations

import logging
from typing import Any, Callable

from controller.commands import (
    AddTorrentFile,
    AddTorrentURL,
    Command,
    DeleteTorrents,
    ListDirectories,
    SetLocation,
)
from controller.events import DirectoryListed, KeyPressed
from controller.filter_keys import printable
from controller.modes import AddDialog, AddSource, DeleteDialog, RelocateDialog, RelocateInput

log = logging.getLogger(__name__)


def edit_text(text: str, event: KeyPressed) -> str:
    """Apply a line-editing key to a text field."""
    if event.key == "backspace":
        return text[:-1]
    if event.key in ("ctrl+u", "ctrl+a"):
        return ""
    char = printable(event)
    if char is not None:
        return text + char
    return text


class DialogKeysMixin:
    """Delete confirmation, relocate and add dialogs."""

    mode: Any
    _generation: int

    def _new_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _delete_key(self, event: KeyPressed) -> list[Command]:
        dialog: DeleteDialog = self.mode
        key = event.token
        if key in ("y", "Y", "enter"):
            self.mode = dialog.previous
            return [DeleteTorrents((dialog.torrent_hash,), dialog.name, dialog.delete_files)]
        if key in ("n", "N", "escape"):
            self.mode = dialog.previous
        elif key in ("f", "F"):
            dialog.delete_files = not dialog.delete_files
        return []

    def _request_listing(self, dialog: RelocateDialog, path: str) -> list[Command]:
        dialog.browser.begin_listing(path)
        return [ListDirectories(path, dialog.generation)]

    def _relocate_key(self, event: KeyPressed) -> list[Command]:
        dialog: RelocateDialog = self.mode
        if event.key == "escape":
            self.mode = dialog.previous
            return []
        if event.key == "tab":
            dialog.input = RelocateInput.BROWSER if dialog.input is RelocateInput.TEXT else RelocateInput.TEXT
            return []
        if dialog.input is RelocateInput.TEXT:
            return self._relocate_text_key(dialog, event)
        return self._relocate_browser_key(dialog, event)

    def _relocate_text_key(self, dialog: RelocateDialog, event: KeyPressed) -> list[Command]:
        if event.key == "enter":
            return self._confirm_relocate(dialog, dialog.text.strip())
        dialog.text = edit_text(dialog.text, event)
        return []

    def _relocate_browser_key(self, dialog: RelocateDialog, event: KeyPressed) -> list[Command]:
        browser = dialog.browser
        key = event.token
        if key in ("up", "k"):
            browser.move(-1)
        elif key in ("down", "j"):
            browser.move(1)
        elif key in ("l", "right"):
            target = browser.selected_path()
            if target is not None and not browser.loading:
                return self._request_listing(dialog, target)
        elif key in ("h", "backspace", "left"):
            if not browser.at_root:
                return self._request_listing(dialog, browser.parent_path())
        elif key == "enter":
            # ".." (always row 0 below root) means "here"
            on_parent_row = browser.cursor == 0 and not browser.at_root
            chosen = browser.path if on_parent_row else browser.selected_path() or browser.path
            return self._confirm_relocate(dialog, chosen)
        return []

    def _confirm_relocate(self, dialog: RelocateDialog, location: str) -> list[Command]:
        if not location:
            return []
        self.mode = dialog.previous
        return [SetLocation((dialog.torrent_hash,), dialog.name, location)]

    def _on_directory_listed(self, event: DirectoryListed) -> list[Command]:
        dialog = self.mode
        if not isinstance(dialog, RelocateDialog) or dialog.generation != event.generation:
            log.debug(f"Dropping directory listing for {event.path} (generation {event.generation})")
            return []
        if not dialog.browser.loading or dialog.browser.path != event.path:
            log.debug(f"Dropping superseded listing for {event.path}")
            return []
        dialog.browser.finish_listing(event.directories, event.error)
        return []

    def _add_key(self, event: KeyPressed) -> list[Command]:
        dialog: AddDialog = self.mode
        if event.key == "escape":
            self.mode = dialog.previous
            return []
        if event.key == "tab":
            dialog.source = AddSource.URL if dialog.source is AddSource.FILE else AddSource.FILE
            return []
        if dialog.source is AddSource.URL:
            if event.key == "enter":
                url = dialog.url.strip()
                if not url:
                    return []
                self.mode = dialog.previous
                return [AddTorrentURL(url)]
            dialog.url = edit_text(dialog.url, event)
            return []
        return self._add_file_key(dialog, event)

    def _add_file_key(self, dialog: AddDialog, event: KeyPressed) -> list[Command]:
        browser = dialog.browser
        key = event.key
        if key == "up" or (key == "k" and not browser.search_mode):
            browser.move(-1)
        elif key == "down" or (key == "j" and not browser.search_mode):
            browser.move(1)
        elif key == "enter":
            path = browser.activate()
            if path is not None:
                self.mode = dialog.previous
                return [AddTorrentFile(str(path))]
        elif event.char == "/":
            browser.toggle_search()
        elif browser.search_mode and key == "backspace":
            browser.backspace()
        elif key in ("backspace", "left") or (key == "h" and not browser.search_mode):
            browser.parent()
        elif browser.search_mode:
            char = printable(event)
            if char is not None:
                browser.type_text(char)
        return []
