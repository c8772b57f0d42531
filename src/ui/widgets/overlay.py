"""Overlay widget: dialogs, column configurator, filter selection and help."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from controller.list_keys import COLUMN_TOGGLE_KEYS
from controller.modes import (
    AddDialog,
    AddSource,
    ColumnConfig,
    DeleteDialog,
    FilterSelect,
    RelocateDialog,
    RelocateInput,
)
from model.view_spec import FilterKind
from ui.format import truncate
from ui.helpers import cursor_list

if TYPE_CHECKING:
    from controller.dashboard import Dashboard

# Rows taken by the overlay border, title and hints
OVERLAY_CHROME_ROWS = 14

FILTER_TITLES = {
    FilterKind.STATE: "Filter by state",
    FilterKind.CATEGORY: "Filter by category",
    FilterKind.TRACKER: "Filter by tracker",
    FilterKind.TAG: "Filter by tag",
}

HELP_SECTIONS = (
    (
        "Navigation",
        (
            ("up/k down/j", "move"),
            ("pgup pgdn", "page"),
            ("home/g end/G", "first / last"),
            ("enter", "details"),
            ("esc", "back / clear search"),
        ),
    ),
    (
        "Torrents",
        (
            ("p / u", "pause / resume"),
            ("d", "delete"),
            ("a", "add file or URL"),
            ("l", "set location"),
            ("r", "refresh now"),
        ),
    ),
    (
        "View",
        (
            ("/ or f", "search by name"),
            ("s c t T", "filter by state, category, tracker, tag"),
            ("x", "clear filters"),
            ("1-9", "sort by column (again to reverse)"),
            ("shift+1-9", "sort descending"),
            ("C", "choose columns"),
        ),
    ),
    (
        "Details",
        (
            ("1-4 tab left right", "switch tab"),
            ("j/k g/G", "scroll"),
        ),
    ),
)


def _title(text: Text, title: str) -> None:
    text.append(f"{title}\n\n", style="bold")


def list_rows(dashboard: Dashboard) -> int:
    return max(3, dashboard.height - OVERLAY_CHROME_ROWS)


def render_delete(dialog: DeleteDialog) -> Text:
    text = Text()
    _title(text, "Delete torrent?")
    text.append(f"  {truncate(dialog.name, 60)}\n\n")
    text.append("  [x]" if dialog.delete_files else "  [ ]", style="bold red" if dialog.delete_files else "")
    text.append(" Also delete downloaded files (f)\n\n")
    text.append("y/enter confirm   n/esc cancel", style="dim")
    return text


def render_relocate(dialog: RelocateDialog, rows: int) -> Text:
    text = Text()
    _title(text, f"Set location: {truncate(dialog.name, 50)}")
    typing = dialog.input is RelocateInput.TEXT
    text.append("Path: ", style="bold" if typing else "dim")
    text.append(dialog.text)
    if typing:
        text.append("█", style="blink")
    text.append("\n\n")

    browser = dialog.browser
    text.append(f"Server directories in {browser.path}\n", style="bold" if not typing else "dim")
    if browser.loading:
        text.append("  loading...", style="dim italic")
    elif browser.error:
        text.append(f"  {browser.error}", style="red")
    else:
        entries = [f"{name}/" if name != ".." else name for name in browser.entries]
        if entries:
            text.append_text(cursor_list(entries, browser.cursor, rows, active=not typing))
        else:
            text.append("  (no subdirectories)", style="dim italic")
    text.append("\n\ntab switch   enter confirm   esc cancel", style="dim")
    return text


def render_add(dialog: AddDialog, rows: int) -> Text:
    text = Text()
    _title(text, "Add torrent")
    for source, label in ((AddSource.FILE, " File "), (AddSource.URL, " URL ")):
        text.append(label, style="bold reverse" if dialog.source is source else "dim")
        text.append(" ")
    text.append("\n\n")

    if dialog.source is AddSource.URL:
        text.append("Magnet link or URL: ", style="bold")
        text.append(dialog.url)
        text.append("█", style="blink")
        text.append("\n\nenter add   tab file   esc cancel", style="dim")
        return text

    browser = dialog.browser
    text.append(f"{browser.current}\n", style="bold")
    if browser.search_mode:
        text.append("Search: ", style="bold")
        text.append(browser.search_text)
        text.append("█\n", style="blink")
    if browser.error:
        text.append(f"  {browser.error}\n", style="red")
    entries = [f"{e.name}/" if e.is_dir and e.name != ".." else e.name for e in browser.entries]
    if entries:
        text.append_text(cursor_list(entries, browser.cursor, rows))
    else:
        text.append(f"  (no {browser.pattern} files)", style="dim italic")
    text.append("\n\nenter open/add   / search   h parent   tab URL   esc cancel", style="dim")
    return text


def render_column_config(dashboard: Dashboard) -> Text:
    text = Text()
    _title(text, "Columns")
    for key, column in zip(COLUMN_TOGGLE_KEYS, dashboard.columns):
        text.append(f" {key} ", style="bold")
        text.append("[x] " if column.visible else "[ ] ", style="green" if column.visible else "dim")
        text.append(f"{column.title}\n")
    text.append("\nC/esc close", style="dim")
    return text


def render_filter_select(mode: FilterSelect, dashboard: Dashboard) -> Text:
    text = Text()
    _title(text, FILTER_TITLES[mode.kind])
    if not mode.options:
        text.append("  (nothing to filter by)", style="dim italic")
    else:
        selected = set(dashboard.filter.selected(mode.kind))
        if mode.kind is FilterKind.CATEGORY:
            marks = ("(•) ", "( ) ")
        else:
            marks = ("[x] ", "[ ] ")

        def marker(i: int) -> str:
            return marks[0] if mode.options[i] in selected else marks[1]

        text.append_text(cursor_list(mode.options, mode.cursor, list_rows(dashboard), marker=marker))
    text.append("\n\nspace toggle   enter apply   esc cancel", style="dim")
    return text


def render_help() -> Text:
    text = Text()
    _title(text, "Keys")
    for section, keys in HELP_SECTIONS:
        text.append(f"{section}\n", style="bold underline")
        for key, action in keys:
            text.append(f"  {key:<20}", style="bold")
            text.append(f"{action}\n")
        text.append("\n")
    text.append("ctrl+c quits from anywhere   ? or esc closes this help", style="dim")
    return text


def render_overlay(dashboard: Dashboard) -> Text | None:
    """Overlay content for the active mode, or None when nothing overlays the view."""
    mode = dashboard.mode
    rows = list_rows(dashboard)
    if isinstance(mode, AddDialog):
        return render_add(mode, rows)
    if isinstance(mode, RelocateDialog):
        return render_relocate(mode, rows)
    if isinstance(mode, DeleteDialog):
        return render_delete(mode)
    if isinstance(mode, FilterSelect):
        return render_filter_select(mode, dashboard)
    if isinstance(mode, ColumnConfig):
        return render_column_config(dashboard)
    if dashboard.show_help:
        return render_help()
    return None


class Overlay(Static):
    """Floating panel above the torrent list. Hidden when there is nothing to show."""

    def show(self, dashboard: Dashboard) -> None:
        content = render_overlay(dashboard)
        self.display = content is not None
        if content is not None:
            self.update(content)
