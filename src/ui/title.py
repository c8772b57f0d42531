"""Terminal window title rendering."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Iterable, TextIO

from model.torrent import Torrent
from ui.format import format_bytes, format_speed

TITLE_VARIABLES = (
    "dl_speed",
    "up_speed",
    "session_downloaded",
    "session_uploaded",
    "server_url",
    "active_torrents",
    "total_torrents",
    "dl_torrents",
    "up_torrents",
    "paused_torrents",
)

_VARIABLE = re.compile(r"\{([^}]*)\}")


@dataclass(frozen=True)
class TorrentCounts:
    total: int = 0
    active: int = 0
    downloading: int = 0
    uploading: int = 0
    paused: int = 0


def torrent_counts(torrents: Iterable[Torrent]) -> TorrentCounts:
    total = active = downloading = uploading = paused = 0
    for torrent in torrents:
        total += 1
        active += torrent.is_active
        downloading += torrent.is_downloading
        uploading += torrent.is_uploading
        paused += torrent.is_paused
    return TorrentCounts(total, active, downloading, uploading, paused)


@dataclass(frozen=True)
class TitleData:
    """Values available to a title template."""

    dl_speed: int = 0
    up_speed: int = 0
    session_downloaded: int = 0
    session_uploaded: int = 0
    server_url: str = ""
    counts: TorrentCounts = TorrentCounts()

    def variables(self) -> dict[str, str]:
        return {
            "dl_speed": format_speed(self.dl_speed),
            "up_speed": format_speed(self.up_speed),
            "session_downloaded": format_bytes(self.session_downloaded),
            "session_uploaded": format_bytes(self.session_uploaded),
            "server_url": self.server_url,
            "active_torrents": str(self.counts.active),
            "total_torrents": str(self.counts.total),
            "dl_torrents": str(self.counts.downloading),
            "up_torrents": str(self.counts.uploading),
            "paused_torrents": str(self.counts.paused),
        }


def validate_template(template: str) -> list[str]:
    """Return the placeholders in `template` that are not title variables."""
    return [name for name in _VARIABLE.findall(template) if name not in TITLE_VARIABLES]


def render_title(template: str, data: TitleData) -> str:
    """Substitute `{variable}` placeholders. Unknown placeholders are left as-is."""
    values = data.variables()
    return _VARIABLE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def set_terminal_title(title: str, stream: TextIO | None = None) -> None:
    """Emit the OSC 0 sequence that sets the terminal window title."""
    out = stream or sys.__stdout__
    if out is None:
        return
    # Control characters would end the sequence early
    clean = "".join(ch for ch in title if ch.isprintable())
    out.write(f"\033]0;{clean}\007")
    out.flush()
