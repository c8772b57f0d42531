"""Torrent details widget: DetailsPanel with General, Trackers, Peers and Files tabs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from controller.dashboard import DETAILS_CHROME_ROWS
from controller.modes import DetailsMode, DetailsTab
from model.details import TorrentDetails, TorrentProperties
from model.torrent import Torrent
from ui.format import (
    format_bytes,
    format_duration,
    format_progress,
    format_ratio,
    format_speed,
    format_time,
    pad,
    state_name,
    state_style,
    truncate,
)

if TYPE_CHECKING:
    from controller.dashboard import Dashboard

TAB_TITLES = {
    DetailsTab.GENERAL: "General",
    DetailsTab.TRACKERS: "Trackers",
    DetailsTab.PEERS: "Peers",
    DetailsTab.FILES: "Files",
}

LABEL_WIDTH = 16


def _field(label: str, value: str, style: str = "") -> Text:
    text = Text()
    text.append(f"{label:<{LABEL_WIDTH}}", style="bold")
    text.append(value, style=style)
    return text


def general_lines(torrent: Torrent, props: TorrentProperties) -> list[Text]:
    pieces = f" ({props.pieces_have}/{props.pieces_num} pieces)" if props.pieces_num else ""
    created = format_time(props.creation_date)
    if props.created_by:
        created = f"{created} by {props.created_by}"
    return [
        _field("Name", torrent.name),
        _field("Hash", torrent.hash),
        _field("State", state_name(torrent.state), state_style(torrent.state)),
        _field("Size", format_bytes(torrent.total_size or torrent.size)),
        _field("Progress", f"{format_progress(torrent.progress)}{pieces}"),
        _field("Downloaded", format_bytes(props.total_downloaded or torrent.downloaded)),
        _field("Uploaded", format_bytes(props.total_uploaded or torrent.uploaded)),
        _field("Ratio", format_ratio(props.share_ratio or torrent.ratio)),
        _field("Download speed", f"{format_speed(torrent.dl_speed)} (avg {format_speed(props.dl_speed_avg)})"),
        _field("Upload speed", f"{format_speed(torrent.up_speed)} (avg {format_speed(props.up_speed_avg)})"),
        _field("ETA", format_duration(torrent.eta)),
        _field("Seeds", f"{props.seeds or torrent.num_seeds} ({props.seeds_total or torrent.num_complete} total)"),
        _field("Peers", f"{props.peers or torrent.num_leechs} ({props.peers_total or torrent.num_incomplete} total)"),
        _field("Connections", f"{props.nb_connections} (limit {props.nb_connections_limit})"),
        _field("Time active", format_duration(props.time_elapsed or torrent.time_active)),
        _field("Seeding time", format_duration(props.seeding_time)),
        _field("Save path", props.save_path or torrent.save_path),
        _field("Category", torrent.category or "-"),
        _field("Tags", torrent.tags or "-"),
        _field("Added", format_time(props.addition_date or torrent.added_on)),
        _field("Completed", format_time(props.completion_date or torrent.completion_on)),
        _field("Created", created),
        _field("Piece size", format_bytes(props.piece_size) if props.piece_size else "-"),
        _field("Comment", props.comment or "-"),
    ]


def tracker_lines(details: TorrentDetails, width: int) -> list[Text]:
    lines = []
    for tracker in details.trackers:
        url_style = "dim" if tracker.is_pseudo else "bold"
        lines.append(Text(truncate(tracker.url, width), style=url_style))
        status_style = "green" if tracker.status == 2 else "red" if tracker.status == 4 else "dim"
        line = Text("  ")
        line.append(pad(tracker.status_text, 14), style=status_style)
        line.append(f"seeds {tracker.num_seeds}  peers {tracker.num_peers}  leeches {tracker.num_leeches}")
        if tracker.msg:
            line.append(f"  {tracker.msg}", style="yellow")
        lines.append(line)
    return lines


def peer_lines(details: TorrentDetails) -> list[Text]:
    lines = [Text(f"{'Address':<40} {'Client':<20} {'Progress':>8} {'Down':>12} {'Up':>12}", style="bold")]
    for peer in details.peers:
        address = f"{peer.ip}:{peer.port}"
        if peer.country:
            address = f"{address} ({peer.country})"
        lines.append(
            Text(
                f"{pad(address, 40)} {pad(peer.client, 20)} {format_progress(peer.progress):>8} "
                f"{format_speed(peer.dl_speed):>12} {format_speed(peer.up_speed):>12}"
            )
        )
    return lines


def file_lines(details: TorrentDetails, width: int) -> list[Text]:
    name_width = max(10, width - 34)
    lines = [Text(f"{'Name':<{name_width}} {'Size':>10} {'Progress':>8} {'Priority':>10}", style="bold")]
    for f in details.files:
        style = "dim" if f.priority == 0 else ""
        lines.append(
            Text(
                f"{pad(f.name, name_width)} {format_bytes(f.size):>10} "
                f"{format_progress(f.progress):>8} {f.priority_text:>10}",
                style=style,
            )
        )
    return lines


def render_tabs(active: DetailsTab) -> Text:
    text = Text()
    for tab, title in TAB_TITLES.items():
        label = f" {tab.value + 1} {title} "
        text.append(label, style="bold reverse" if tab is active else "dim")
        text.append(" ")
    return text


def render_details(dashboard: Dashboard) -> Text:
    mode = dashboard.base_mode
    if not isinstance(mode, DetailsMode):
        return Text("")
    torrent = dashboard.reconciler.get(mode.torrent_hash)
    text = render_tabs(mode.tab)
    text.append("\n\n")
    if torrent is None:
        text.append("Torrent no longer exists.", style="dim italic")
        return text

    width = dashboard.list_width
    details = mode.details
    if mode.tab is DetailsTab.GENERAL:
        lines = general_lines(torrent, details.properties if details else TorrentProperties())
    elif details is None:
        message = mode.error or "Loading details..."
        text.append(message, style="red" if mode.error else "dim italic")
        return text
    elif mode.tab is DetailsTab.TRACKERS:
        lines = tracker_lines(details, width)
    elif mode.tab is DetailsTab.PEERS:
        lines = peer_lines(details)
    else:
        lines = file_lines(details, width)

    if mode.error:
        text.append(f"{mode.error}\n", style="red")
    visible = max(1, dashboard.height - DETAILS_CHROME_ROWS)
    shown = lines[mode.scroll : mode.scroll + visible]
    if not shown:
        text.append("Nothing to show.", style="dim italic")
    for i, line in enumerate(shown):
        if i:
            text.append("\n")
        text.append_text(line)
    return text


class DetailsPanel(Static):
    """Drill-down view of the torrent selected with enter."""

    def show(self, dashboard: Dashboard) -> None:
        self.update(render_details(dashboard))
