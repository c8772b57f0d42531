"""Human-readable formatting of sizes, speeds, durations and states."""

from __future__ import annotations

from datetime import datetime

_UNITS = "KMGTPE"


def format_bytes(num: int) -> str:
    """Format a byte count with 1024-based units ("1.5 MB")."""
    if num < 1024:
        return f"{num} B"
    value = float(num)
    for unit in _UNITS:
        value /= 1024
        if value < 1024 or unit == _UNITS[-1]:
            return f"{value:.1f} {unit}B"
    return f"{num} B"


def format_speed(bytes_per_sec: int) -> str:
    return f"{format_bytes(bytes_per_sec)}/s"


def format_duration(seconds: int) -> str:
    """Compact duration: 45s, 12m, 3h5m, 2d4h. Non-positive or huge means unknown."""
    # qBittorrent reports 8640000 (100 days) for "infinite"
    if seconds <= 0 or seconds >= 8640000:
        return "∞"
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        hours, minutes = divmod(seconds // 60, 60)
        return f"{hours}h{minutes}m" if minutes else f"{hours}h"
    days, hours = divmod(seconds // 3600, 24)
    return f"{days}d{hours}h" if hours else f"{days}d"


def format_time(timestamp: int) -> str:
    if timestamp <= 0:
        return "-"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


def format_date(timestamp: int) -> str:
    if timestamp <= 0:
        return "-"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d")


def format_ratio(ratio: float) -> str:
    # qBittorrent uses -1 for "no ratio" on some versions
    if ratio < 0:
        return "∞"
    return f"{ratio:.2f}"


def format_progress(progress: float) -> str:
    return f"{progress * 100:.1f}%"


def truncate(text: str, max_len: int) -> str:
    """Cut text to max_len characters, ending in "..." when cut."""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def pad(text: str, width: int, align_right: bool = False) -> str:
    text = truncate(text, width)
    return text.rjust(width) if align_right else text.ljust(width)


STATE_NAMES = {
    "error": "Error",
    "missingFiles": "Missing",
    "uploading": "Seeding",
    "stalledUP": "Seeding",
    "forcedUP": "Force UP",
    "downloading": "Downloading",
    "metaDL": "Metadata",
    "forcedDL": "Force DL",
    "stalledDL": "Stalled",
    "allocating": "Allocating",
    "pausedDL": "Paused DL",
    "pausedUP": "Paused UP",
    "stoppedDL": "Stopped DL",
    "stoppedUP": "Completed",
    "queuedDL": "Queued DL",
    "queuedUP": "Queued UP",
    "checkingDL": "Checking",
    "checkingUP": "Checking",
    "queuedForChecking": "Queued Check",
    "checkingResumeData": "Checking",
    "moving": "Moving",
}


def state_name(state: str) -> str:
    return STATE_NAMES.get(state, state or "Unknown")


# Rich style per state family
STATE_STYLES = {
    "error": "bold red",
    "missingFiles": "bold red",
    "downloading": "green",
    "forcedDL": "green",
    "metaDL": "cyan",
    "uploading": "blue",
    "forcedUP": "blue",
    "stalledUP": "dim blue",
    "stalledDL": "yellow",
    "pausedDL": "dim",
    "pausedUP": "dim",
    "stoppedDL": "dim",
    "stoppedUP": "dim",
    "queuedDL": "magenta",
    "queuedUP": "magenta",
    "moving": "cyan",
}


def state_style(state: str) -> str:
    return STATE_STYLES.get(state, "")
