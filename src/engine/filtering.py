"""Torrent filtering by state, tracker, category, tags and name."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urlsplit

from model.torrent import Torrent
from model.view_spec import FilterSpec

# Logical groups offered next to literal states in the state filter
STATE_GROUPS: dict[str, frozenset[str]] = {
    "active": frozenset({"downloading", "uploading", "allocating", "metaDL", "forcedDL", "forcedUP"}),
    "paused": frozenset({"pausedDL", "pausedUP", "stoppedDL", "stoppedUP"}),
    "completed": frozenset({"uploading", "stalledUP", "forcedUP", "queuedUP"}),
    "queued": frozenset({"queuedDL", "queuedUP", "queuedForChecking"}),
    "stalled": frozenset({"stalledDL", "stalledUP"}),
    "checking": frozenset({"checkingDL", "checkingUP", "checkingResumeData", "queuedForChecking"}),
}


def matches_state(state: str, token: str) -> bool:
    """Check a torrent state against a group name or a literal state."""
    group = STATE_GROUPS.get(token)
    if group is not None:
        return state in group
    return state == token


def extract_domain(url: str) -> str:
    """Host part of a tracker URL, without scheme or port. "" if unparseable."""
    if not url:
        return ""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def split_tags(tags: str) -> list[str]:
    """Split the server's comma-separated tag string."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def matches(torrent: Torrent, spec: FilterSpec) -> bool:
    """True if the torrent passes every dimension of the filter."""
    if spec.states and not any(matches_state(torrent.state, token) for token in spec.states):
        return False
    if spec.trackers and extract_domain(torrent.tracker) not in spec.trackers:
        return False
    if spec.category is not None and torrent.category != spec.category:
        return False
    if spec.tags and not set(split_tags(torrent.tags)) & set(spec.tags):
        return False
    if spec.search and spec.search.lower() not in torrent.name.lower():
        return False
    return True


def apply_filter(torrents: Iterable[Torrent] | None, spec: FilterSpec) -> list[Torrent]:
    """Filter preserving input order."""
    if torrents is None:
        return []
    if spec.is_empty():
        return list(torrents)
    return [t for t in torrents if matches(t, spec)]


def unique_trackers(torrents: Iterable[Torrent]) -> list[str]:
    return sorted({d for d in (extract_domain(t.tracker) for t in torrents) if d})


def unique_categories(torrents: Iterable[Torrent]) -> list[str]:
    return sorted({t.category for t in torrents if t.category})


def unique_tags(torrents: Iterable[Torrent]) -> list[str]:
    return sorted({tag for t in torrents for tag in split_tags(t.tags)})


def unique_states(torrents: Iterable[Torrent]) -> list[str]:
    return sorted({t.state for t in torrents if t.state})
