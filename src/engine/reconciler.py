"""Local mirror of the server's torrents, kept current by sync deltas."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from model.sync import Category, ServerState, SyncDelta
from model.torrent import Torrent

log = logging.getLogger(__name__)


@dataclass
class ApplyResult:
    """Outcome of applying one delta."""

    torrents: list[Torrent] = field(default_factory=list)
    changed: int = 0
    stale: bool = False


class SyncReconciler:
    """Owns the mirror. Nothing else mutates it.

    Readers get copies from torrents() / categories() / tags(), so a
    snapshot handed to the renderer never changes underneath it.
    """

    def __init__(self) -> None:
        self._torrents: dict[str, Torrent] = {}
        self._categories: dict[str, Category] = {}
        self._tags: list[str] = []
        self.server_state = ServerState()
        self._rid = 0

    @property
    def rid(self) -> int:
        """Cursor to send with the next sync request."""
        return self._rid

    def reset(self) -> None:
        """Request a full resync on the next poll."""
        self._rid = 0

    def __len__(self) -> int:
        return len(self._torrents)

    def __contains__(self, torrent_hash: object) -> bool:
        return torrent_hash in self._torrents

    def get(self, torrent_hash: str) -> Torrent | None:
        torrent = self._torrents.get(torrent_hash)
        return _copy(torrent) if torrent is not None else None

    def torrents(self) -> list[Torrent]:
        return [_copy(t) for t in self._torrents.values()]

    def categories(self) -> dict[str, Category]:
        return {name: Category(c.name, c.save_path, c.download_path) for name, c in self._categories.items()}

    def tags(self) -> list[str]:
        return list(self._tags)

    def apply(self, delta: SyncDelta) -> ApplyResult:
        """Apply a full or incremental delta and advance the cursor."""
        if not delta.full_update and delta.rid < self._rid:
            log.debug(f"Ignoring stale delta rid={delta.rid} (cursor {self._rid})")
            return ApplyResult(self.torrents(), 0, stale=True)

        if delta.full_update:
            changed = self._replace_torrents(delta)
            self._replace_categories(delta)
            self._tags = sorted(set(delta.tags))
        else:
            changed = self._merge_torrents(delta)
            self._merge_categories(delta)
            self._merge_tags(delta)

        self.server_state.merge(delta.server_state)
        self._rid = delta.rid
        log.debug(f"Applied rid={delta.rid} full={delta.full_update} changed={changed}")
        return ApplyResult(self.torrents(), changed)

    def _replace_torrents(self, delta: SyncDelta) -> int:
        fresh = {h: Torrent.from_partial(h, p) for h, p in delta.torrents.items()}
        changed = sum(1 for h in self._torrents if h not in fresh)
        changed += sum(1 for h, t in fresh.items() if self._torrents.get(h) != t)
        self._torrents = fresh
        return changed

    def _merge_torrents(self, delta: SyncDelta) -> int:
        removed = set(delta.torrents_removed)
        changed = 0
        for torrent_hash, partial in delta.torrents.items():
            if torrent_hash in removed:
                continue
            existing = self._torrents.get(torrent_hash)
            if existing is None:
                self._torrents[torrent_hash] = Torrent.from_partial(torrent_hash, partial)
                changed += 1
            elif existing.merge(partial):
                changed += 1
        for torrent_hash in removed:
            if self._torrents.pop(torrent_hash, None) is not None:
                changed += 1
        return changed

    def _replace_categories(self, delta: SyncDelta) -> None:
        self._categories = {}
        for name, partial in delta.categories.items():
            category = Category(name)
            category.merge(partial)
            self._categories[name] = category

    def _merge_categories(self, delta: SyncDelta) -> None:
        for name, partial in delta.categories.items():
            category = self._categories.setdefault(name, Category(name))
            category.merge(partial)
        for name in delta.categories_removed:
            self._categories.pop(name, None)

    def _merge_tags(self, delta: SyncDelta) -> None:
        tags = set(self._tags) | set(delta.tags)
        tags.difference_update(delta.tags_removed)
        self._tags = sorted(tags)


def _copy(torrent: Torrent) -> Torrent:
    return replace(torrent)
