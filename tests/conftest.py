"""Shared fixtures for qbt-tui tests."""

from pathlib import Path

import pytest

from config import AppConfig, ServerConfig
from controller import Dashboard, LocalFileBrowser, SyncReceived
from model import SyncDelta, Torrent


def make_torrent(torrent_hash: str, **fields) -> Torrent:
    """A torrent with sensible defaults; keyword arguments override fields."""
    defaults = {
        "name": f"torrent-{torrent_hash}",
        "size": 1024 * 1024,
        "state": "downloading",
        "save_path": "/downloads",
    }
    defaults.update(fields)
    return Torrent(hash=torrent_hash, **defaults)


def wire(torrent: Torrent) -> dict:
    """The maindata wire form of a torrent (dlspeed/upspeed names)."""
    return {
        "name": torrent.name,
        "size": torrent.size,
        "progress": torrent.progress,
        "state": torrent.state,
        "dlspeed": torrent.dl_speed,
        "upspeed": torrent.up_speed,
        "ratio": torrent.ratio,
        "eta": torrent.eta,
        "category": torrent.category,
        "tags": torrent.tags,
        "tracker": torrent.tracker,
        "added_on": torrent.added_on,
        "save_path": torrent.save_path,
        "num_seeds": torrent.num_seeds,
        "num_leechs": torrent.num_leechs,
    }


def full_delta(torrents: list[Torrent], rid: int = 1, **extra) -> SyncDelta:
    return SyncDelta(rid=rid, full_update=True, torrents={t.hash: wire(t) for t in torrents}, **extra)


@pytest.fixture
def app_config():
    """AppConfig pointing at a local server, defaults for everything else."""
    return AppConfig(server=ServerConfig(url="http://localhost:8080"))


@pytest.fixture
def torrents():
    """Four torrents covering downloading, seeding, paused and errored states."""
    return [
        make_torrent(
            "h1",
            name="Ubuntu 24.04 ISO",
            size=5 * 1024**3,
            progress=0.5,
            state="downloading",
            dl_speed=2_000_000,
            category="linux",
            tags="iso,lts",
            tracker="https://torrent.ubuntu.com:443/announce",
            added_on=1_700_000_000,
        ),
        make_torrent(
            "h2",
            name="Debian 12",
            size=700 * 1024**2,
            progress=1.0,
            state="uploading",
            up_speed=50_000,
            ratio=2.5,
            category="linux",
            tags="iso",
            tracker="http://bttracker.debian.org:6969/announce",
            added_on=1_600_000_000,
        ),
        make_torrent(
            "h3",
            name="Big Buck Bunny",
            size=300 * 1024**2,
            progress=0.1,
            state="pausedDL",
            category="movies",
            tracker="udp://tracker.opentrackr.org:1337/announce",
            added_on=1_650_000_000,
        ),
        make_torrent(
            "h4",
            name="broken",
            size=10,
            state="error",
            added_on=1_500_000_000,
        ),
    ]


@pytest.fixture
def empty_dir_browser(tmp_path):
    """Factory for a LocalFileBrowser rooted in an empty temporary directory."""
    return lambda: LocalFileBrowser(tmp_path)


@pytest.fixture
def dashboard(app_config, empty_dir_browser):
    """A dashboard with nothing loaded."""
    return Dashboard(app_config, file_browser_factory=empty_dir_browser)


@pytest.fixture
def loaded_dashboard(dashboard, torrents):
    """A dashboard after the initial full sync of the `torrents` fixture."""
    dashboard.start()
    dashboard.update(SyncReceived(full_delta(torrents), received_at=1000.0))
    return dashboard


@pytest.fixture
def torrent_dir(tmp_path) -> Path:
    """A directory tree with .torrent files, other files and subdirectories."""
    (tmp_path / "alpha.torrent").write_bytes(b"d4:infod4:name5:alphaee")
    (tmp_path / "Beta.TORRENT").write_bytes(b"d4:infoee")
    (tmp_path / "notes.txt").write_text("not a torrent")
    (tmp_path / ".hidden.torrent").write_bytes(b"")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "gamma.torrent").write_bytes(b"")
    (tmp_path / "Another").mkdir()
    return tmp_path
