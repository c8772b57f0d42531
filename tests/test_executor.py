"""Tests for the command executor: client calls and the events they produce."""

from unittest.mock import MagicMock

import pytest

from api import AuthenticationError, NetworkError, ValidationError
from controller import (
    AddTorrentFile,
    AddTorrentURL,
    CommandExecutor,
    DeleteTorrents,
    DetailsLoaded,
    DirectoryListed,
    FetchDetails,
    FetchSync,
    ListDirectories,
    MutationFailed,
    MutationSucceeded,
    PauseTorrents,
    Quit,
    ResumeTorrents,
    SetLocation,
    SyncFailed,
    SyncReceived,
)
from model import SyncDelta, TorrentDetails


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def executor(client):
    return CommandExecutor(client, clock=lambda: 1234.0)


class TestReads:
    """Sync, details and directory listing."""

    def test_fetch_sync(self, executor, client):
        delta = SyncDelta(rid=2)
        client.sync_maindata.return_value = delta
        event = executor.run(FetchSync(1))
        client.sync_maindata.assert_called_once_with(1)
        assert event == SyncReceived(delta, 1234.0)

    def test_fetch_sync_failure(self, executor, client):
        client.sync_maindata.side_effect = NetworkError("request to /api/v2/sync/maindata failed: refused")
        event = executor.run(FetchSync(0))
        assert event == SyncFailed("failed to refresh: request to /api/v2/sync/maindata failed: refused")

    def test_fetch_details(self, executor, client):
        details = TorrentDetails("h1")
        client.torrent_details.return_value = details
        assert executor.run(FetchDetails("h1")) == DetailsLoaded("h1", details)

    def test_fetch_details_failure(self, executor, client):
        client.torrent_details.side_effect = ValidationError("not found", 404)
        event = executor.run(FetchDetails("h1"))
        assert event.details is None
        assert event.error == "failed to load details: not found"

    def test_list_directories(self, executor, client):
        client.list_directories.return_value = ["/a", "/b"]
        event = executor.run(ListDirectories("/", 3))
        assert event == DirectoryListed(3, "/", ("/a", "/b"))

    def test_list_directories_failure(self, executor, client):
        client.list_directories.side_effect = AuthenticationError("forbidden", 403)
        assert executor.run(ListDirectories("/x", 3)) == DirectoryListed(3, "/x", error="forbidden")


class TestMutations:
    """Mutation commands report success or failure messages."""

    def test_pause(self, executor, client):
        assert executor.run(PauseTorrents(("h1",), "Debian 12")) == MutationSucceeded("paused: Debian 12")
        client.pause.assert_called_once_with(["h1"])

    def test_resume(self, executor, client):
        assert executor.run(ResumeTorrents(("h1",), "Debian 12")) == MutationSucceeded("resumed: Debian 12")
        client.resume.assert_called_once_with(["h1"])

    def test_long_names_truncated(self, executor):
        event = executor.run(PauseTorrents(("h1",), "x" * 60))
        assert len(event.message) == len("paused: ") + 40
        assert event.message.endswith("...")

    def test_delete(self, executor, client):
        event = executor.run(DeleteTorrents(("h1",), "Debian 12", delete_files=True))
        assert event == MutationSucceeded("deleted: Debian 12 (with files)")
        client.delete.assert_called_once_with(["h1"], True)
        assert executor.run(DeleteTorrents(("h1",), "Debian 12")) == MutationSucceeded("deleted: Debian 12")

    def test_add_file(self, executor, client):
        event = executor.run(AddTorrentFile("/home/me/linux.torrent"))
        assert event == MutationSucceeded("added torrent: linux.torrent")
        client.add_torrent_file.assert_called_once_with("/home/me/linux.torrent")

    def test_add_url(self, executor, client):
        assert executor.run(AddTorrentURL("magnet:?x")) == MutationSucceeded("added torrent from URL")
        client.add_torrent_url.assert_called_once_with("magnet:?x")

    def test_set_location(self, executor, client):
        event = executor.run(SetLocation(("h1",), "Debian 12", "/media"))
        assert event == MutationSucceeded("Debian 12 -> /media")
        client.set_location.assert_called_once_with(["h1"], "/media")

    @pytest.mark.parametrize(
        "command,method,prefix",
        [
            (PauseTorrents(("h",), "n"), "pause", "failed to pause torrent"),
            (ResumeTorrents(("h",), "n"), "resume", "failed to resume torrent"),
            (DeleteTorrents(("h",), "n"), "delete", "failed to delete torrent"),
            (AddTorrentFile("/f.torrent"), "add_torrent_file", "failed to add torrent"),
            (AddTorrentURL("magnet:"), "add_torrent_url", "failed to add torrent from URL"),
            (SetLocation(("h",), "n", "/x"), "set_location", "failed to set location"),
        ],
    )
    def test_failures(self, executor, client, command, method, prefix):
        getattr(client, method).side_effect = ValidationError("409 conflict", 409)
        assert executor.run(command) == MutationFailed(f"{prefix}: 409 conflict")

    def test_non_remote_command_rejected(self, executor):
        with pytest.raises(TypeError):
            executor.run(Quit())
