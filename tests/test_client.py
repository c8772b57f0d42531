"""Tests for the qBittorrent Web API client, with the HTTP session mocked."""

from unittest.mock import MagicMock

import pytest
import requests

from api import (
    APIError,
    AuthenticationError,
    NetworkError,
    QBittorrentClient,
    RequestTimeout,
    ServerError,
    ValidationError,
)
from api.errors import error_for_status


def response(status=200, text="", json_data=None):
    """A stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def client():
    client = QBittorrentClient("http://qbt.local:8080/", "admin", "secret")
    client.session.request = MagicMock()
    return client


def sent(client, index=-1):
    """(method, url, kwargs) of a recorded request."""
    call = client.session.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs


class TestErrorMapping:
    """HTTP statuses and transport failures map onto the error hierarchy."""

    @pytest.mark.parametrize(
        "status,cls",
        [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (400, ValidationError),
            (404, ValidationError),
            (409, ValidationError),
            (415, ValidationError),
            (500, ServerError),
            (503, ServerError),
            (418, APIError),
        ],
    )
    def test_error_for_status(self, status, cls):
        error = error_for_status(status, "boom")
        assert type(error) is cls
        assert error.status_code == status

    def test_non_200_raises_with_body(self, client):
        client.session.request.return_value = response(409, "Torrent already exists")
        with pytest.raises(ValidationError) as exc_info:
            client.add_torrent_url("magnet:?xt=urn:btih:abc")
        assert "409" in str(exc_info.value)
        assert "Torrent already exists" in str(exc_info.value)

    def test_timeout(self, client):
        client.session.request.side_effect = requests.Timeout()
        with pytest.raises(RequestTimeout):
            client.sync_maindata(0)

    def test_connection_error(self, client):
        client.session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(NetworkError, match="refused"):
            client.sync_maindata(0)

    def test_invalid_json(self, client):
        client.session.request.return_value = response(200, "<html>")
        with pytest.raises(ServerError, match="invalid JSON"):
            client.sync_maindata(0)


class TestLogin:
    """Cookie-based authentication."""

    def test_login_posts_credentials(self, client):
        def login(*args, **kwargs):
            client.session.cookies.set("SID", "abc123")
            return response(200, "Ok.")

        client.session.request.side_effect = login
        client.login()

        method, url, kwargs = sent(client)
        assert method == "POST"
        assert url == "http://qbt.local:8080/api/v2/auth/login"
        assert kwargs["data"] == {"username": "admin", "password": "secret"}

    def test_rejected_credentials(self, client):
        client.session.request.return_value = response(200, "Fails.")
        with pytest.raises(AuthenticationError, match="invalid username or password"):
            client.login()

    def test_missing_sid_cookie(self, client):
        client.session.request.return_value = response(200, "Ok.")
        with pytest.raises(ServerError, match="SID"):
            client.login()

    def test_no_credentials_skips_login(self):
        client = QBittorrentClient("http://localhost:8080")
        client.session.request = MagicMock()
        client.login()
        client.session.request.assert_not_called()

    def test_referer_header_set(self, client):
        assert client.session.headers["Referer"] == "http://qbt.local:8080"


class TestReads:
    """Sync, details and directory listings."""

    def test_sync_maindata(self, client):
        client.session.request.return_value = response(
            200, json_data={"rid": 4, "full_update": True, "torrents": {"h": {"name": "x"}}}
        )
        delta = client.sync_maindata(3)

        method, url, kwargs = sent(client)
        assert (method, url) == ("GET", "http://qbt.local:8080/api/v2/sync/maindata")
        assert kwargs["params"] == {"rid": 3}
        assert delta.rid == 4
        assert delta.full_update
        assert delta.torrents == {"h": {"name": "x"}}

    def test_sync_maindata_rejects_non_object(self, client):
        client.session.request.return_value = response(200, json_data=[1, 2])
        with pytest.raises(ServerError):
            client.sync_maindata(0)

    def test_torrent_details(self, client):
        client.session.request.side_effect = [
            response(200, json_data={"save_path": "/data", "piece_size": 4096, "comment": None}),
            response(200, json_data=[{"url": "udp://t", "status": 2, "tier": ""}]),
            response(
                200,
                json_data={
                    "peers": {
                        "1.1.1.1:1": {"ip": "1.1.1.1", "dl_speed": 10, "up_speed": 0},
                        "2.2.2.2:2": {"ip": "2.2.2.2", "dl_speed": 500, "up_speed": 5},
                    }
                },
            ),
            response(200, json_data=[{"index": 0, "name": "a.iso", "size": 10, "priority": 7}]),
        ]
        details = client.torrent_details("abc")

        urls = [call.args[1] for call in client.session.request.call_args_list]
        assert urls == [
            "http://qbt.local:8080/api/v2/torrents/properties",
            "http://qbt.local:8080/api/v2/torrents/trackers",
            "http://qbt.local:8080/api/v2/sync/torrentPeers",
            "http://qbt.local:8080/api/v2/torrents/files",
        ]
        assert details.hash == "abc"
        assert details.properties.save_path == "/data"
        assert details.properties.piece_size == 4096
        assert details.properties.comment == ""
        assert details.trackers[0].status_text == "Working"
        assert details.trackers[0].tier == 0
        assert [p.ip for p in details.peers] == ["2.2.2.2", "1.1.1.1"]
        assert details.files[0].priority_text == "Maximum"

    def test_list_directories(self, client):
        client.session.request.return_value = response(200, json_data=["/data/b", "/data/a"])
        assert client.list_directories("/data") == ["/data/a", "/data/b"]
        _, _, kwargs = sent(client)
        assert kwargs["params"] == {"dirPath": "/data", "mode": "dirs"}


class TestMutations:
    """Pause, resume, delete, add and relocate."""

    def test_pause_uses_stop_endpoint(self, client):
        client.session.request.return_value = response(200)
        client.pause(["a", "b"])
        method, url, kwargs = sent(client)
        assert (method, url) == ("POST", "http://qbt.local:8080/api/v2/torrents/stop")
        assert kwargs["data"] == {"hashes": "a|b"}

    def test_pause_falls_back_to_legacy_endpoint(self, client):
        client.session.request.side_effect = [response(404, "Not Found"), response(200)]
        client.pause(["a"])
        _, url, _ = sent(client)
        assert url == "http://qbt.local:8080/api/v2/torrents/pause"

    def test_resume_falls_back_to_legacy_endpoint(self, client):
        client.session.request.side_effect = [response(404), response(200)]
        client.resume(["a"])
        assert sent(client, 0)[1].endswith("/api/v2/torrents/start")
        assert sent(client, 1)[1].endswith("/api/v2/torrents/resume")

    def test_other_errors_do_not_fall_back(self, client):
        client.session.request.return_value = response(403, "Forbidden")
        with pytest.raises(AuthenticationError):
            client.pause(["a"])
        assert client.session.request.call_count == 1

    @pytest.mark.parametrize("delete_files,flag", [(True, "true"), (False, "false")])
    def test_delete(self, client, delete_files, flag):
        client.session.request.return_value = response(200)
        client.delete(["a"], delete_files)
        _, url, kwargs = sent(client)
        assert url.endswith("/api/v2/torrents/delete")
        assert kwargs["data"] == {"hashes": "a", "deleteFiles": flag}

    def test_add_torrent_file(self, client, tmp_path):
        torrent = tmp_path / "linux.torrent"
        torrent.write_bytes(b"d4:infoee")
        client.session.request.return_value = response(200, "Ok.")
        client.add_torrent_file(str(torrent))

        _, url, kwargs = sent(client)
        assert url.endswith("/api/v2/torrents/add")
        assert kwargs["files"] == {"torrents": ("linux.torrent", b"d4:infoee", "application/x-bittorrent")}

    def test_add_missing_file(self, client, tmp_path):
        with pytest.raises(ValidationError, match="cannot read"):
            client.add_torrent_file(str(tmp_path / "missing.torrent"))
        client.session.request.assert_not_called()

    def test_add_torrent_url(self, client):
        client.session.request.return_value = response(200, "Ok.")
        client.add_torrent_url("magnet:?xt=urn:btih:abc")
        _, _, kwargs = sent(client)
        assert kwargs["data"] == {"urls": "magnet:?xt=urn:btih:abc"}

    def test_set_location(self, client):
        client.session.request.return_value = response(200)
        client.set_location(["a"], "/new")
        _, url, kwargs = sent(client)
        assert url.endswith("/api/v2/torrents/setLocation")
        assert kwargs["data"] == {"hashes": "a", "location": "/new"}
