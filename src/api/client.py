"""
qBittorrent Web API v2 client
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from api.errors import (
    AuthenticationError,
    NetworkError,
    RequestTimeout,
    ServerError,
    ValidationError,
    error_for_status,
)
from model.details import FileInfo, PeerInfo, TorrentDetails, TorrentProperties, TrackerInfo
from model.sync import SyncDelta

log = logging.getLogger(__name__)


class QBittorrentClient:
    """
    Client for a qBittorrent instance

    Usage:
        client = QBittorrentClient("http://localhost:8080", "admin", "secret")
        client.login()
        delta = client.sync_maindata(rid=0)
    """

    def __init__(
        self,
        base_url: str,
        username: str = "",
        password: str = "",
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = timeout
        self.session = requests.Session()
        # The Web UI rejects requests without a matching Referer when CSRF protection is on
        self.session.headers["Referer"] = self.base_url

    def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        data: dict | None = None,
        files: dict | None = None,
    ) -> requests.Response:
        """Make HTTP request to API, mapping failures onto QBittorrentError"""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise RequestTimeout(f"request to {path} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise NetworkError(f"request to {path} failed: {e}") from e

        if response.status_code != 200:
            body = response.text.strip()[:200]
            message = f"{method} {path} returned {response.status_code}"
            if body:
                message = f"{message}: {body}"
            raise error_for_status(response.status_code, message)
        return response

    def _get_json(self, path: str, params: dict | None = None) -> Any:
        response = self._request("GET", path, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(f"invalid JSON from {path}") from e

    def _post(self, path: str, data: dict | None = None, files: dict | None = None) -> None:
        self._request("POST", path, data=data, files=files)

    # =========================================================================
    # Session
    # =========================================================================

    def login(self) -> None:
        """Authenticate and keep the SID cookie on the session.

        Skipped when no credentials are configured (localhost bypass).
        """
        if not self.username and not self.password:
            log.info("No credentials configured, skipping login")
            return
        response = self._request(
            "POST",
            "/api/v2/auth/login",
            data={"username": self.username, "password": self.password},
        )
        if response.text.strip() == "Fails.":
            raise AuthenticationError("invalid username or password")
        if "SID" not in self.session.cookies:
            raise ServerError("no SID cookie received")
        log.info(f"Logged in to {self.base_url} as {self.username}")

    # =========================================================================
    # Reads
    # =========================================================================

    def sync_maindata(self, rid: int = 0) -> SyncDelta:
        """Fetch the changes since `rid` (a full snapshot for rid=0)"""
        data = self._get_json("/api/v2/sync/maindata", params={"rid": rid})
        if not isinstance(data, dict):
            raise ServerError("unexpected maindata response")
        return SyncDelta.from_json(data)

    def torrent_details(self, torrent_hash: str) -> TorrentDetails:
        """Fetch properties, trackers, peers and files of one torrent"""
        params = {"hash": torrent_hash}
        properties = self._get_json("/api/v2/torrents/properties", params=params)
        trackers = self._get_json("/api/v2/torrents/trackers", params=params)
        peers = self._get_json("/api/v2/sync/torrentPeers", params=params)
        files = self._get_json("/api/v2/torrents/files", params=params)

        peer_map = peers.get("peers", {}) if isinstance(peers, dict) else {}
        return TorrentDetails(
            hash=torrent_hash,
            properties=TorrentProperties.from_json(properties if isinstance(properties, dict) else {}),
            trackers=[TrackerInfo.from_json(t) for t in trackers or [] if isinstance(t, dict)],
            peers=sorted(
                (PeerInfo.from_json(p) for p in peer_map.values() if isinstance(p, dict)),
                key=lambda p: p.dl_speed + p.up_speed,
                reverse=True,
            ),
            files=[FileInfo.from_json(f) for f in files or [] if isinstance(f, dict)],
        )

    def list_directories(self, path: str) -> list[str]:
        """List subdirectories of a path on the server"""
        result = self._get_json(
            "/api/v2/app/getDirectoryContent",
            params={"dirPath": path, "mode": "dirs"},
        )
        if not isinstance(result, list):
            raise ServerError("unexpected directory listing")
        return sorted(str(d) for d in result)

    # =========================================================================
    # Mutations
    # =========================================================================

    def pause(self, hashes: list[str]) -> None:
        self._post_with_fallback("/api/v2/torrents/stop", "/api/v2/torrents/pause", hashes)

    def resume(self, hashes: list[str]) -> None:
        self._post_with_fallback("/api/v2/torrents/start", "/api/v2/torrents/resume", hashes)

    def _post_with_fallback(self, path: str, legacy_path: str, hashes: list[str]) -> None:
        """POST to the 5.x endpoint, retrying the pre-5.0 name on 404"""
        data = {"hashes": "|".join(hashes)}
        try:
            self._post(path, data=data)
        except ValidationError as e:
            if e.status_code != 404:
                raise
            log.debug(f"{path} not found, retrying {legacy_path}")
            self._post(legacy_path, data=data)

    def delete(self, hashes: list[str], delete_files: bool = False) -> None:
        self._post(
            "/api/v2/torrents/delete",
            data={"hashes": "|".join(hashes), "deleteFiles": "true" if delete_files else "false"},
        )

    def add_torrent_file(self, path: str) -> None:
        """Upload a local .torrent file"""
        file_path = Path(path)
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise ValidationError(f"cannot read {file_path.name}: {e.strerror or e}") from e
        self._post(
            "/api/v2/torrents/add",
            files={"torrents": (file_path.name, content, "application/x-bittorrent")},
        )

    def add_torrent_url(self, url: str) -> None:
        """Add a torrent from a magnet link or an http(s) URL"""
        self._post("/api/v2/torrents/add", data={"urls": url})

    def set_location(self, hashes: list[str], location: str) -> None:
        self._post(
            "/api/v2/torrents/setLocation",
            data={"hashes": "|".join(hashes), "location": location},
        )

    def close(self) -> None:
        self.session.close()
