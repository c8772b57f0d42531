"""qBittorrent Web API transport."""

from api.client import QBittorrentClient
from api.errors import (
    APIError,
    AuthenticationError,
    NetworkError,
    QBittorrentError,
    RequestTimeout,
    ServerError,
    ValidationError,
)

__all__ = [
    "QBittorrentClient",
    "APIError",
    "AuthenticationError",
    "NetworkError",
    "QBittorrentError",
    "RequestTimeout",
    "ServerError",
    "ValidationError",
]
