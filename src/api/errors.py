"""
qBittorrent Web API exceptions
"""


class QBittorrentError(Exception):
    """Base exception for all client errors"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(QBittorrentError):
    """Raised when the server can't be reached"""

    pass


class RequestTimeout(NetworkError):
    """Raised when a request exceeds the client timeout"""

    pass


class APIError(QBittorrentError):
    """Raised when the server answers with an unexpected status"""

    pass


class AuthenticationError(APIError):
    """Raised on rejected credentials or an expired session (401/403)"""

    pass


class ValidationError(APIError):
    """Raised when the server rejects the request parameters (400/404/409/415)"""

    pass


class ServerError(APIError):
    """Raised on 5xx responses or malformed answers"""

    pass


def error_for_status(status_code: int, message: str) -> APIError:
    """Pick the exception class matching an HTTP status."""
    if status_code in (401, 403):
        return AuthenticationError(message, status_code)
    if status_code in (400, 404, 409, 415):
        return ValidationError(message, status_code)
    if status_code >= 500:
        return ServerError(message, status_code)
    return APIError(message, status_code)
