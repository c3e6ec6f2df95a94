"""Errors raised by the readings API client."""
from __future__ import annotations

__all__ = [
    "NetworkError",
    "InvalidURL",
    "RequestFailed",
    "InvalidResponse",
    "DecodingError",
    "EncodingError",
    "ServerError",
]


class NetworkError(Exception):
    """Base class for every failure surfaced by BPApiClient."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidURL(NetworkError):
    """The endpoint URL could not be built from the configured base URL."""


class RequestFailed(NetworkError):
    """Transport failure: DNS, TLS, timeout, connection reset."""


class InvalidResponse(NetworkError):
    """The transport did not produce a well-formed HTTP response."""


class DecodingError(NetworkError):
    """The response body did not match the expected shape."""


class EncodingError(NetworkError):
    """The request payload could not be serialized."""


class ServerError(NetworkError):
    """Well-formed HTTP response with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Server error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
