"""HTTP client for the readings API and its error taxonomy."""

from bp_tracker.client.api_client import BPApiClient, extract_server_message
from bp_tracker.client.errors import (
    DecodingError,
    EncodingError,
    InvalidResponse,
    InvalidURL,
    NetworkError,
    RequestFailed,
    ServerError,
)

__all__ = [
    "BPApiClient",
    "extract_server_message",
    "NetworkError",
    "InvalidURL",
    "RequestFailed",
    "InvalidResponse",
    "DecodingError",
    "EncodingError",
    "ServerError",
]
