"""Async client for the blood pressure readings API.

The client is stateless apart from the underlying httpx connection pool, so a
single instance can be shared by concurrent tasks. Every failure is raised as
a NetworkError subclass; nothing is retried.
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from bp_tracker.client.errors import (
    DecodingError,
    EncodingError,
    InvalidResponse,
    InvalidURL,
    NetworkError,
    RequestFailed,
    ServerError,
)
from bp_tracker.metrics import bp_api_call_latency_seconds, bp_api_call_total, bp_api_errors_total
from bp_tracker.models.reading import Reading, ReadingInput
from bp_tracker.models.stats import Stats
from bp_tracker.utils.config import get_settings
from bp_tracker.utils.logging_utils import redact_sensitive_data

logger = logging.getLogger(__name__)

__all__ = ["BPApiClient", "extract_server_message", "READINGS_PATH", "STATS_PATH", "SUBMIT_PATH"]

READINGS_PATH = "/api/readings"
STATS_PATH = "/api/stats"
SUBMIT_PATH = "/submit"

_READINGS_ADAPTER = TypeAdapter(List[Reading])
_STATS_ADAPTER = TypeAdapter(Stats)


def extract_server_message(response: httpx.Response) -> str:
    """Pull a human readable message out of an error response.

    The body is read as a flat string-to-string JSON object and the `error`
    key wins over `message`; anything else falls back to the reason phrase.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and all(isinstance(v, str) for v in payload.values()):
        if "error" in payload:
            return payload["error"]
        if "message" in payload:
            return payload["message"]
    phrase = httpx.codes.get_reason_phrase(response.status_code)
    return phrase or f"HTTP {response.status_code}"


class BPApiClient:
    """High-level async client for the readings, stats and submit endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        settings = get_settings() if base_url is None or timeout is None else None
        if base_url is None:
            base_url = settings.api_base_url
        if timeout is None and settings is not None:
            timeout = settings.request_timeout_seconds
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        if http_client is None:
            # No timeout configured keeps httpx's own default.
            client_kwargs: dict[str, Any] = {}
            if timeout is not None:
                client_kwargs["timeout"] = timeout
            http_client = httpx.AsyncClient(**client_kwargs)
        self.http_client = http_client

    # ---------------------- async context manager helpers ------------------
    async def __aenter__(self) -> "BPApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()

    # ---------------------- API operations --------------------------------
    async def fetch_readings(self) -> List[Reading]:
        """Fetch every reading, in the order the server returns them."""
        response = await self._make_request("GET", READINGS_PATH)
        return self._decode(response, _READINGS_ADAPTER, "readings")

    async def fetch_stats(self) -> Stats:
        """Fetch the statistics summary."""
        response = await self._make_request("GET", STATS_PATH)
        return self._decode(response, _STATS_ADAPTER, "stats")

    async def submit_reading(self, reading_input: ReadingInput) -> None:
        """Submit three measurements; the response body is ignored."""
        if not isinstance(reading_input, ReadingInput):
            raise EncodingError(f"Expected ReadingInput, got {type(reading_input).__name__}")
        try:
            body = reading_input.to_payload()
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Could not encode reading input: {exc}", exc) from exc
        await self._make_request(
            "POST",
            SUBMIT_PATH,
            content=body,
            headers={"Content-Type": "application/json"},
        )

    async def delete_reading(self, reading_id: int) -> None:
        """Delete a reading by id; the response body is ignored."""
        await self._make_request(
            "DELETE", f"{READINGS_PATH}/{reading_id}", endpoint=f"{READINGS_PATH}/{{id}}"
        )

    # ---------------------- HTTP request helpers --------------------------
    def _url(self, path: str) -> httpx.URL:
        raw = f"{self.base_url}{path}"
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as exc:
            raise InvalidURL(f"Invalid URL: {raw}", exc) from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURL(f"Invalid URL: {raw}")
        return url

    async def _make_request(
        self, method: str, path: str, *, endpoint: Optional[str] = None, **kwargs: Any
    ) -> httpx.Response:
        # Metric label; defaults to the literal path.
        endpoint = endpoint or path
        correlation_id = str(uuid.uuid4())
        url = self._url(path)
        logger.info(
            "BP API request",
            extra={
                "log_type": "request",
                "correlation_id": correlation_id,
                "method": method,
                "url": str(url),
                "headers": redact_sensitive_data(kwargs.get("headers") or {}),
            }
        )
        start_time = time.monotonic()
        status = "error"
        try:
            try:
                response = await self.http_client.request(method, url, **kwargs)
            except (httpx.ProtocolError, httpx.DecodingError) as exc:
                raise InvalidResponse(f"Malformed response for {method} {path}: {exc}", exc) from exc
            except httpx.RequestError as exc:
                raise RequestFailed(f"{method} {path} failed: {exc!r}", exc) from exc

            logger.info(
                "BP API response",
                extra={
                    "log_type": "response",
                    "correlation_id": correlation_id,
                    "method": method,
                    "url": str(url),
                    "status_code": response.status_code,
                }
            )
            if not response.is_success:
                raise ServerError(response.status_code, extract_server_message(response))
            status = "success"
            return response
        except NetworkError as exc:
            bp_api_errors_total.labels(error_type=type(exc).__name__).inc()
            logger.error(
                "BP API call failed",
                extra={
                    "log_type": "request_error",
                    "correlation_id": correlation_id,
                    "method": method,
                    "url": str(url),
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                }
            )
            raise
        finally:
            latency = time.monotonic() - start_time
            bp_api_call_latency_seconds.labels(method=method, endpoint=endpoint).observe(latency)
            bp_api_call_total.labels(method=method, endpoint=endpoint, status=status).inc()

    def _decode(self, response: httpx.Response, adapter: TypeAdapter, what: str) -> Any:
        try:
            return adapter.validate_json(response.content)
        except ValidationError as exc:
            bp_api_errors_total.labels(error_type=DecodingError.__name__).inc()
            logger.error(
                "Failed to decode BP API response",
                extra={
                    "log_type": "decoding_error",
                    "payload": what,
                    "error": str(exc),
                }
            )
            raise DecodingError(f"Could not decode {what}: {exc}", exc) from exc
