"""View state coordinator.

Holds the readings and stats shown to the user, the loading, submitting and
error flags, and mediates every call into the API client. State is only
mutated from coroutines running on the coordinator's event loop, and every
change is published to subscribers as a (field_name, value) pair.
"""

import asyncio
import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from bp_tracker.client.api_client import BPApiClient
from bp_tracker.client.errors import NetworkError
from bp_tracker.metrics import coordinator_refresh_total
from bp_tracker.models.reading import Reading, ReadingInput
from bp_tracker.models.stats import Stats
from bp_tracker.state.observable import Observable
from bp_tracker.utils.validation import parse_reading_form

logger = logging.getLogger(__name__)


class ViewState(BaseModel):
    """Immutable copy of the coordinator state."""

    model_config = ConfigDict(frozen=True)

    readings: Tuple[Reading, ...] = ()
    stats: Optional[Stats] = None
    is_loading_readings: bool = False
    is_loading_stats: bool = False
    is_submitting: bool = False
    error_message: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.is_loading_readings or self.is_loading_stats


class ReadingCoordinator(Observable):
    """Owns fetched readings and stats and the flags describing them."""

    def __init__(self, client: BPApiClient, *, restore_on_delete_failure: bool = True) -> None:
        super().__init__()
        self.client = client
        self.restore_on_delete_failure = restore_on_delete_failure
        self.readings: List[Reading] = []
        self.stats: Optional[Stats] = None
        self.is_loading_readings = False
        self.is_loading_stats = False
        self.is_submitting = False
        self.error_message: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.is_loading_readings or self.is_loading_stats

    def snapshot(self) -> ViewState:
        return ViewState(
            readings=tuple(self.readings),
            stats=self.stats,
            is_loading_readings=self.is_loading_readings,
            is_loading_stats=self.is_loading_stats,
            is_submitting=self.is_submitting,
            error_message=self.error_message,
        )

    def _set(self, field: str, value: Any) -> None:
        setattr(self, field, value)
        self.publish(field, value)

    def _report(self, prefix: str, exc: NetworkError, operation: str) -> None:
        message = f"{prefix}: {exc}"
        logger.error(
            message,
            extra={
                "log_type": "coordinator_error",
                "operation": operation,
                "error_type": type(exc).__name__,
            }
        )
        self._set("error_message", message)

    # ---------------------- loading ---------------------------------------
    async def load_all(self, clear_on_error: bool = False) -> bool:
        """
        Fetch readings and stats concurrently and apply both together.

        Both requests run to completion even if one fails. On any failure the
        previously held readings and stats are kept (the successful half is
        discarded) unless clear_on_error is set, and one combined message is
        published. Returns True when both fetches succeeded.
        """
        self._set("is_loading_readings", True)
        self._set("is_loading_stats", True)
        self._set("error_message", None)
        try:
            readings_result, stats_result = await asyncio.gather(
                self.client.fetch_readings(),
                self.client.fetch_stats(),
                return_exceptions=True,
            )
            failures = [r for r in (readings_result, stats_result) if isinstance(r, BaseException)]
            for failure in failures:
                if not isinstance(failure, NetworkError):
                    raise failure
            if failures:
                coordinator_refresh_total.labels(status="error").inc()
                if clear_on_error:
                    self._set("readings", [])
                    self._set("stats", None)
                self._report("Failed to fetch data", failures[0], "load_all")
                return False
            self._set("readings", list(readings_result))
            self._set("stats", stats_result)
            coordinator_refresh_total.labels(status="success").inc()
            logger.info(
                "Loaded readings and stats",
                extra={"log_type": "refresh", "reading_count": len(self.readings)}
            )
            return True
        finally:
            self._set("is_loading_readings", False)
            self._set("is_loading_stats", False)

    async def refresh_readings(self) -> bool:
        """Refetch only the readings list."""
        self._set("is_loading_readings", True)
        self._set("error_message", None)
        try:
            readings = await self.client.fetch_readings()
        except NetworkError as exc:
            self._report("Failed to refresh readings", exc, "refresh_readings")
            return False
        finally:
            self._set("is_loading_readings", False)
        self._set("readings", list(readings))
        return True

    async def refresh_stats(self) -> bool:
        """Refetch only the stats summary."""
        self._set("is_loading_stats", True)
        self._set("error_message", None)
        try:
            stats = await self.client.fetch_stats()
        except NetworkError as exc:
            self._report("Failed to refresh stats", exc, "refresh_stats")
            return False
        finally:
            self._set("is_loading_stats", False)
        self._set("stats", stats)
        return True

    # ---------------------- submitting ------------------------------------
    async def submit(self, reading_input: ReadingInput) -> bool:
        """
        Submit a new reading, then reload readings and stats.

        The server computes averages and classification, so the only way to
        see them is the refetch. Submission errors are published and
        re-raised so the entry form can stay open. Returns the result of
        the follow-up load_all.
        """
        self._set("is_submitting", True)
        self._set("error_message", None)
        try:
            try:
                await self.client.submit_reading(reading_input)
            except NetworkError as exc:
                self._report("Failed to submit reading", exc, "submit")
                raise
            return await self.load_all()
        finally:
            self._set("is_submitting", False)

    async def submit_form(self, fields: Mapping[str, Any]) -> bool:
        """Validate nine form values and submit them; raises FormValidationError."""
        return await self.submit(parse_reading_form(fields))

    # ---------------------- deleting --------------------------------------
    async def delete(self, reading_id: int) -> bool:
        """
        Remove a reading locally, then ask the server to delete it.

        On failure the reading goes back to its original position (unless a
        refresh already brought it back) and the error is published.
        """
        position = next((i for i, r in enumerate(self.readings) if r.id == reading_id), None)
        removed: Optional[Reading] = None
        if position is not None:
            removed = self.readings[position]
            self._set("readings", self.readings[:position] + self.readings[position + 1:])
        self._set("error_message", None)
        try:
            await self.client.delete_reading(reading_id)
        except BaseException as exc:
            if removed is not None and self.restore_on_delete_failure:
                self._restore(removed, position)
            if isinstance(exc, NetworkError):
                self._report("Failed to delete reading", exc, "delete")
                return False
            raise
        logger.info("Deleted reading", extra={"log_type": "delete", "reading_id": reading_id})
        return True

    def _restore(self, reading: Reading, position: int) -> None:
        if any(r.id == reading.id for r in self.readings):
            return
        readings = list(self.readings)
        readings.insert(min(position, len(readings)), reading)
        self._set("readings", readings)

    async def delete_at(self, positions: Iterable[int]) -> bool:
        """Delete the readings at the given list positions (swipe to delete)."""
        ids = [self.readings[i].id for i in sorted(set(positions))]
        results = [await self.delete(reading_id) for reading_id in ids]
        return all(results)
