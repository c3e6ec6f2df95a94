"""Minimal publish/subscribe helper for view state changes."""

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]


class Observable:
    """Holds subscribers and notifies them with (field_name, value) pairs."""

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, field: str, value: Any) -> None:
        for callback in list(self._subscribers):
            try:
                callback(field, value)
            except Exception:
                logger.exception(
                    "State subscriber failed",
                    extra={"log_type": "subscriber_error", "field": field},
                )
