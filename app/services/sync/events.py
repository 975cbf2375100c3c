"""In-process publish/subscribe for sync notifications."""

from collections import defaultdict
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from loguru import logger


class SyncEvent(StrEnum):
    SNAPSHOT_UPDATED = "snapshot_updated"
    STALE_CHANGED = "stale_changed"


class EventBus:
    """Synchronous event bus; views subscribe instead of being called by the engine."""

    def __init__(self):
        self._subscribers: dict[SyncEvent, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, event: SyncEvent, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._subscribers[event].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[event]:
                self._subscribers[event].remove(callback)

        return unsubscribe

    def publish(self, event: SyncEvent, payload: Any = None) -> None:
        """Deliver to every subscriber; one failing subscriber does not stop the others."""
        for callback in list(self._subscribers[event]):
            try:
                callback(payload)
            except Exception:
                logger.exception("Subscriber {} failed on {}", getattr(callback, "__name__", callback), event)
