"""Sync services - gateway mirror and notifications."""

from app.services.sync.engine import ConnectionReport, SyncEngine, SyncStatus
from app.services.sync.events import EventBus, SyncEvent

__all__ = [
    "SyncEngine",
    "SyncStatus",
    "ConnectionReport",
    "EventBus",
    "SyncEvent",
]
