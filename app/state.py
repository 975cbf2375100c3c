"""Shared application state."""

from dataclasses import dataclass

from app.models.election.entities import SyncSnapshot


@dataclass
class AppState:
    """Synchronized election state, shared by reference.

    Only the sync engine writes these fields; voting sessions keep their own
    student and selection and only read ``snapshot``.
    """

    snapshot: SyncSnapshot | None = None
    online: bool = True
    stale: bool = False
    admin_view: bool = False
    last_error: str | None = None
