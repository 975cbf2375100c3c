"""Election domain models - entities, defaults and conversions."""

from app.models.election.defaults import DEFAULT_CANDIDATES, DEFAULT_STUDENTS, default_snapshot
from app.models.election.entities import (
    Candidate,
    SnapshotSource,
    Student,
    SyncSnapshot,
    VotingConfig,
    VotingStatus,
)

__all__ = [
    "Student",
    "Candidate",
    "VotingConfig",
    "VotingStatus",
    "SyncSnapshot",
    "SnapshotSource",
    "DEFAULT_STUDENTS",
    "DEFAULT_CANDIDATES",
    "default_snapshot",
]
