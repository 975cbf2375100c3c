"""Models package - DDL and entities."""

from app.models.common import CACHE_DDL, BaseEntity
from app.models.election import (
    Candidate,
    SnapshotSource,
    Student,
    SyncSnapshot,
    VotingConfig,
    VotingStatus,
    default_snapshot,
)

ALL_DDL = [
    CACHE_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    "CACHE_DDL",
    # Election
    "Student",
    "Candidate",
    "VotingConfig",
    "VotingStatus",
    "SyncSnapshot",
    "SnapshotSource",
    "default_snapshot",
    # All DDL
    "ALL_DDL",
]
