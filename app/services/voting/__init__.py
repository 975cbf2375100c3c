"""Voting session services."""

from app.services.voting.session import (
    Rejection,
    SessionResult,
    SessionState,
    VotingSession,
)

__all__ = [
    "VotingSession",
    "SessionState",
    "SessionResult",
    "Rejection",
]
