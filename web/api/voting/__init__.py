"""Voting API."""

from web.api.voting.views import (
    confirm_vote,
    get_ballot,
    reset_session,
    select_candidate,
    submit_identity,
)

__all__ = [
    "submit_identity",
    "get_ballot",
    "select_candidate",
    "confirm_vote",
    "reset_session",
]
