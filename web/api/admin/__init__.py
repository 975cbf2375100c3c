"""Admin API."""

from web.api.admin.views import (
    clear_votes,
    end_voting,
    login,
    logout,
    start_voting,
    sync_now,
    test_connection,
)

__all__ = [
    "login",
    "logout",
    "start_voting",
    "end_voting",
    "clear_votes",
    "sync_now",
    "test_connection",
]
