"""Dashboard API."""

from web.api.dashboard.views import get_overview, get_results, get_sync_status

__all__ = [
    "get_overview",
    "get_results",
    "get_sync_status",
]
