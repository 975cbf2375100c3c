"""Services package - service class exports."""

from app.services.admin import AdminService
from app.services.dashboard import DashboardService
from app.services.sync import EventBus, SyncEngine
from app.services.voting import VotingSession

__all__ = [
    "AdminService",
    "DashboardService",
    "EventBus",
    "SyncEngine",
    "VotingSession",
]
