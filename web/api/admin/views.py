"""Admin API views - thin layer over the admin service."""

from datetime import datetime

from app.container import container
from app.models.election.entities import VotingConfig
from app.services.sync.engine import utcnow
from web.api.dashboard.schemas import SyncStatusResponse
from web.api.dashboard.views import get_sync_status
from web.api.errors import validate_window

from .schemas import ActionResponse, ConfigResponse, ConnectionResponse, LoginResponse


def _config_response(config: VotingConfig) -> ConfigResponse:
    return ConfigResponse(
        is_active=config.is_active,
        is_ended=config.is_ended,
        start_time=config.start_time,
        end_time=config.end_time,
        status=config.status(utcnow()),
    )


async def login(secret: str) -> LoginResponse:
    """Unlock the admin dashboard."""
    return LoginResponse(authenticated=await container.admin.login(secret))


def logout() -> LoginResponse:
    container.admin.logout()
    return LoginResponse(authenticated=False)


async def start_voting(start_time: datetime | None = None, end_time: datetime | None = None) -> ConfigResponse:
    """Open the vote on every device."""
    validate_window(start_time, end_time)
    return _config_response(await container.admin.start_voting(start_time, end_time))


async def end_voting() -> ConfigResponse:
    """Close the vote on every device."""
    return _config_response(await container.admin.end_voting())


async def clear_votes() -> ActionResponse:
    """Delete all votes on every device."""
    await container.admin.clear_votes()
    return ActionResponse(ok=True, message="All votes have been cleared")


async def sync_now() -> SyncStatusResponse:
    """Manual sync."""
    await container.admin.sync_now()
    return get_sync_status()


async def test_connection() -> ConnectionResponse:
    """Strict connection test."""
    report = await container.admin.test_connection()

    return ConnectionResponse(
        students=report.students,
        candidates=report.candidates,
        total_votes=report.total_votes,
        is_active=report.is_active,
    )
