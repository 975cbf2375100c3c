"""Dashboard API views - thin layer over services."""

from app.container import container
from web.api.errors import require_admin

from .schemas import OverviewResponse, ResultItem, ResultsResponse, SyncStatusResponse


def get_overview() -> OverviewResponse:
    """Get dashboard overview."""
    require_admin()
    data = container.dashboard.get_overview()

    return OverviewResponse(
        total_votes=data["total_votes"],
        total_students=data["total_students"],
        remaining_voters=data["remaining_voters"],
        participation_pct=data["participation_pct"],
        status=data["status"],
        last_sync=data["last_sync"],
        online=data["online"],
        stale=data["stale"],
    )


def get_results() -> ResultsResponse:
    """Get candidates ranked by votes."""
    require_admin()
    data = container.dashboard.get_results()

    items = [
        ResultItem(
            position=i,
            candidate_id=r["candidate_id"],
            name=r["name"],
            code=r["code"],
            votes=r["votes"],
            percentage=r["percentage"],
        )
        for i, r in enumerate(data, start=1)
    ]

    return ResultsResponse(total_votes=container.dashboard.get_overview()["total_votes"], items=items)


def get_sync_status() -> SyncStatusResponse:
    """Online/stale indicator; available without login."""
    status = container.engine.status()

    return SyncStatusResponse(
        online=status.online,
        stale=status.stale,
        last_sync=status.last_sync,
        source=status.source,
        provisional=status.provisional,
        interval=status.interval,
    )
