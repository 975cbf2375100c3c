"""Dashboard API response schemas."""

from datetime import datetime

from pydantic import BaseModel


class OverviewResponse(BaseModel):
    """Dashboard overview response."""

    total_votes: int
    total_students: int
    remaining_voters: int
    participation_pct: float
    status: str
    last_sync: datetime | None
    online: bool
    stale: bool


class ResultItem(BaseModel):
    """Votes for one candidate."""

    position: int
    candidate_id: int
    name: str
    code: str
    votes: int
    percentage: float


class ResultsResponse(BaseModel):
    """Ranked results response."""

    total_votes: int
    items: list[ResultItem]


class SyncStatusResponse(BaseModel):
    """Freshness indicator."""

    online: bool
    stale: bool
    last_sync: datetime | None
    source: str | None
    provisional: bool
    interval: float
