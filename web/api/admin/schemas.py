"""Admin API response schemas."""

from datetime import datetime

from pydantic import BaseModel


class LoginResponse(BaseModel):
    """Admin login result."""

    authenticated: bool


class ConfigResponse(BaseModel):
    """Canonical voting config after a change."""

    is_active: bool
    is_ended: bool
    start_time: datetime | None
    end_time: datetime | None
    status: str


class ActionResponse(BaseModel):
    """Acknowledgement of an admin action."""

    ok: bool
    message: str


class ConnectionResponse(BaseModel):
    """Connection test summary."""

    students: int
    candidates: int
    total_votes: int
    is_active: bool
