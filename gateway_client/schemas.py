"""Gateway envelope schema."""

from typing import Any

from pydantic import BaseModel


class GatewayEnvelope(BaseModel):
    """Every gateway response: success flag plus data or error."""

    success: bool
    data: Any = None
    error: str | None = None
