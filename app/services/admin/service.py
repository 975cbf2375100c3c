"""Admin control service - voting window, vote reset and manual sync."""

import hmac
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import NotAuthorized
from app.models.election.entities import VotingConfig
from app.services.sync.engine import ConnectionReport, SyncEngine, SyncStatus, utcnow


class AdminService:
    """Admin actions, all routed through the sync engine.

    The shared secret only unlocks this surface on the device; the gateway
    token configured on the client is what the gateway itself checks.
    """

    def __init__(self, engine: SyncEngine, secret: str, clock: Callable[[], datetime] = utcnow):
        self._engine = engine
        self._secret = secret
        self._clock = clock
        self._authenticated = False

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    async def login(self, secret: str | None) -> bool:
        """Unlock admin actions, switch to admin polling and refresh."""
        if not secret or not self._secret or not hmac.compare_digest(secret.encode(), self._secret.encode()):
            logger.warning("Admin login rejected")
            return False
        self._authenticated = True
        self._engine.set_admin_view(True)
        await self._engine.pull()
        logger.info("Admin logged in")
        return True

    def logout(self) -> None:
        self._authenticated = False
        self._engine.set_admin_view(False)

    def _require_login(self) -> None:
        if not self._authenticated:
            raise NotAuthorized()

    async def start_voting(
        self,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> VotingConfig:
        """Open the vote now or at `start_time`; no end time means open-ended."""
        self._require_login()
        return await self._engine.set_config(
            is_active=True,
            start_time=start_time or self._clock(),
            end_time=end_time or "",
        )

    async def end_voting(self) -> VotingConfig:
        self._require_login()
        return await self._engine.set_config(is_active=False)

    async def clear_votes(self) -> dict:
        self._require_login()
        return await self._engine.clear_votes()

    async def sync_now(self) -> SyncStatus:
        """Manual refresh; the status tells whether fresh data arrived."""
        self._require_login()
        await self._engine.pull()
        return self._engine.status()

    async def test_connection(self) -> ConnectionReport:
        self._require_login()
        return await self._engine.check_connection()
