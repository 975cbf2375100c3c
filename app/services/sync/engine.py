"""Sync engine - local mirror of gateway state and the single path for writes."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import duckdb
from loguru import logger

from app.errors import InvalidLocalState
from app.models.election.convert import config_from_schema, snapshot_from_payload
from app.models.election.defaults import default_snapshot
from app.models.election.entities import SnapshotSource, SyncSnapshot, VotingConfig
from app.repositories.common import CacheRepository
from app.services.sync.events import EventBus, SyncEvent
from app.state import AppState
from gateway_client.election import ElectionClient
from gateway_client.errors import GatewayError, NetworkUnavailable
from settings import ADMIN_SYNC_INTERVAL, COMBINED_READ, RECONCILE_DELAY, SYNC_INTERVAL


@dataclass
class SyncStatus:
    """Freshness of the local mirror, for status views."""

    online: bool
    stale: bool
    last_sync: datetime | None
    source: SnapshotSource | None
    provisional: bool
    interval: float


@dataclass
class ConnectionReport:
    """Result of an explicit connection test."""

    students: int
    candidates: int
    total_votes: int
    is_active: bool


def utcnow() -> datetime:
    return datetime.now(UTC)


class SyncEngine:
    """Pulls full election state from the gateway and pushes mutations to it.

    Reads never raise: on any failure the engine falls back to the cached
    snapshot, then to built-in defaults, and flags the state as stale.
    Writes (votes, config, reset) raise, so the caller knows the action
    did not complete.
    """

    def __init__(
        self,
        client: ElectionClient,
        cache: CacheRepository,
        state: AppState,
        events: EventBus | None = None,
        sync_interval: float = SYNC_INTERVAL,
        admin_interval: float = ADMIN_SYNC_INTERVAL,
        reconcile_delay: float = RECONCILE_DELAY,
        combined_read: bool = COMBINED_READ,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._client = client
        self._cache = cache
        self._state = state
        self.events = events or EventBus()
        self._sync_interval = sync_interval
        self._admin_interval = admin_interval
        self._reconcile_delay = reconcile_delay
        self._combined_read = combined_read
        self._clock = clock
        self._loop_task: asyncio.Task | None = None
        self._auto_sync = False
        self._pending: set[asyncio.Task] = set()
        logger.debug("SyncEngine initialized (combined_read={})", combined_read)

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def snapshot(self) -> SyncSnapshot:
        """Current snapshot; built-in defaults before the first pull."""
        return self._state.snapshot or default_snapshot()

    @property
    def interval(self) -> float:
        return self._admin_interval if self._state.admin_view else self._sync_interval

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    # ========== State updates ==========

    def _set_stale(self, stale: bool) -> None:
        if self._state.stale != stale:
            self._state.stale = stale
            self.events.publish(SyncEvent.STALE_CHANGED, stale)

    def _apply(self, snapshot: SyncSnapshot, stale: bool) -> None:
        """Replace the snapshot wholesale and notify subscribers."""
        self._state.snapshot = snapshot
        if not stale:
            self._state.last_error = None
        self._set_stale(stale)
        self.events.publish(SyncEvent.SNAPSHOT_UPDATED, snapshot)

    def _persist(self, snapshot: SyncSnapshot) -> None:
        try:
            self._cache.save_snapshot(snapshot)
        except duckdb.Error as e:
            logger.error("Cache write failed: {}", e)

    def _load_cached(self) -> SyncSnapshot | None:
        """Cached snapshot if it holds anything to show."""
        try:
            cached = self._cache.load_snapshot()
        except (InvalidLocalState, duckdb.Error) as e:
            logger.warning("Ignoring local cache: {}", e)
            return None
        if cached is None or cached.is_empty:
            return None
        return cached

    # ========== Reads ==========

    async def _fetch(self) -> SyncSnapshot:
        if self._combined_read:
            payload = await self._client.both()
        else:
            payload = await self._client.all_parts()
        return snapshot_from_payload(payload, synced_at=self._clock())

    def _fall_back(self, reason: str) -> SyncSnapshot:
        self._state.last_error = reason
        current = self._state.snapshot
        if current is not None and current.provisional:
            # Local votes not yet confirmed are newer than anything cached
            logger.warning("Sync failed ({}), keeping provisional state", reason)
            self._set_stale(True)
            return current

        snapshot = self._load_cached()
        if snapshot is None:
            logger.warning("Sync failed ({}), using built-in defaults", reason)
            snapshot = default_snapshot()
        else:
            logger.warning("Sync failed ({}), using cached data from {}", reason, snapshot.synced_at)
        self._apply(snapshot, stale=True)
        return snapshot

    async def pull(self) -> SyncSnapshot:
        """Full read of election state; falls back to cache or defaults on failure."""
        if not self._state.online:
            return self._fall_back("offline")
        if not self._client.configured:
            return self._fall_back("gateway not configured")

        try:
            snapshot = await self._fetch()
        except GatewayError as e:
            return self._fall_back(e.message)

        self._persist(snapshot)
        self._apply(snapshot, stale=False)
        logger.info(
            "Synced: {} students, {} candidates, {} votes, voting {}",
            len(snapshot.students),
            len(snapshot.candidates),
            snapshot.total_votes,
            snapshot.config.status(self._clock()),
        )
        return snapshot

    async def check_connection(self) -> ConnectionReport:
        """Strict read: raises instead of falling back."""
        self._require_online("reach the gateway")
        snapshot = await self._fetch()
        self._persist(snapshot)
        self._apply(snapshot, stale=False)
        return ConnectionReport(
            students=len(snapshot.students),
            candidates=len(snapshot.candidates),
            total_votes=snapshot.total_votes,
            is_active=snapshot.config.is_open(self._clock()),
        )

    # ========== Writes ==========

    def _require_online(self, action: str) -> None:
        if not self._state.online:
            logger.error("Cannot {} while offline", action)
            raise NetworkUnavailable(f"No connection: cannot {action}")
        if not self._client.configured:
            logger.error("Cannot {}: gateway not configured", action)
            raise NetworkUnavailable(f"Gateway not configured: cannot {action}")

    async def cast_vote(self, student_id: str, candidate_id: int) -> dict:
        """Register a vote, mirror it locally as provisional, then reconcile."""
        self._require_online("cast a vote")
        logger.info("Casting vote: student={}, candidate={}", student_id, candidate_id)
        try:
            ack = await self._client.add_vote(student_id, candidate_id)
        except GatewayError as e:
            logger.error("Vote failed: {}", e.message)
            raise

        self._apply(self.snapshot.with_vote(student_id, candidate_id), stale=self._state.stale)
        self._schedule_reconcile()
        return ack

    async def set_config(
        self,
        is_active: bool | None = None,
        start_time: datetime | str | None = None,
        end_time: datetime | str | None = None,
    ) -> VotingConfig:
        """Send a partial config update and keep the gateway's canonical answer."""
        self._require_online("change the voting config")
        logger.info("Updating config: active={}, start={}, end={}", is_active, start_time, end_time)
        try:
            schema = await self._client.set_config(is_active=is_active, start_time=start_time, end_time=end_time)
        except GatewayError as e:
            logger.error("Config update failed: {}", e.message)
            raise

        config = config_from_schema(schema)
        self._apply(self.snapshot.with_config(config), stale=self._state.stale)
        return config

    async def clear_votes(self) -> dict:
        """Reset every vote at the gateway and locally."""
        self._require_online("clear votes")
        logger.warning("Clearing all votes")
        try:
            ack = await self._client.clear_votes()
        except GatewayError as e:
            logger.error("Clearing votes failed: {}", e.message)
            raise

        self._apply(self.snapshot.with_cleared_votes(), stale=self._state.stale)
        return ack

    def _schedule_reconcile(self) -> None:
        task = asyncio.create_task(self._reconcile_later())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _reconcile_later(self) -> None:
        # Gateway aggregation lags the write
        await asyncio.sleep(self._reconcile_delay)
        await self.pull()

    async def drain(self) -> None:
        """Wait for scheduled reconciliation pulls to finish."""
        if self._pending:
            await asyncio.gather(*self._pending)

    # ========== Background loop ==========

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.pull()
            except Exception:
                logger.exception("Background sync failed")

    def _start_loop(self) -> None:
        if self.running or not self._state.online:
            return
        self._loop_task = asyncio.create_task(self._run())
        logger.info("Background sync every {}s", self.interval)

    def _stop_loop(self) -> None:
        if self._loop_task is not None:
            self._loop_task.cancel()
            self._loop_task = None

    def start(self) -> None:
        """Start polling; suspended while offline."""
        self._auto_sync = True
        self._start_loop()

    def stop(self) -> None:
        self._auto_sync = False
        self._stop_loop()
        logger.info("Background sync stopped")

    async def close(self) -> None:
        """Stop polling and cancel pending reconciliations."""
        loop_task = self._loop_task
        self.stop()
        tasks = [t for t in (loop_task, *self._pending) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def set_online(self, online: bool) -> None:
        """Connectivity change reported by the host platform."""
        if online == self._state.online:
            return
        self._state.online = online
        if not online:
            logger.warning("Connection lost, background sync suspended")
            self._stop_loop()
            self._set_stale(True)
            return

        logger.info("Connection restored")
        if self._auto_sync:
            self._start_loop()
        await self.pull()

    async def on_visibility_change(self, visible: bool) -> None:
        """Pull once when the page becomes visible again."""
        if visible:
            await self.pull()

    def set_admin_view(self, is_open: bool) -> None:
        """Admin views poll faster; a running loop picks up the new interval now."""
        if self._state.admin_view == is_open:
            return
        self._state.admin_view = is_open
        if self.running:
            self._stop_loop()
            self._start_loop()

    def status(self) -> SyncStatus:
        snapshot = self._state.snapshot
        return SyncStatus(
            online=self._state.online,
            stale=self._state.stale,
            last_sync=snapshot.synced_at if snapshot else None,
            source=snapshot.source if snapshot else None,
            provisional=snapshot.provisional if snapshot else False,
            interval=self.interval,
        )
