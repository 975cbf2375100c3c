"""Dependency Injection container - initialized at app startup."""

from loguru import logger

from app.repositories.common.cache import CacheRepository
from app.services.admin import AdminService
from app.services.dashboard import DashboardService
from app.services.sync import EventBus, SyncEngine
from app.services.voting import VotingSession
from app.state import AppState
from gateway_client import ElectionClient, set_gateway_config
from settings import (
    ADMIN_SECRET,
    API_RETRIES,
    API_TIMEOUT,
    CACHE_PATH,
    GATEWAY_TOKEN,
    GATEWAY_URL,
    MAX_CONCURRENT,
)


class Container:
    """Application DI container - owns the shared state and all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(
        self,
        client: ElectionClient | None = None,
        cache_path: str | None = None,
        admin_secret: str | None = None,
        **engine_options,
    ) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        set_gateway_config(GATEWAY_URL, API_TIMEOUT, GATEWAY_TOKEN, API_RETRIES)

        # Shared state + infrastructure (singletons)
        self.state = AppState()
        self.events = EventBus()
        self._cache_repo = CacheRepository(cache_path or CACHE_PATH)
        self._client = client or ElectionClient(max_concurrent=MAX_CONCURRENT)

        # Services (with injected state)
        self.engine = SyncEngine(
            client=self._client,
            cache=self._cache_repo,
            state=self.state,
            events=self.events,
            **engine_options,
        )

        self.admin = AdminService(
            engine=self.engine,
            secret=ADMIN_SECRET if admin_secret is None else admin_secret,
        )

        self.dashboard = DashboardService(state=self.state)

        # Voting flow for this device
        self.session = VotingSession(engine=self.engine)

        self._initialized = True

    async def start(self) -> None:
        """Open the gateway client, load initial state and start polling."""
        await self._client.open()
        await self.engine.pull()
        self.engine.start()
        logger.info("Election client started")

    async def stop(self) -> None:
        await self.engine.close()
        await self._client.aclose()
        logger.info("Election client stopped")

    def new_session(self) -> VotingSession:
        """Fresh voting flow bound to the shared engine."""
        return VotingSession(engine=self.engine)

    def reset(self) -> None:
        """Forget all instances so init() can run again."""
        self._initialized = False


# Global container instance
container = Container()
