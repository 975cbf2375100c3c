"""Base HTTP client for the spreadsheet gateway with retry logic."""

import asyncio
from datetime import datetime
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception,
    wait_exponential,
)

from gateway_client.errors import (
    GatewayApplicationError,
    GatewayHTTPError,
    NetworkUnavailable,
)
from gateway_client.schemas import GatewayEnvelope

# Default settings
GATEWAY_URL = ""
GATEWAY_TIMEOUT = 30
GATEWAY_TOKEN = ""
READ_ATTEMPTS = 3


def set_gateway_config(url: str, timeout: int = GATEWAY_TIMEOUT, token: str = "", attempts: int = READ_ATTEMPTS) -> None:
    """Set gateway configuration."""
    global GATEWAY_URL, GATEWAY_TIMEOUT, GATEWAY_TOKEN, READ_ATTEMPTS
    GATEWAY_URL = url
    GATEWAY_TIMEOUT = timeout
    GATEWAY_TOKEN = token
    READ_ATTEMPTS = attempts


def _is_retryable_error(exc: BaseException) -> bool:
    """Check if exception is retryable (network errors + 5xx server errors)."""
    if isinstance(exc, (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


def _read_attempts(retry_state) -> bool:
    """Stop once READ_ATTEMPTS is reached (read at call time so it can be reconfigured)."""
    return retry_state.attempt_number >= READ_ATTEMPTS


def encode_param(value: Any) -> str:
    """Format a query value the way the gateway expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class BaseClient:
    """Base async gateway client with a concurrency cap and exponential backoff on reads.

    The gateway is a single URL; every call is a GET carrying an ``action``
    parameter and answers with ``{"success": bool, "data": ..., "error": ...}``.
    """

    def __init__(
        self,
        max_concurrent: int = 4,
        base_url: str | None = None,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = GATEWAY_URL if base_url is None else base_url
        self._token = GATEWAY_TOKEN if token is None else token
        self._client = client
        self._owns_client = client is None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_count = 0
        logger.info("{}: max_concurrent={}", self.__class__.__name__, max_concurrent)

    @property
    def configured(self) -> bool:
        """True when a gateway URL is set."""
        return bool(self._base_url)

    @property
    def request_count(self) -> int:
        return self._request_count

    async def open(self) -> None:
        """Create the underlying HTTP client if none was injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=GATEWAY_TIMEOUT,
                follow_redirects=True,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
            self._owns_client = True

    async def aclose(self) -> None:
        logger.info("Total gateway requests: {}", self._request_count)
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, *_):
        await self.aclose()

    def _params(self, action: str, params: dict[str, Any] | None) -> dict[str, str]:
        query = {"action": action}
        for key, value in (params or {}).items():
            if value is not None:
                query[key] = encode_param(value)
        if self._token:
            query["token"] = self._token
        return query

    async def _send(self, query: dict[str, str]) -> httpx.Response:
        """Single GET request."""
        if self._client is None:
            await self.open()
        async with self._sem:
            self._request_count += 1
            resp = await self._client.get(self._base_url, params=query)
            resp.raise_for_status()
            return resp

    @retry(
        stop=_read_attempts,
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    async def _send_with_retry(self, query: dict[str, str]) -> httpx.Response:
        """GET request with retry logic."""
        return await self._send(query)

    async def _call(self, action: str, params: dict[str, Any] | None = None, retry_read: bool = True) -> Any:
        """Run a gateway action and unwrap its envelope.

        Reads are retried on transient failures; writes go out exactly once.
        """
        query = self._params(action, params)
        try:
            if retry_read:
                resp = await self._send_with_retry(query)
            else:
                resp = await self._send(query)
        except httpx.HTTPStatusError as e:
            raise GatewayHTTPError(e.response.status_code) from e
        except httpx.RequestError as e:
            raise NetworkUnavailable(f"{action}: {e}") from e

        try:
            envelope = GatewayEnvelope.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise GatewayApplicationError(f"{action}: invalid response body") from e

        if not envelope.success:
            raise GatewayApplicationError(envelope.error or "Unknown gateway error")
        return envelope.data
