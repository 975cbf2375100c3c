"""Base repository class."""

from typing import Any

from loguru import logger

from app.repositories.db import get_db, reconnect_db


class BaseRepository:
    """Base repository over the local DuckDB cache file."""

    def __init__(self, path: str | None = None):
        self._path = path
        self._db = get_db(path)
        logger.debug("{} initialized", self.__class__.__name__)

    def refresh(self) -> None:
        """Reconnect to the cache file."""
        self._db = reconnect_db(self._path)
        logger.info("Repository refreshed")

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()
