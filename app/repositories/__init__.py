"""Repositories package - data access layer for the local cache store."""

from app.repositories.base import BaseRepository
from app.repositories.common import CacheRepository
from app.repositories.db import (
    close_db,
    get_db,
    init_tables,
    reconnect_db,
)

__all__ = [
    # DB
    "get_db",
    "close_db",
    "reconnect_db",
    "init_tables",
    # Base
    "BaseRepository",
    # Common
    "CacheRepository",
]
