"""DuckDB connection management for the local cache store."""

import threading
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import CACHE_PATH

_local = threading.local()


def db_exists(path: str = CACHE_PATH) -> bool:
    """Check if the cache file exists."""
    return Path(path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)


def _connections() -> dict[str, duckdb.DuckDBPyConnection]:
    if not hasattr(_local, "conns"):
        _local.conns = {}
    return _local.conns


def get_db(path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Get thread-local connection for a cache file, creating tables on first use."""
    path = str(path or CACHE_PATH)
    conns = _connections()
    if path not in conns:
        if not db_exists(path):
            logger.warning("Cache not found: {}. Creating empty cache.", path)
        conn = duckdb.connect(path)
        init_tables(conn)
        conns[path] = conn
        logger.debug("Cache connected: {}", path)
    return conns[path]


def close_db(path: str | None = None) -> None:
    """Close thread-local connection(s); all of them when no path is given."""
    conns = _connections()
    targets = [str(path)] if path else list(conns)
    for p in targets:
        conn = conns.pop(p, None)
        if conn is not None:
            conn.close()
            logger.debug("Cache connection closed: {}", p)


def reconnect_db(path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Force reconnect."""
    close_db(path or CACHE_PATH)
    return get_db(path)
