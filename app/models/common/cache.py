"""Local cache table - last known-good election snapshot, one row per blob."""

CACHE_DDL = """
CREATE TABLE IF NOT EXISTS local_cache (
    key VARCHAR PRIMARY KEY,
    data JSON NOT NULL,
    saved_at TIMESTAMP NOT NULL
)
"""
