"""Cache repository - last known-good election snapshot on this device."""

import json
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from app.errors import InvalidLocalState
from app.models.election.convert import (
    SNAPSHOT_KEYS,
    snapshot_from_blobs,
    snapshot_to_blobs,
)
from app.models.election.entities import SyncSnapshot
from app.repositories.base import BaseRepository

LAST_SYNC_KEY = "lastSync"


class CacheRepository(BaseRepository):
    """Key-value blobs (students, candidates, config, votes, lastSync), JSON-encoded."""

    def get(self, key: str) -> Any | None:
        """Load one cached blob."""
        row = self.fetchone("SELECT data FROM local_cache WHERE key = ?", [key])
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except (TypeError, ValueError) as e:
            raise InvalidLocalState(f"Cached '{key}' is not valid JSON") from e

    def set_many(self, blobs: dict[str, Any]) -> None:
        """Save several blobs as one unit; either all are written or none."""
        saved_at = datetime.now(UTC).replace(tzinfo=None)
        self.execute("BEGIN TRANSACTION")
        try:
            for key, data in blobs.items():
                self.execute(
                    "INSERT OR REPLACE INTO local_cache (key, data, saved_at) VALUES (?, ?, ?)",
                    [key, json.dumps(data), saved_at],
                )
            self.execute("COMMIT")
        except Exception:
            self.execute("ROLLBACK")
            raise
        logger.debug("Cache saved: {}", ", ".join(blobs))

    def save_snapshot(self, snapshot: SyncSnapshot) -> None:
        """Overwrite the cached snapshot atomically."""
        blobs = snapshot_to_blobs(snapshot)
        synced_at = snapshot.synced_at or datetime.now(UTC)
        blobs[LAST_SYNC_KEY] = synced_at.isoformat()
        self.set_many(blobs)

    def load_snapshot(self) -> SyncSnapshot | None:
        """Last saved snapshot, None if nothing was ever saved."""
        blobs = {key: self.get(key) for key in SNAPSHOT_KEYS}
        if all(v is None for v in blobs.values()):
            return None
        snapshot = snapshot_from_blobs(blobs, synced_at=self.last_sync())
        logger.debug("Cache hit: {} students, {} candidates", len(snapshot.students), len(snapshot.candidates))
        return snapshot

    def last_sync(self) -> datetime | None:
        value = self.get(LAST_SYNC_KEY)
        if not value:
            return None
        try:
            return datetime.fromisoformat(value)
        except (TypeError, ValueError) as e:
            raise InvalidLocalState("Cached lastSync is not a timestamp") from e

    def clear(self) -> None:
        self.execute("DELETE FROM local_cache")
        logger.info("Local cache cleared")
