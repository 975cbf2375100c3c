"""Tests for the local snapshot cache."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from app.errors import InvalidLocalState
from app.models.election.entities import (
    Candidate,
    SnapshotSource,
    Student,
    SyncSnapshot,
    VotingConfig,
)
from app.repositories.common.cache import LAST_SYNC_KEY

SYNCED = datetime(2024, 5, 10, 9, 15, tzinfo=UTC)


@pytest.fixture
def snapshot():
    return SyncSnapshot(
        students=(Student("2023001", "Juan Pérez", "11-A"), Student("2023009", "Pedro Ruiz", "9-B", False)),
        candidates=(Candidate(1, "Sofía Hernández", "SH", "", "Deportes"),),
        config=VotingConfig(is_active=True, start_time=datetime(2024, 5, 10, 8, 0, tzinfo=UTC)),
        tally={1: 4},
        voted=frozenset({"2023001"}),
        synced_at=SYNCED,
    )


class TestCacheRepository:
    def test_empty(self, cache):
        assert cache.load_snapshot() is None
        assert cache.last_sync() is None

    def test_save_and_load(self, cache, snapshot):
        cache.save_snapshot(snapshot)
        loaded = cache.load_snapshot()

        assert loaded == replace(snapshot, source=SnapshotSource.CACHE)
        assert loaded.synced_at == SYNCED

    def test_blobs_use_wire_names(self, cache, snapshot):
        cache.save_snapshot(snapshot)

        assert cache.get("students")[0] == {
            "carnet": "2023001",
            "nombre": "Juan Pérez",
            "curso": "11-A",
            "habilitado": True,
        }
        assert cache.get("votes") == {"votes": {"1": 4}, "votedStudents": ["2023001"]}
        assert cache.get("config")["isActive"] is True
        assert cache.get(LAST_SYNC_KEY) == SYNCED.isoformat()

    def test_overwrite(self, cache, snapshot):
        cache.save_snapshot(snapshot)
        cache.save_snapshot(snapshot.with_cleared_votes())

        loaded = cache.load_snapshot()
        assert loaded.tally == {1: 0}
        assert loaded.voted == frozenset()

    def test_corrupt_blob(self, cache, snapshot):
        cache.save_snapshot(snapshot)
        cache.execute("UPDATE local_cache SET data = ? WHERE key = 'students'", ['[{"carnet": 1}]'])

        with pytest.raises(InvalidLocalState):
            cache.load_snapshot()

    def test_set_many_is_atomic(self, cache, snapshot):
        cache.save_snapshot(snapshot)

        with pytest.raises(TypeError):
            cache.set_many({"students": [], "config": object()})

        assert len(cache.load_snapshot().students) == 2

    def test_clear(self, cache, snapshot):
        cache.save_snapshot(snapshot)
        cache.clear()
        assert cache.load_snapshot() is None

    def test_survives_reconnect(self, cache, snapshot):
        cache.save_snapshot(snapshot)
        cache.refresh()
        assert cache.load_snapshot().tally == {1: 4}
