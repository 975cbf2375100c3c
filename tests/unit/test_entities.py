"""Tests for election entities."""

from datetime import UTC, datetime, timedelta

from app.models.election.defaults import default_snapshot
from app.models.election.entities import (
    Candidate,
    SnapshotSource,
    Student,
    SyncSnapshot,
    VotingConfig,
    VotingStatus,
)

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


def make_snapshot(**overrides) -> SyncSnapshot:
    values = {
        "students": (Student("2023001", "Juan Pérez", "11-A"), Student("2023009", "Pedro Ruiz", "9-B", False)),
        "candidates": (Candidate(1, "Sofía Hernández", "SH"), Candidate(2, "Diego Morales", "DM")),
        "config": VotingConfig(is_active=True),
        "tally": {1: 0, 2: 0},
    }
    values.update(overrides)
    return SyncSnapshot(**values)


class TestVotingWindow:
    def test_inactive_is_closed(self):
        assert not VotingConfig(is_active=False).is_open(NOW)

    def test_active_without_bounds_is_open(self):
        assert VotingConfig(is_active=True).is_open(NOW)

    def test_before_start(self):
        config = VotingConfig(is_active=True, start_time=NOW + timedelta(minutes=1))
        assert not config.is_open(NOW)

    def test_after_end(self):
        config = VotingConfig(is_active=True, end_time=NOW - timedelta(seconds=1))
        assert not config.is_open(NOW)

    def test_bounds_are_inclusive(self):
        config = VotingConfig(is_active=True, start_time=NOW, end_time=NOW)
        assert config.is_open(NOW)

    def test_ended_is_never_open(self):
        config = VotingConfig(is_active=True, is_ended=True)
        assert not config.is_open(NOW)
        assert config.status(NOW) == VotingStatus.ENDED

    def test_status_labels(self):
        assert VotingConfig(is_active=True).status(NOW) == VotingStatus.ACTIVE
        assert VotingConfig().status(NOW) == VotingStatus.INACTIVE

    def test_naive_times_are_local(self):
        local_now = datetime.now().replace(microsecond=0)
        config = VotingConfig(is_active=True, start_time=local_now - timedelta(hours=1))
        assert config.is_open(local_now.astimezone(UTC))


class TestSnapshot:
    def test_find_student_skips_ineligible(self):
        snapshot = make_snapshot()
        assert snapshot.find_student("2023001").name == "Juan Pérez"
        assert snapshot.find_student("2023009") is None
        assert snapshot.find_student("9999999") is None

    def test_with_vote_counts_once(self):
        snapshot = make_snapshot().with_vote("2023001", 2)
        again = snapshot.with_vote("2023001", 1)

        assert snapshot.tally == {1: 0, 2: 1}
        assert again.tally == {1: 0, 2: 1}
        assert again.total_votes == 1
        assert again.has_voted("2023001")
        assert again.provisional

    def test_with_vote_keeps_original(self):
        original = make_snapshot()
        original.with_vote("2023001", 1)
        assert original.total_votes == 0
        assert not original.provisional

    def test_with_cleared_votes(self):
        snapshot = make_snapshot(tally={1: 3, 2: 4}, voted=frozenset({"2023001"}))
        cleared = snapshot.with_cleared_votes()

        assert cleared.tally == {1: 0, 2: 0}
        assert cleared.voted == frozenset()
        assert cleared.provisional

    def test_equality_ignores_sync_time(self):
        a = make_snapshot(synced_at=NOW)
        b = make_snapshot(synced_at=NOW + timedelta(minutes=5))
        assert a == b

    def test_to_dict(self):
        data = make_snapshot(voted=frozenset({"2023002", "2023001"}), synced_at=NOW).to_dict()
        assert data["voted"] == ["2023001", "2023002"]
        assert data["synced_at"] == NOW.isoformat()
        assert data["source"] == "remote"


class TestDefaults:
    def test_default_snapshot(self):
        snapshot = default_snapshot()

        assert len(snapshot.students) == 5
        assert len(snapshot.candidates) == 3
        assert not snapshot.config.is_active
        assert snapshot.total_votes == 0
        assert snapshot.source == SnapshotSource.DEFAULT
