"""Tests for the dashboard service."""

from datetime import UTC, datetime

from app.models.election.entities import (
    Candidate,
    Student,
    SyncSnapshot,
    VotingConfig,
    VotingStatus,
)
from app.services.dashboard import DashboardService
from app.state import AppState

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


def make_state(tally: dict[int, int], voted: set[str] = frozenset()) -> AppState:
    snapshot = SyncSnapshot(
        students=tuple(Student(f"20230{i:02d}", f"Student {i}") for i in range(1, 5)),
        candidates=(Candidate(1, "Sofía Hernández", "SH"), Candidate(2, "Diego Morales", "DM"), Candidate(3, "Camila Torres", "CT")),
        config=VotingConfig(is_active=True),
        tally=tally,
        voted=frozenset(voted),
        synced_at=NOW,
    )
    return AppState(snapshot=snapshot)


class TestOverview:
    def test_overview(self):
        service = DashboardService(make_state({1: 1, 2: 2}, {"2023001", "2023002", "2023003"}), clock=lambda: NOW)

        data = service.get_overview()

        assert data["total_votes"] == 3
        assert data["total_students"] == 4
        assert data["remaining_voters"] == 1
        assert data["participation_pct"] == 75.0
        assert data["status"] == VotingStatus.ACTIVE
        assert data["last_sync"] == NOW
        assert data["online"]
        assert not data["stale"]

    def test_defaults_without_snapshot(self):
        data = DashboardService(AppState(), clock=lambda: NOW).get_overview()

        assert data["total_students"] == 5
        assert data["total_votes"] == 0
        assert data["participation_pct"] == 0.0
        assert data["status"] == VotingStatus.INACTIVE


class TestResults:
    def test_ranked(self):
        results = DashboardService(make_state({1: 1, 2: 2})).get_results()

        assert [r["code"] for r in results] == ["DM", "SH", "CT"]
        assert [r["votes"] for r in results] == [2, 1, 0]
        assert results[0]["percentage"] == 66.7
        assert results[2]["percentage"] == 0.0

    def test_ties_by_candidate_id(self):
        results = DashboardService(make_state({3: 1, 1: 1})).get_results()
        assert [r["candidate_id"] for r in results] == [1, 3, 2]

    def test_no_votes(self):
        results = DashboardService(make_state({})).get_results()

        assert [r["votes"] for r in results] == [0, 0, 0]
        assert all(r["percentage"] == 0.0 for r in results)
