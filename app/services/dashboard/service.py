"""Dashboard service."""

from collections.abc import Callable
from datetime import datetime

import polars as pl

from app.models.election.defaults import default_snapshot
from app.models.election.entities import SyncSnapshot
from app.services.sync.engine import utcnow
from app.state import AppState


class DashboardService:
    """Election figures for the admin dashboard, read from shared state."""

    def __init__(self, state: AppState, clock: Callable[[], datetime] = utcnow):
        self._state = state
        self._clock = clock

    def _snapshot(self) -> SyncSnapshot:
        return self._state.snapshot or default_snapshot()

    def get_overview(self) -> dict:
        """Totals, participation and voting status."""
        snapshot = self._snapshot()
        total_students = len(snapshot.students)
        total_votes = snapshot.total_votes

        participation = 0.0
        if total_students > 0:
            participation = round(total_votes / total_students * 100, 1)

        return {
            "total_votes": total_votes,
            "total_students": total_students,
            "remaining_voters": max(total_students - len(snapshot.voted), 0),
            "participation_pct": participation,
            "status": snapshot.config.status(self._clock()),
            "last_sync": snapshot.synced_at,
            "online": self._state.online,
            "stale": self._state.stale,
        }

    def get_results(self) -> list[dict]:
        """Candidates with votes and share, most voted first."""
        snapshot = self._snapshot()
        if not snapshot.candidates:
            return []

        candidates = pl.DataFrame(
            [{"candidate_id": c.candidate_id, "name": c.name, "code": c.code} for c in snapshot.candidates]
        )
        tally = pl.DataFrame(
            {"candidate_id": list(snapshot.tally.keys()), "votes": list(snapshot.tally.values())},
            schema={"candidate_id": pl.Int64, "votes": pl.Int64},
        )

        total = snapshot.total_votes
        share = (pl.col("votes") * 100 / total).round(1) if total else pl.lit(0.0)

        results = (
            candidates.join(tally, on="candidate_id", how="left")
            .with_columns(pl.col("votes").fill_null(0))
            .with_columns(share.alias("percentage"))
            .sort(["votes", "candidate_id"], descending=[True, False])
        )
        return results.to_dicts()
