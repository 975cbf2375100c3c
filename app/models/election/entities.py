"""Election domain entities - roster, candidates, voting window and synced snapshots."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum

from app.models.common import BaseEntity


class VotingStatus(StrEnum):
    """Dashboard label for the voting window."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ENDED = "ENDED"


class SnapshotSource(StrEnum):
    """Where a snapshot came from."""

    REMOTE = "remote"
    CACHE = "cache"
    DEFAULT = "default"


def as_aware(moment: datetime) -> datetime:
    """Naive timestamps are wall-clock times on this device."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


@dataclass(frozen=True)
class Student(BaseEntity):
    """Registered voter."""

    student_id: str
    name: str
    cohort: str = ""
    eligible: bool = True


@dataclass(frozen=True)
class Candidate(BaseEntity):
    """Candidate on the ballot."""

    candidate_id: int
    name: str
    code: str = ""
    photo_url: str = ""
    platform: str = ""


@dataclass(frozen=True)
class VotingConfig(BaseEntity):
    """Voting window. Singleton per election, changed only through the gateway."""

    is_active: bool = False
    is_ended: bool = False
    start_time: datetime | None = None
    end_time: datetime | None = None

    def is_open(self, now: datetime) -> bool:
        """True when votes may be cast at `now`; an ended election is never open."""
        if self.is_ended or not self.is_active:
            return False
        now = as_aware(now)
        if self.start_time and now < as_aware(self.start_time):
            return False
        if self.end_time and now > as_aware(self.end_time):
            return False
        return True

    def status(self, now: datetime) -> VotingStatus:
        if self.is_ended:
            return VotingStatus.ENDED
        return VotingStatus.ACTIVE if self.is_open(now) else VotingStatus.INACTIVE


@dataclass(frozen=True)
class SyncSnapshot(BaseEntity):
    """One full read of election state.

    Snapshots are replaced wholesale, never merged. Local optimistic changes
    produce a new snapshot tagged ``provisional`` until the next confirmed read.
    ``synced_at`` does not take part in equality.
    """

    students: tuple[Student, ...] = ()
    candidates: tuple[Candidate, ...] = ()
    config: VotingConfig = field(default_factory=VotingConfig)
    tally: dict[int, int] = field(default_factory=dict)
    voted: frozenset[str] = frozenset()
    synced_at: datetime | None = field(default=None, compare=False)
    source: SnapshotSource = SnapshotSource.REMOTE
    provisional: bool = False

    @property
    def total_votes(self) -> int:
        return sum(self.tally.values())

    @property
    def is_empty(self) -> bool:
        return not self.students and not self.candidates

    def find_student(self, student_id: str) -> Student | None:
        """Eligible roster entry for an id, if any."""
        for s in self.students:
            if s.student_id == student_id and s.eligible:
                return s
        return None

    def find_candidate(self, candidate_id: int) -> Candidate | None:
        for c in self.candidates:
            if c.candidate_id == candidate_id:
                return c
        return None

    def has_voted(self, student_id: str) -> bool:
        return student_id in self.voted

    def with_vote(self, student_id: str, candidate_id: int) -> "SyncSnapshot":
        """Provisional copy with one more vote; a student is never counted twice."""
        if student_id in self.voted:
            return replace(self, provisional=True)
        tally = dict(self.tally)
        tally[candidate_id] = tally.get(candidate_id, 0) + 1
        return replace(self, tally=tally, voted=self.voted | {student_id}, provisional=True)

    def with_cleared_votes(self) -> "SyncSnapshot":
        """Provisional copy with a zeroed tally and no voters."""
        tally = {c.candidate_id: 0 for c in self.candidates}
        return replace(self, tally=tally, voted=frozenset(), provisional=True)

    def with_config(self, config: VotingConfig) -> "SyncSnapshot":
        return replace(self, config=config)
