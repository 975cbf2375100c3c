"""Voting session - identity check, candidate selection and confirmation for one voter."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from loguru import logger

from app.errors import InvalidTransition
from app.models.election.entities import Candidate, Student
from app.services.sync.engine import SyncEngine, utcnow
from gateway_client.errors import GatewayError


class SessionState(StrEnum):
    AWAITING_IDENTITY = "awaiting_identity"
    CANDIDATE_SELECTION = "candidate_selection"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class Rejection(StrEnum):
    """Expected reasons a voter cannot proceed."""

    MISSING_IDENTITY = "missing_identity"
    VOTING_NOT_ACTIVE = "voting_not_active"
    UNKNOWN_IDENTITY = "unknown_identity"
    ALREADY_VOTED = "already_voted"
    NO_SELECTION = "no_selection"
    UNKNOWN_CANDIDATE = "unknown_candidate"


MESSAGES = {
    Rejection.MISSING_IDENTITY: "Please enter your student id.",
    Rejection.VOTING_NOT_ACTIVE: "Voting is not open at the moment.",
    Rejection.UNKNOWN_IDENTITY: "Invalid student id. You are not registered to vote.",
    Rejection.ALREADY_VOTED: "You have already voted. You cannot vote again.",
    Rejection.NO_SELECTION: "You must select a candidate.",
    Rejection.UNKNOWN_CANDIDATE: "That candidate is not on the ballot.",
}


@dataclass
class SessionResult:
    """Outcome of one session transition."""

    state: SessionState
    reason: Rejection | None = None
    message: str = ""
    student: Student | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None and self.error is None


class VotingSession:
    """Per-voter flow: AWAITING_IDENTITY -> CANDIDATE_SELECTION -> CONFIRMED.

    A rejected identity yields a REJECTED result while the session stays
    ready for another identity. Eligibility is checked against a snapshot
    pulled at submission time, so a stale roster or voted set is never used;
    the gateway still has the final word on duplicates.
    """

    def __init__(self, engine: SyncEngine, clock: Callable[[], datetime] = utcnow):
        self._engine = engine
        self._clock = clock
        self.state = SessionState.AWAITING_IDENTITY
        self.student: Student | None = None
        self.selection: int | None = None

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return self._engine.snapshot.candidates

    def _require(self, state: SessionState, action: str) -> None:
        if self.state != state:
            raise InvalidTransition(f"Cannot {action} while {self.state}")

    def _reject(self, reason: Rejection, state: SessionState = SessionState.REJECTED) -> SessionResult:
        logger.info("Voting session: {}", reason)
        return SessionResult(state=state, reason=reason, message=MESSAGES[reason], student=self.student)

    async def submit_identity(self, token: str) -> SessionResult:
        """Check a student id against freshly pulled state."""
        self._require(SessionState.AWAITING_IDENTITY, "submit an identity")
        student_id = (token or "").strip()
        if not student_id:
            return self._reject(Rejection.MISSING_IDENTITY)

        snapshot = await self._engine.pull()

        if not snapshot.config.is_open(self._clock()):
            return self._reject(Rejection.VOTING_NOT_ACTIVE)

        student = snapshot.find_student(student_id)
        if student is None:
            return self._reject(Rejection.UNKNOWN_IDENTITY)

        if snapshot.has_voted(student_id):
            return self._reject(Rejection.ALREADY_VOTED)

        self.student = student
        self.selection = None
        self.state = SessionState.CANDIDATE_SELECTION
        logger.info("Voting session opened for {}", student_id)
        return SessionResult(state=self.state, student=student, message=f"{student.name} ({student.cohort})")

    def select_candidate(self, candidate_id: int) -> SessionResult:
        """Pick (or re-pick) a candidate; nothing is sent yet."""
        self._require(SessionState.CANDIDATE_SELECTION, "select a candidate")
        if self._engine.snapshot.find_candidate(candidate_id) is None:
            return self._reject(Rejection.UNKNOWN_CANDIDATE, state=self.state)
        self.selection = candidate_id
        return SessionResult(state=self.state, student=self.student)

    async def confirm(self) -> SessionResult:
        """Cast the selected vote; on failure the voter stays on the ballot and may retry."""
        self._require(SessionState.CANDIDATE_SELECTION, "confirm a vote")
        if self.selection is None:
            return self._reject(Rejection.NO_SELECTION, state=self.state)

        try:
            await self._engine.cast_vote(self.student.student_id, self.selection)
        except GatewayError as e:
            return SessionResult(
                state=self.state,
                student=self.student,
                message=f"Could not record the vote: {e.message}",
                error=e.message,
            )

        self.state = SessionState.CONFIRMED
        return SessionResult(
            state=self.state,
            student=self.student,
            message=f"Thank you for voting, {self.student.name}! Your vote has been recorded.",
        )

    def reset(self) -> None:
        """Back to the identity prompt; server-side voted state is untouched."""
        self.state = SessionState.AWAITING_IDENTITY
        self.student = None
        self.selection = None
