"""Voting API response schemas."""

from pydantic import BaseModel


class StudentItem(BaseModel):
    """Student bound to the session."""

    student_id: str
    name: str
    cohort: str


class CandidateItem(BaseModel):
    """Candidate on the ballot."""

    candidate_id: int
    name: str
    code: str
    photo_url: str
    platform: str


class SessionResponse(BaseModel):
    """Result of a voting session step."""

    state: str
    ok: bool
    reason: str | None = None
    message: str = ""
    error: str | None = None
    student: StudentItem | None = None
    selection: int | None = None


class BallotResponse(BaseModel):
    """Candidates to choose from."""

    student: StudentItem | None
    candidates: list[CandidateItem]
    selection: int | None
