"""Voting API views - thin layer over the device's voting session."""

from app.container import container
from app.services.voting import SessionResult
from web.api.errors import ValidationError, validate_student_id

from .schemas import BallotResponse, CandidateItem, SessionResponse, StudentItem


def _student_item(student) -> StudentItem | None:
    if student is None:
        return None
    return StudentItem(student_id=student.student_id, name=student.name, cohort=student.cohort)


def _session_response(result: SessionResult) -> SessionResponse:
    return SessionResponse(
        state=result.state,
        ok=result.ok,
        reason=result.reason,
        message=result.message,
        error=result.error,
        student=_student_item(result.student),
        selection=container.session.selection,
    )


async def submit_identity(student_id: str) -> SessionResponse:
    """Log a student in for voting."""
    validate_student_id(student_id)
    result = await container.session.submit_identity(student_id)
    return _session_response(result)


def get_ballot() -> BallotResponse:
    """Get candidates for the bound student."""
    session = container.session
    if session.student is None:
        raise ValidationError("No student logged in")

    items = [
        CandidateItem(
            candidate_id=c.candidate_id,
            name=c.name,
            code=c.code,
            photo_url=c.photo_url,
            platform=c.platform,
        )
        for c in session.candidates
    ]

    return BallotResponse(student=_student_item(session.student), candidates=items, selection=session.selection)


def select_candidate(candidate_id: int) -> SessionResponse:
    """Pick a candidate."""
    return _session_response(container.session.select_candidate(candidate_id))


async def confirm_vote() -> SessionResponse:
    """Cast the selected vote."""
    return _session_response(await container.session.confirm())


def reset_session() -> SessionResponse:
    """Leave the voting flow."""
    container.session.reset()
    return SessionResponse(state=container.session.state, ok=True)
