"""API errors and validation helpers."""

from datetime import datetime

from app.container import container
from app.errors import NotAuthorized
from app.models.election.entities import as_aware


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


MAX_ID_LENGTH = 32


def validate_student_id(student_id: str) -> None:
    """Reject input that cannot be a student id before any sync happens."""
    if len(student_id.strip()) > MAX_ID_LENGTH:
        raise ValidationError(f"Invalid student id: longer than {MAX_ID_LENGTH} characters")


def validate_window(start_time: datetime | None, end_time: datetime | None) -> None:
    """End of the voting window must come after its start."""
    if start_time and end_time and as_aware(end_time) <= as_aware(start_time):
        raise ValidationError("Invalid voting window: end time must be after start time")


def require_admin() -> None:
    """Admin views are only available after login."""
    if not container.admin.authenticated:
        raise NotAuthorized()
