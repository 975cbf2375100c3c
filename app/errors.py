"""Application errors that are not gateway failures."""


class ElectionError(Exception):
    """Base for local election errors."""

    def __init__(self, message: str = "Election error"):
        self.message = message
        super().__init__(self.message)


class InvalidLocalState(ElectionError):
    """Cached payload could not be parsed."""

    def __init__(self, message: str = "Cached election data is unreadable"):
        super().__init__(message)


class InvalidTransition(ElectionError):
    """Voting session operation not allowed in the current state."""


class NotAuthorized(ElectionError):
    """Admin operation attempted without logging in."""

    def __init__(self, message: str = "Admin login required"):
        super().__init__(message)
