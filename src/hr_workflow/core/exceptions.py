class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class DuplicateEntryError(DomainError):
    """Raised on a natural-key collision."""


class InvalidTransitionError(DomainError):
    """Raised when a state machine rule is violated."""

    def __init__(self, message: str, *, from_status: str | None = None, to_status: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(message)


class InvalidTimeError(DomainError):
    """Raised when a checkout time is earlier than the checkin time."""


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for an action."""
