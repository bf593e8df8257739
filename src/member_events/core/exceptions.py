class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Base for lookups that found nothing."""


class EventNotFound(NotFoundError):
    """Raised when an event does not exist."""


class MemberNotFound(NotFoundError):
    """Raised when a member does not exist."""


class RegionNotFound(NotFoundError):
    """Raised when a zone or district does not exist."""


class ImageNotFound(NotFoundError):
    """Raised when a stored image path points to no file."""


class NotStarted(DomainError):
    """Raised when attendance is recorded for an event that was never started."""


class InvalidTransition(DomainError):
    """Raised by the attendance state machine for a transition it does not allow."""


class AlreadyClockedOut(InvalidTransition):
    """Raised when a member who already left tries to clock again."""


class PersistenceFailure(DomainError):
    """Raised when the database call itself fails."""
