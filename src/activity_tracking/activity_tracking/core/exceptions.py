class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class FormatError(ValidationError):
    """Raised when a wall-clock or date string is malformed."""


class InvalidRangeError(ValidationError):
    """Raised when an end does not fall strictly after its start."""


class AlreadyClosedError(ValidationError):
    """Raised when closing a shift that already has an end."""


class OverlapError(ValidationError):
    """Raised when an activity collides with others and adjusting is disabled."""

    def __init__(self, message: str, conflicts=()):
        super().__init__(message)
        self.conflicts = list(conflicts)


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ResourceLockedError(DomainError):
    """Raised when a resource/date is busy with another write."""
