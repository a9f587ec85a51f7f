class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class ForbiddenError(DomainError):
    """Raised when a caller touches another user's data without privilege."""


class NotFoundError(DomainError):
    """Raised when a user or session id does not exist."""


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule (e.g. a second active session)."""


class InvalidStateError(DomainError):
    """Raised when an operation does not apply to the record's current status."""


class StorageError(Exception):
    """Wraps driver-level failures so they stay distinguishable from domain errors."""
