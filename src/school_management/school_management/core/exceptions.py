class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class DuplicateRecordError(DomainError):
    """Raised when a unique record already exists."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConnectionProbeError(Exception):
    """Raised when the probe could not establish a database connection."""
