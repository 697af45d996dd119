class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a required document does not exist."""


class TimeParseError(DomainError, ValueError):
    """Raised when a time-of-day string cannot be parsed."""


class StoreError(DomainError):
    """Raised when a read or write against the document store fails."""


class ConcurrencyError(StoreError):
    """Raised when a conditional write finds a different document version."""
