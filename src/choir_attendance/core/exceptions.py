class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidIntervalError(ValidationError):
    """Raised when a reporting interval starts after it ends."""


class MappingError(ValidationError):
    """Raised when a backend row cannot be mapped to a domain entity."""


class NotFoundError(DomainError):
    """Raised when a referenced user, event or announcement does not exist."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
