class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, parent or punch does not exist."""


class ConflictError(DomainError):
    """Raised when a write collides with existing data (PIN in use, open punch)."""


class AuthenticationError(DomainError):
    """Raised when login credentials or a kiosk PIN are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataAccessError(DomainError):
    """Raised when the database is unreachable or a query fails."""
