class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or a token cannot be accepted.

    ``reason`` keeps the precise cause (invalid token, superseded session, ...)
    for logs; callers must not show it to the end user.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConflictError(DomainError):
    """Raised when an action clashes with current state (e.g. an active session)."""


class NotFoundError(DomainError):
    """Raised when a referenced order, remito, product or account does not exist."""
