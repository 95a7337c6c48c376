"""Domain-specific exceptions.

All exceptions in the teamhub system inherit from TeamhubError,
making it easy to catch all system errors while still being able
to handle specific error types.

Domain errors carry a stable ``code`` string and belong to one of a
small set of categories. The API layer maps categories to HTTP statuses,
so new errors only need to pick the right base class.
"""

from __future__ import annotations


class TeamhubError(Exception):
    """Base exception for all teamhub errors."""

    pass


class DomainError(TeamhubError):
    """Business rule or validation failure raised by the core.

    Attributes:
        code: Stable machine-readable error code.
        message: Human-readable description.
    """

    code = "DOMAIN_ERROR"

    def __init__(self, message: str) -> None:
        """Initialize DomainError.

        Args:
            message: Error description.
        """
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Render the error as a response payload."""
        return {"code": self.code, "message": self.message}


class ValidationError(DomainError):
    """Input failed value-object validation."""

    code = "VALIDATION_ERROR"


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""

    code = "UNAUTHENTICATED"


class PermissionDeniedError(DomainError):
    """Caller is authenticated but not allowed to perform the action."""

    code = "FORBIDDEN"


class NotFoundError(DomainError):
    """Requested resource does not exist."""

    code = "NOT_FOUND"


class ConflictError(DomainError):
    """Resource already exists or clashes with existing state."""

    code = "CONFLICT"


class BusinessRuleError(DomainError):
    """Action is well-formed but violates a lifecycle rule."""

    code = "BUSINESS_RULE_VIOLATION"
