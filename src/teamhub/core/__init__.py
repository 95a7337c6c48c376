"""Core domain - business rules, value objects and repository protocols."""

from .exceptions import (
    AuthenticationError,
    BusinessRuleError,
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    TeamhubError,
    ValidationError,
)

__all__ = [
    "TeamhubError",
    "DomainError",
    "ValidationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "BusinessRuleError",
]
