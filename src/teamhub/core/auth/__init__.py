"""Auth domain types and services."""

from teamhub.core.auth.service import AuthResult, AuthService
from teamhub.core.auth.types import (
    AvatarUrl,
    Email,
    HashedPassword,
    Password,
    TokenPair,
    TokenPayload,
    User,
    UserId,
)

__all__ = [
    "AuthResult",
    "AuthService",
    "AvatarUrl",
    "Email",
    "HashedPassword",
    "Password",
    "TokenPair",
    "TokenPayload",
    "User",
    "UserId",
]
