"""Errors raised by the auth domain."""

from __future__ import annotations

from teamhub.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    code = "INVALID_EMAIL"

    def __init__(self, email: str) -> None:
        super().__init__(f"Invalid email format: {email}")


class WeakPasswordError(ValidationError):
    """Password does not satisfy the strength rules.

    Attributes:
        reasons: Every rule the password failed.
    """

    code = "WEAK_PASSWORD"

    def __init__(self, reasons: list[str]) -> None:
        super().__init__(f"Password is too weak: {', '.join(reasons)}")
        self.reasons = reasons


class InvalidUserIdError(ValidationError):
    code = "INVALID_USER_ID"

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid user ID format: {value}")


class InvalidAvatarUrlError(ValidationError):
    code = "INVALID_AVATAR_URL"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"User not found: {identifier}")


class UserAlreadyExistsError(ConflictError):
    code = "USER_ALREADY_EXISTS"

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")


class InvalidCredentialsError(AuthenticationError):
    code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class UserInactiveError(AuthenticationError):
    code = "USER_INACTIVE"

    def __init__(self) -> None:
        super().__init__("User account is inactive")


class InvalidTokenError(AuthenticationError):
    code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    code = "TOKEN_EXPIRED"

    def __init__(self) -> None:
        super().__init__("Token has expired")


class InvalidResetTokenError(AuthenticationError):
    code = "INVALID_RESET_TOKEN"

    def __init__(self) -> None:
        super().__init__("Invalid or expired password reset token")
