"""Auth domain types: value objects and the User entity."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Self

from teamhub.core.auth.errors import (
    InvalidAvatarUrlError,
    InvalidEmailError,
    InvalidUserIdError,
    WeakPasswordError,
)
from teamhub.core.ids import EntityId

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SPECIAL_CHARS_PATTERN = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
MIN_PASSWORD_LENGTH = 8
MAX_AVATAR_URL_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserId(EntityId):
    invalid_error = InvalidUserIdError


@dataclass(frozen=True)
class Email:
    """Normalised (trimmed, lowercased) email address."""

    value: str

    @classmethod
    def create(cls, value: str) -> Self:
        normalized = value.strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError(value)
        return cls(normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Password:
    """Plain-text password that has passed the strength rules.

    The value never appears in str() or repr() output.
    """

    value: str = field(repr=False)

    @classmethod
    def create(cls, value: str) -> Self:
        """Validate password strength.

        Raises:
            WeakPasswordError: Listing every rule the password fails.
        """
        reasons = []
        if len(value) < MIN_PASSWORD_LENGTH:
            reasons.append(f"must be at least {MIN_PASSWORD_LENGTH} characters")
        if not re.search(r"[A-Z]", value):
            reasons.append("must contain an uppercase letter")
        if not re.search(r"[a-z]", value):
            reasons.append("must contain a lowercase letter")
        if not re.search(r"\d", value):
            reasons.append("must contain a digit")
        if not SPECIAL_CHARS_PATTERN.search(value):
            reasons.append("must contain a special character")
        if reasons:
            raise WeakPasswordError(reasons)
        return cls(value)

    @classmethod
    def create_unsafe(cls, value: str) -> Self:
        """Wrap a password without strength checks (login attempts)."""
        return cls(value)

    def __str__(self) -> str:
        return "[REDACTED]"


@dataclass(frozen=True)
class HashedPassword:
    value: str = field(repr=False)

    @classmethod
    def from_hash(cls, value: str) -> Self:
        return cls(value)

    def __str__(self) -> str:
        return "[HASHED]"


@dataclass(frozen=True)
class AvatarUrl:
    """HTTPS avatar URL, at most 500 characters."""

    value: str

    @classmethod
    def create(cls, value: str | None) -> Self | None:
        """Validate an avatar URL. Empty input means "no avatar" and returns None.

        Raises:
            InvalidAvatarUrlError: If the URL is too long or not https.
        """
        if value is None or not value.strip():
            return None
        trimmed = value.strip()
        if len(trimmed) > MAX_AVATAR_URL_LENGTH:
            raise InvalidAvatarUrlError(
                f"Avatar URL must be at most {MAX_AVATAR_URL_LENGTH} characters"
            )
        if not re.match(r"^https://[^\s/$.?#][^\s]*$", trimmed, re.IGNORECASE):
            raise InvalidAvatarUrlError("Avatar URL must be a valid https URL")
        return cls(trimmed)

    def __str__(self) -> str:
        return self.value


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT claims."""

    user_id: str
    email: str
    type: TokenType


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class User:
    """Registered user.

    Instances are immutable; every mutation returns a new User with
    ``updated_at`` refreshed.
    """

    id: UserId
    email: Email
    password: HashedPassword
    name: str
    avatar_url: AvatarUrl | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    password_reset_token: str | None = field(default=None, repr=False)
    password_reset_expires: datetime | None = None

    @classmethod
    def create(cls, email: Email, password: HashedPassword, name: str) -> User:
        now = _utcnow()
        return cls(
            id=UserId.generate(),
            email=email,
            password=password,
            name=name.strip(),
            created_at=now,
            updated_at=now,
        )

    def update_password(self, password: HashedPassword) -> User:
        """Replace the password hash and drop any pending reset token."""
        return replace(
            self,
            password=password,
            password_reset_token=None,
            password_reset_expires=None,
            updated_at=_utcnow(),
        )

    def update_profile(
        self, name: str | None = None, avatar_url: AvatarUrl | None = None
    ) -> User:
        return replace(
            self,
            name=name.strip() if name is not None else self.name,
            avatar_url=avatar_url,
            updated_at=_utcnow(),
        )

    def activate(self) -> User:
        return replace(self, is_active=True, updated_at=_utcnow())

    def deactivate(self) -> User:
        return replace(self, is_active=False, updated_at=_utcnow())

    def set_password_reset_token(self, token: str, expires_at: datetime) -> User:
        return replace(
            self,
            password_reset_token=token,
            password_reset_expires=expires_at,
            updated_at=_utcnow(),
        )

    def is_password_reset_valid(self, token: str) -> bool:
        if not self.password_reset_token or not self.password_reset_expires:
            return False
        if self.password_reset_token != token:
            return False
        expires = self.password_reset_expires
        # Handle timezone-naive datetimes
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=UTC)
        return _utcnow() < expires

    def can_login(self) -> bool:
        return self.is_active
