"""Auth ports: user persistence, hashing, token issuance and refresh storage."""

from typing import Protocol, runtime_checkable

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


@runtime_checkable
class UserRepository(Protocol):
    """Protocol for user database operations.

    Implementations provide actual database access (PostgreSQL, etc).
    """

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Get user by ID."""
        ...

    async def find_by_email(self, email: Email) -> User | None:
        """Get user by email address."""
        ...

    async def exists_by_email(self, email: Email) -> bool:
        """Check whether an account uses this email."""
        ...

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        ...

    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        ...

    async def find_by_password_reset_token(self, token: str) -> User | None:
        """Get user holding the given (hashed) reset token."""
        ...

    async def update_profile(
        self, user_id: UserId, name: str, avatar_url: AvatarUrl | None
    ) -> User:
        """Persist profile fields and return the updated user."""
        ...


@runtime_checkable
class PasswordHasher(Protocol):
    """Protocol for one-way password hashing."""

    def hash(self, password: Password) -> HashedPassword:
        """Hash a plain text password."""
        ...

    def verify(self, password: Password, hashed: HashedPassword) -> bool:
        """Check a plain text password against a hash."""
        ...


@runtime_checkable
class TokenService(Protocol):
    """Protocol for issuing and verifying access/refresh tokens."""

    refresh_token_ttl: int

    def generate_access_token(self, user_id: str, email: str) -> str:
        """Issue a short-lived access token."""
        ...

    def generate_refresh_token(self, user_id: str, email: str) -> str:
        """Issue a long-lived refresh token."""
        ...

    def generate_token_pair(self, user_id: str, email: str) -> TokenPair:
        """Issue both tokens."""
        ...

    def verify_access_token(self, token: str) -> TokenPayload:
        """Decode an access token or raise an auth error."""
        ...

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Decode a refresh token or raise an auth error."""
        ...


@runtime_checkable
class RefreshTokenStorage(Protocol):
    """Protocol for the server-side allow-list of refresh tokens."""

    async def store(self, user_id: str, token: str, ttl_seconds: int) -> None:
        """Remember a refresh token for a user."""
        ...

    async def exists(self, user_id: str, token: str) -> bool:
        """Check whether a refresh token is still valid for a user."""
        ...

    async def revoke(self, user_id: str, token: str) -> None:
        """Forget one refresh token."""
        ...

    async def revoke_all(self, user_id: str) -> None:
        """Forget every refresh token of a user."""
        ...

    async def get_all(self, user_id: str) -> list[str]:
        """List the stored refresh tokens of a user."""
        ...
