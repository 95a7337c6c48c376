"""Auth service for registration, login, token rotation and profiles."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from teamhub.core.auth.errors import (
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UserInactiveError,
    UserNotFoundError,
)
from teamhub.core.auth.recovery import PasswordResetNotifier
from teamhub.core.auth.repository import (
    PasswordHasher,
    RefreshTokenStorage,
    TokenService,
    UserRepository,
)
from teamhub.core.auth.tokens import generate_reset_token, get_token_expiry, hash_token
from teamhub.core.auth.types import AvatarUrl, Email, Password, TokenPair, User, UserId
from teamhub.core.unset import UNSET

logger = structlog.get_logger()


@dataclass(frozen=True)
class AuthResult:
    """Authenticated user with a freshly issued token pair."""

    user: User
    tokens: TokenPair


class AuthService:
    """Service for authentication operations."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        refresh_tokens: RefreshTokenStorage,
        reset_notifier: PasswordResetNotifier | None = None,
    ) -> None:
        """Initialize the auth service.

        Args:
            users: User repository.
            hasher: Password hasher.
            tokens: Access/refresh token issuer.
            refresh_tokens: Server-side refresh token storage.
            reset_notifier: Delivers password reset tokens. Reset requests
                are accepted but not delivered when omitted.
        """
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._refresh_tokens = refresh_tokens
        self._reset_notifier = reset_notifier

    async def _issue_tokens(self, user: User) -> TokenPair:
        pair = self._tokens.generate_token_pair(user.id.value, user.email.value)
        await self._refresh_tokens.store(
            user.id.value, pair.refresh_token, self._tokens.refresh_token_ttl
        )
        return pair

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """Create an account and sign it in.

        Args:
            email: Email address, validated and normalised.
            password: Plain text password, must pass strength rules.
            name: Display name.

        Returns:
            The new user and its token pair.

        Raises:
            InvalidEmailError: If the email is malformed.
            WeakPasswordError: If the password is too weak.
            UserAlreadyExistsError: If the email is taken.
        """
        email_vo = Email.create(email)
        password_vo = Password.create(password)

        if await self._users.exists_by_email(email_vo):
            raise UserAlreadyExistsError(email_vo.value)

        user = User.create(email_vo, self._hasher.hash(password_vo), name)
        user = await self._users.save(user)
        tokens = await self._issue_tokens(user)

        logger.info("user_registered", user_id=user.id.value)
        return AuthResult(user=user, tokens=tokens)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate user and return tokens.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
            UserInactiveError: If the account is deactivated.
        """
        email_vo = Email.create(email)
        user = await self._users.find_by_email(email_vo)
        if user is None:
            raise InvalidCredentialsError()

        if not user.can_login():
            raise UserInactiveError()

        if not self._hasher.verify(Password.create_unsafe(password), user.password):
            logger.info("login_failed", user_id=user.id.value)
            raise InvalidCredentialsError()

        tokens = await self._issue_tokens(user)
        logger.info("user_logged_in", user_id=user.id.value)
        return AuthResult(user=user, tokens=tokens)

    async def refresh(self, refresh_token: str) -> AuthResult:
        """Exchange a refresh token for a new token pair.

        The presented token is revoked, so each refresh token works once.

        Raises:
            InvalidTokenError: If the token is invalid or was revoked.
            TokenExpiredError: If the token has expired.
            UserNotFoundError: If the user no longer exists.
            UserInactiveError: If the account is deactivated.
        """
        payload = self._tokens.verify_refresh_token(refresh_token)

        user = await self._users.find_by_id(UserId.create(payload.user_id))
        if user is None:
            raise UserNotFoundError(payload.user_id)
        if not user.can_login():
            raise UserInactiveError()

        if not await self._refresh_tokens.exists(user.id.value, refresh_token):
            logger.warning("refresh_token_reuse", user_id=user.id.value)
            raise InvalidTokenError("Refresh token has been revoked")

        await self._refresh_tokens.revoke(user.id.value, refresh_token)
        tokens = await self._issue_tokens(user)
        return AuthResult(user=user, tokens=tokens)

    async def logout(self, refresh_token: str, logout_all: bool = False) -> dict[str, bool]:
        """Revoke a refresh token, or every refresh token of its user."""
        payload = self._tokens.verify_refresh_token(refresh_token)
        if logout_all:
            await self._refresh_tokens.revoke_all(payload.user_id)
        else:
            await self._refresh_tokens.revoke(payload.user_id, refresh_token)
        logger.info("user_logged_out", user_id=payload.user_id, all_sessions=logout_all)
        return {"success": True}

    async def get_current_user(self, user_id: str) -> User:
        user = await self._users.find_by_id(UserId.create(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_my_profile(
        self,
        user_id: str,
        name: str | None = None,
        avatar_url: str | None = UNSET,
    ) -> User:
        """Update the caller's name and/or avatar.

        Args:
            user_id: Caller.
            name: New display name, unchanged when None.
            avatar_url: New avatar URL. None or "" removes the avatar;
                leave unset to keep the current one.

        Returns:
            The updated user, or the current user when nothing changed.
        """
        user = await self.get_current_user(user_id)
        if name is None and avatar_url is UNSET:
            return user

        new_avatar = user.avatar_url if avatar_url is UNSET else AvatarUrl.create(avatar_url)
        new_name = name.strip() if name is not None else user.name
        return await self._users.update_profile(user.id, new_name, new_avatar)

    async def request_password_reset(self, email: str) -> None:
        """Start a password reset.

        Unknown addresses are ignored silently so the endpoint cannot be
        used to enumerate accounts.
        """
        email_vo = Email.create(email)
        user = await self._users.find_by_email(email_vo)
        if user is None or not user.is_active:
            logger.info("password_reset_requested_unknown_email", email=email_vo.value)
            return

        token = generate_reset_token()
        await self._users.save(user.set_password_reset_token(hash_token(token), get_token_expiry()))
        if self._reset_notifier is not None:
            await self._reset_notifier.send_reset_token(email_vo.value, token)
        logger.info("password_reset_requested", user_id=user.id.value)

    async def reset_password(self, token: str, new_password: str) -> dict[str, bool]:
        """Set a new password using a reset token and sign out all sessions.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired.
            WeakPasswordError: If the new password is too weak.
        """
        token_hash = hash_token(token)
        user = await self._users.find_by_password_reset_token(token_hash)
        if user is None or not user.is_password_reset_valid(token_hash):
            raise InvalidResetTokenError()

        password_vo = Password.create(new_password)
        await self._users.save(user.update_password(self._hasher.hash(password_vo)))
        await self._refresh_tokens.revoke_all(user.id.value)

        logger.info("password_reset_completed", user_id=user.id.value)
        return {"success": True}
