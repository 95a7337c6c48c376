"""JWT token creation and validation."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

import jwt

from teamhub.core.auth.errors import InvalidTokenError, TokenExpiredError
from teamhub.core.auth.types import TokenPair, TokenPayload, TokenType

ALGORITHM = "HS256"
DEFAULT_ACCESS_TOKEN_TTL = 15 * 60
DEFAULT_REFRESH_TOKEN_TTL = 7 * 24 * 60 * 60


class JwtTokenService:
    """Issues and verifies HS256 access and refresh tokens."""

    def __init__(
        self,
        secret: str,
        access_token_ttl: int = DEFAULT_ACCESS_TOKEN_TTL,
        refresh_token_ttl: int = DEFAULT_REFRESH_TOKEN_TTL,
    ) -> None:
        """Initialize the token service.

        Args:
            secret: HMAC signing key.
            access_token_ttl: Access token lifetime in seconds.
            refresh_token_ttl: Refresh token lifetime in seconds.
        """
        self._secret = secret
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    def _encode(self, user_id: str, email: str, token_type: TokenType, ttl: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "type": token_type.value,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=ttl)).timestamp()),
        }
        if token_type is TokenType.REFRESH:
            # Two refresh tokens minted in the same second must still differ
            payload["jti"] = secrets.token_hex(16)
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def generate_access_token(self, user_id: str, email: str) -> str:
        return self._encode(user_id, email, TokenType.ACCESS, self.access_token_ttl)

    def generate_refresh_token(self, user_id: str, email: str) -> str:
        return self._encode(user_id, email, TokenType.REFRESH, self.refresh_token_ttl)

    def generate_token_pair(self, user_id: str, email: str) -> TokenPair:
        return TokenPair(
            access_token=self.generate_access_token(user_id, email),
            refresh_token=self.generate_refresh_token(user_id, email),
        )

    def _decode(self, token: str, expected_type: TokenType) -> TokenPayload:
        """Decode and validate a JWT token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is malformed, badly signed or of
                the wrong type.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError() from None
        except jwt.InvalidTokenError:
            raise InvalidTokenError() from None

        if payload.get("type") != expected_type.value:
            raise InvalidTokenError(f"Expected {expected_type.value} token")
        try:
            return TokenPayload(
                user_id=payload["sub"],
                email=payload["email"],
                type=expected_type,
            )
        except KeyError:
            raise InvalidTokenError() from None

    def verify_access_token(self, token: str) -> TokenPayload:
        return self._decode(token, TokenType.ACCESS)

    def verify_refresh_token(self, token: str) -> TokenPayload:
        return self._decode(token, TokenType.REFRESH)
