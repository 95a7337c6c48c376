"""Secure token generation for password reset."""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

# Token configuration
RESET_TOKEN_BYTES = 32  # 256 bits of entropy
RESET_TOKEN_EXPIRY_HOURS = 1


def generate_reset_token() -> str:
    """Generate a URL-safe password reset token."""
    return secrets.token_urlsafe(RESET_TOKEN_BYTES)


def hash_token(token: str) -> str:
    """Hash a token for storage.

    Only the SHA-256 digest is persisted, so a leaked users table does not
    expose usable reset tokens.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def get_token_expiry(hours: int = RESET_TOKEN_EXPIRY_HOURS) -> datetime:
    return datetime.now(UTC) + timedelta(hours=hours)
