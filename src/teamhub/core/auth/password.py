"""Password hashing using bcrypt."""

import bcrypt

from teamhub.core.auth.types import HashedPassword, Password

DEFAULT_BCRYPT_ROUNDS = 12


class BcryptPasswordHasher:
    """PasswordHasher implementation backed by bcrypt."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (log2 of the iteration count).
        """
        self._rounds = rounds

    def hash(self, password: Password) -> HashedPassword:
        """Hash a password using bcrypt.

        Args:
            password: Validated plain text password.

        Returns:
            Bcrypt hash wrapped as a HashedPassword.
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.value.encode("utf-8"), salt)
        return HashedPassword.from_hash(hashed.decode("utf-8"))

    def verify(self, password: Password, hashed: HashedPassword) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password to check.
            hashed: Bcrypt hash to check against.

        Returns:
            True if password matches hash.
        """
        if not password.value:
            return False
        return bcrypt.checkpw(password.value.encode("utf-8"), hashed.value.encode("utf-8"))
