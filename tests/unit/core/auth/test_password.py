"""Tests for bcrypt password hashing."""

from teamhub.core.auth.password import BcryptPasswordHasher
from teamhub.core.auth.types import Password


class TestBcryptPasswordHasher:
    """Tests for BcryptPasswordHasher."""

    def test_hash_and_verify(self) -> None:
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash(Password.create("Str0ng!Pass"))  # pragma: allowlist secret

        assert hashed.value.startswith("$2b$04$")
        assert hasher.verify(Password.create_unsafe("Str0ng!Pass"), hashed)

    def test_wrong_password(self) -> None:
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash(Password.create("Str0ng!Pass"))  # pragma: allowlist secret

        assert not hasher.verify(Password.create_unsafe("Str0ng!Pasz"), hashed)

    def test_empty_password_never_matches(self) -> None:
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash(Password.create("Str0ng!Pass"))  # pragma: allowlist secret

        assert not hasher.verify(Password.create_unsafe(""), hashed)

    def test_salted(self) -> None:
        """The same password hashes differently each time."""
        hasher = BcryptPasswordHasher(rounds=4)
        password = Password.create("Str0ng!Pass")  # pragma: allowlist secret
        assert hasher.hash(password).value != hasher.hash(password).value
