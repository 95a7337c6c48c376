"""Password reset delivery protocol.

The auth service generates reset tokens; how the token reaches the user
(email, console output in development, ...) is up to the notifier.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordResetNotifier(Protocol):
    """Protocol for delivering password reset tokens to users."""

    async def send_reset_token(self, email: str, token: str) -> None:
        """Deliver a plaintext reset token to the given address.

        Args:
            email: Address of the account being reset.
            token: Plaintext reset token. Only its hash is stored.
        """
        ...
