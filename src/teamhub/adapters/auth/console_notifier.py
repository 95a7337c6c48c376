"""Console-based delivery of reset tokens and invitations for dev mode.

Prints the links to stdout so developers can use them directly.
"""

from teamhub.core.auth.recovery import PasswordResetNotifier
from teamhub.core.team.invitations import InvitationNotifier
from teamhub.core.team.types import TeamInvitation


class ConsoleNotifier:
    """Prints password reset and invitation links instead of emailing them.

    Useful for local development without SMTP and for testing the reset
    and invitation flows end to end.
    """

    def __init__(self, frontend_url: str) -> None:
        """Initialize the console notifier.

        Args:
            frontend_url: Base URL of the frontend for building links.
        """
        self._frontend_url = frontend_url.rstrip("/")

    def _print(self, title: str, email: str, link: str) -> None:
        print("\n" + "=" * 70, flush=True)
        print(title, flush=True)
        print(f"  Email: {email}", flush=True)
        print(f"  Link:  {link}", flush=True)
        print("=" * 70 + "\n", flush=True)

    async def send_reset_token(self, email: str, token: str) -> None:
        self._print("[PASSWORD RESET]", email, f"{self._frontend_url}/reset-password?token={token}")

    async def send_invitation(self, invitation: TeamInvitation, team_name: str) -> None:
        self._print(
            f"[TEAM INVITATION] {team_name} as {invitation.role.value}",
            invitation.email.value,
            f"{self._frontend_url}/invitations/accept?token={invitation.token.value}",
        )


# Verify we implement the protocols
_reset: PasswordResetNotifier = ConsoleNotifier(frontend_url="")
_invite: InvitationNotifier = ConsoleNotifier(frontend_url="")
