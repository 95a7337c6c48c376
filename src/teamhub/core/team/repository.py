"""Team and invitation repository protocols."""

from typing import Protocol, runtime_checkable

from teamhub.core.auth.types import Email, UserId
from teamhub.core.team.types import (
    InvitationId,
    InvitationToken,
    InvitationWithTeam,
    MemberWithUser,
    Team,
    TeamId,
    TeamInvitation,
    TeamMembership,
    TeamWithMembership,
    TeamWithRole,
)


@runtime_checkable
class TeamRepository(Protocol):
    """Protocol for team and membership persistence."""

    async def create(self, team: Team, owner_id: UserId) -> Team:
        """Insert a team and its owner membership in one transaction."""
        ...

    async def find_by_id(self, team_id: TeamId) -> Team | None:
        """Get team by ID."""
        ...

    async def find_by_id_with_membership(
        self, team_id: TeamId, user_id: UserId
    ) -> TeamWithMembership | None:
        """Get team with the user's membership (None for non-members).

        Returns None only when the team does not exist.
        """
        ...

    async def find_by_user_id(self, user_id: UserId) -> list[TeamWithRole]:
        """List the user's teams with their role in each."""
        ...

    async def update(self, team: Team) -> Team:
        """Persist team name/description."""
        ...

    async def delete(self, team_id: TeamId) -> None:
        """Delete a team; memberships, invitations and projects cascade."""
        ...

    async def get_memberships(self, team_id: TeamId) -> list[MemberWithUser]:
        """List members with their user profile."""
        ...

    async def get_membership(self, team_id: TeamId, user_id: UserId) -> TeamMembership | None:
        """Get one user's membership."""
        ...

    async def add_membership(self, membership: TeamMembership) -> TeamMembership:
        """Insert a membership."""
        ...

    async def update_membership(self, membership: TeamMembership) -> TeamMembership:
        """Persist a membership's role."""
        ...

    async def remove_membership(self, team_id: TeamId, user_id: UserId) -> None:
        """Delete a membership."""
        ...

    async def count_members(self, team_id: TeamId) -> int:
        """Count team members."""
        ...

    async def is_member(self, team_id: TeamId, user_id: UserId) -> bool:
        """Check membership by user ID."""
        ...

    async def is_email_member(self, team_id: TeamId, email: Email) -> bool:
        """Check membership of the account with this email."""
        ...


@runtime_checkable
class TeamInvitationRepository(Protocol):
    """Protocol for invitation persistence."""

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Insert an invitation."""
        ...

    async def find_by_id(self, invitation_id: InvitationId) -> TeamInvitation | None:
        """Get invitation by ID."""
        ...

    async def find_by_token(self, token: InvitationToken) -> TeamInvitation | None:
        """Get invitation by its token."""
        ...

    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Persist invitation status."""
        ...

    async def delete(self, invitation_id: InvitationId) -> None:
        """Delete an invitation."""
        ...

    async def find_pending_by_email(self, email: Email) -> list[InvitationWithTeam]:
        """Pending, unexpired invitations for an email, newest first."""
        ...

    async def find_pending_by_team_and_email(
        self, team_id: TeamId, email: Email
    ) -> TeamInvitation | None:
        """Pending, unexpired invitation for an email in one team."""
        ...

    async def find_by_team(self, team_id: TeamId) -> list[TeamInvitation]:
        """All invitations of a team, newest first."""
        ...
