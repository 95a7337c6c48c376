"""Invitation service: invite, accept, reject and cancel team invitations."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import structlog

from teamhub.core.auth.repository import UserRepository
from teamhub.core.auth.types import Email, User, UserId
from teamhub.core.team.errors import (
    AlreadyTeamMemberError,
    InsufficientTeamPermissionError,
    InvitationAlreadyExistsError,
    InvitationEmailMismatchError,
    InvitationNotFoundError,
    NotTeamMemberError,
    TeamNotFoundError,
)
from teamhub.core.team.permissions import assert_team_admin
from teamhub.core.team.repository import TeamInvitationRepository, TeamRepository
from teamhub.core.team.service import parse_assignable_role
from teamhub.core.team.types import (
    InvitationId,
    InvitationToken,
    InvitationWithTeam,
    TeamId,
    TeamInvitation,
    TeamMembership,
)

logger = structlog.get_logger()

UNKNOWN_TEAM_NAME = "Unknown Team"


@runtime_checkable
class InvitationNotifier(Protocol):
    """Protocol for delivering invitation tokens to invitees."""

    async def send_invitation(self, invitation: TeamInvitation, team_name: str) -> None:
        """Deliver the invitation (and its token) to ``invitation.email``."""
        ...


class InvitationService:
    """Service for team invitation workflows."""

    def __init__(
        self,
        teams: TeamRepository,
        invitations: TeamInvitationRepository,
        users: UserRepository,
        notifier: InvitationNotifier | None = None,
    ) -> None:
        """Initialize the invitation service.

        Args:
            teams: Team repository.
            invitations: Invitation repository.
            users: User repository, used to resolve the caller's email.
            notifier: Delivers new invitations. Optional.
        """
        self._teams = teams
        self._invitations = invitations
        self._users = users
        self._notifier = notifier

    async def create_invitation(
        self, actor_user_id: str, team_id: str, email: str, role: str
    ) -> TeamInvitation:
        """Invite an email address to join a team.

        Raises:
            InvalidTeamRoleError: If role is not admin or member.
            TeamNotFoundError: If the team does not exist.
            NotTeamMemberError: If the actor is not a member.
            InsufficientTeamPermissionError: If the actor cannot invite at this role.
            AlreadyTeamMemberError: If the email already belongs to a member.
            InvitationAlreadyExistsError: If a pending invitation exists.
        """
        actor_id = UserId.create(actor_user_id)
        team_id_vo = TeamId.create(team_id)
        invitee = Email.create(email)
        invite_role = parse_assignable_role(role)

        result = await self._teams.find_by_id_with_membership(team_id_vo, actor_id)
        if result is None:
            raise TeamNotFoundError(team_id)
        if result.membership is None:
            raise NotTeamMemberError(team_id_vo.value)

        actor = result.membership
        if not actor.can_manage_members():
            raise InsufficientTeamPermissionError.for_action("invite team members")
        if not actor.can_invite_as(invite_role):
            raise InsufficientTeamPermissionError.for_action(f"invite as {invite_role.value}")

        if await self._teams.is_email_member(team_id_vo, invitee):
            raise AlreadyTeamMemberError(team_id_vo.value)
        if await self._invitations.find_pending_by_team_and_email(team_id_vo, invitee):
            raise InvitationAlreadyExistsError(invitee.value)

        invitation = TeamInvitation.create(team_id_vo, invitee, invite_role, actor_id)
        invitation = await self._invitations.create(invitation)
        logger.info(
            "invitation_created",
            invitation_id=invitation.id.value,
            team_id=team_id_vo.value,
            role=invite_role.value,
        )

        if self._notifier is not None:
            await self._notifier.send_invitation(invitation, result.team.name.value)
        return invitation

    async def _redeem(self, user: User, invitation: TeamInvitation) -> dict[str, Any]:
        accepted = invitation.accept(user.email)

        if await self._teams.get_membership(invitation.team_id, user.id) is not None:
            raise AlreadyTeamMemberError(invitation.team_id.value)

        membership = TeamMembership.create(user.id, invitation.team_id, invitation.role)
        await self._teams.add_membership(membership)
        await self._invitations.update(accepted)

        team = await self._teams.find_by_id(invitation.team_id)
        logger.info(
            "invitation_accepted",
            invitation_id=invitation.id.value,
            team_id=invitation.team_id.value,
            user_id=user.id.value,
        )
        return {
            "team_id": invitation.team_id.value,
            "team_name": team.name.value if team is not None else UNKNOWN_TEAM_NAME,
            "role": invitation.role.value,
        }

    async def accept_invitation(self, user_id: str, invitation_id: str) -> dict[str, Any]:
        """Accept an invitation addressed to the caller's email.

        Returns:
            Dict with team_id, team_name and the granted role.

        Raises:
            InvitationNotFoundError: If the invitation or the caller is unknown.
            InvitationExpiredError: If the invitation has expired.
            InvitationNotPendingError: If it was already used or rejected.
            InvitationEmailMismatchError: If addressed to another email.
            AlreadyTeamMemberError: If the caller is already in the team.
        """
        invitation = await self._invitations.find_by_id(InvitationId.create(invitation_id))
        if invitation is None:
            raise InvitationNotFoundError(invitation_id)

        user = await self._users.find_by_id(UserId.create(user_id))
        if user is None:
            # Same error as a missing invitation to avoid leaking existence
            raise InvitationNotFoundError(invitation_id)

        return await self._redeem(user, invitation)

    async def accept_invitation_by_token(self, user_id: str, token: str) -> dict[str, Any]:
        """Accept an invitation using the secret token delivered to the invitee."""
        invitation = await self._invitations.find_by_token(InvitationToken.create(token))
        if invitation is None:
            raise InvitationNotFoundError("token")

        user = await self._users.find_by_id(UserId.create(user_id))
        if user is None:
            raise InvitationNotFoundError("token")

        return await self._redeem(user, invitation)

    async def reject_invitation(self, user_id: str, invitation_id: str) -> dict[str, bool]:
        invitation = await self._invitations.find_by_id(InvitationId.create(invitation_id))
        if invitation is None:
            raise InvitationNotFoundError(invitation_id)

        user = await self._users.find_by_id(UserId.create(user_id))
        if user is None:
            raise InvitationNotFoundError(invitation_id)

        if invitation.email != user.email:
            raise InvitationEmailMismatchError()

        await self._invitations.update(invitation.reject())
        logger.info("invitation_rejected", invitation_id=invitation.id.value)
        return {"success": True}

    async def cancel_invitation(
        self, actor_user_id: str, team_id: str, invitation_id: str
    ) -> dict[str, bool]:
        """Withdraw a pending invitation (owner/admin).

        Invitations of other teams and non-pending invitations are reported
        as not found.
        """
        invitation_id_vo = InvitationId.create(invitation_id)
        invitation = await self._invitations.find_by_id(invitation_id_vo)
        if invitation is None or invitation.team_id != TeamId.create(team_id):
            raise InvitationNotFoundError(invitation_id)

        result = await self._teams.find_by_id_with_membership(
            invitation.team_id, UserId.create(actor_user_id)
        )
        if result is None:
            raise TeamNotFoundError(team_id)
        if result.membership is None:
            raise NotTeamMemberError(invitation.team_id.value)
        if not result.membership.can_manage_members():
            raise InsufficientTeamPermissionError.for_action("cancel invitations")

        if not invitation.is_pending():
            raise InvitationNotFoundError(invitation_id)

        await self._invitations.delete(invitation_id_vo)
        logger.info("invitation_cancelled", invitation_id=invitation_id_vo.value)
        return {"success": True}

    async def get_team_invitations(self, user_id: str, team_id: str) -> list[TeamInvitation]:
        team_id_vo = TeamId.create(team_id)
        await assert_team_admin(self._teams, team_id_vo, UserId.create(user_id))
        return await self._invitations.find_by_team(team_id_vo)

    async def get_my_invitations(self, user_id: str) -> list[InvitationWithTeam]:
        user = await self._users.find_by_id(UserId.create(user_id))
        if user is None:
            return []
        return await self._invitations.find_pending_by_email(user.email)
