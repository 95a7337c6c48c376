"""Team service: team lifecycle and membership management."""

from __future__ import annotations

import structlog

from teamhub.core.auth.types import UserId
from teamhub.core.team.errors import (
    CannotDemoteOwnerError,
    CannotRemoveOwnerError,
    InsufficientTeamPermissionError,
    InvalidTeamRoleError,
    NotTeamMemberError,
    OwnerCannotLeaveError,
    TeamNotFoundError,
)
from teamhub.core.team.permissions import assert_team_member
from teamhub.core.team.repository import TeamRepository
from teamhub.core.team.types import (
    ASSIGNABLE_ROLES,
    MemberWithUser,
    Team,
    TeamDetails,
    TeamId,
    TeamMembership,
    TeamName,
    TeamRole,
    TeamWithRole,
)
from teamhub.core.unset import UNSET

logger = structlog.get_logger()


def parse_assignable_role(value: str) -> TeamRole:
    """Parse a role that may be granted to another user (admin or member).

    Raises:
        InvalidTeamRoleError: For unknown roles and for owner.
    """
    role = TeamRole.create(value)
    if role not in ASSIGNABLE_ROLES:
        raise InvalidTeamRoleError(value, tuple(r.value for r in ASSIGNABLE_ROLES))
    return role


class TeamService:
    """Service for team operations."""

    def __init__(self, teams: TeamRepository) -> None:
        """Initialize with team repository.

        Args:
            teams: Team repository for database operations.
        """
        self._teams = teams

    async def _membership_or_raise(self, team_id: TeamId, user_id: UserId) -> tuple[Team, TeamMembership]:
        result = await self._teams.find_by_id_with_membership(team_id, user_id)
        if result is None:
            raise TeamNotFoundError(team_id.value)
        if result.membership is None:
            raise NotTeamMemberError(team_id.value)
        return result.team, result.membership

    async def create_team(self, user_id: str, name: str, description: str | None = None) -> Team:
        """Create a team; the creator becomes its owner."""
        owner_id = UserId.create(user_id)
        team = Team.create(TeamName.create(name), description)
        team = await self._teams.create(team, owner_id)
        logger.info("team_created", team_id=team.id.value, owner_id=owner_id.value)
        return team

    async def get_team(self, user_id: str, team_id: str) -> TeamDetails:
        """Get a team with the caller's role and the member count.

        Raises:
            TeamNotFoundError: If the team does not exist.
            NotTeamMemberError: If the caller is not a member.
        """
        team_id_vo = TeamId.create(team_id)
        team, membership = await self._membership_or_raise(team_id_vo, UserId.create(user_id))
        member_count = await self._teams.count_members(team_id_vo)
        return TeamDetails(team=team, role=membership.role, member_count=member_count)

    async def update_team(
        self,
        user_id: str,
        team_id: str,
        name: str | None = None,
        description: str | None = UNSET,
    ) -> Team:
        """Rename a team or change its description (owner/admin).

        An explicit None description clears it; leave it unset to keep the
        current one. With nothing to change the current team is returned
        unchanged.
        """
        team_id_vo = TeamId.create(team_id)
        if name is None and description is UNSET:
            team = await self._teams.find_by_id(team_id_vo)
            if team is None:
                raise TeamNotFoundError(team_id)
            return team

        team, membership = await self._membership_or_raise(team_id_vo, UserId.create(user_id))
        if not membership.can_modify_team():
            raise InsufficientTeamPermissionError.for_action("update team")

        if name is not None:
            team = team.update_name(TeamName.create(name))
        if description is not UNSET:
            team = team.update_description(description)

        saved = await self._teams.update(team)
        logger.info("team_updated", team_id=team_id_vo.value, user_id=user_id)
        return saved

    async def delete_team(self, user_id: str, team_id: str) -> dict[str, bool]:
        """Delete a team (owner only).

        Memberships, invitations and projects are removed by the store's
        cascading foreign keys.
        """
        team_id_vo = TeamId.create(team_id)
        _, membership = await self._membership_or_raise(team_id_vo, UserId.create(user_id))
        if not membership.can_delete_team():
            raise InsufficientTeamPermissionError.for_action("delete team")

        await self._teams.delete(team_id_vo)
        logger.info("team_deleted", team_id=team_id_vo.value, user_id=user_id)
        return {"success": True}

    async def get_my_teams(self, user_id: str) -> list[TeamWithRole]:
        return await self._teams.find_by_user_id(UserId.create(user_id))

    async def get_team_members(self, user_id: str, team_id: str) -> list[MemberWithUser]:
        team_id_vo = TeamId.create(team_id)
        await assert_team_member(self._teams, team_id_vo, UserId.create(user_id))
        return await self._teams.get_memberships(team_id_vo)

    async def change_member_role(
        self,
        actor_user_id: str,
        team_id: str,
        target_user_id: str,
        role: str,
    ) -> MemberWithUser:
        """Change a member's role.

        Owners may set any non-owner role on anyone but themselves. Admins may
        only change members and never grant more than admin.

        Raises:
            InvalidTeamRoleError: If role is not admin or member.
            TeamNotFoundError: If the team does not exist.
            NotTeamMemberError: If actor or target are not members.
            InsufficientTeamPermissionError: If the actor may not make the change.
            CannotDemoteOwnerError: If the target is the owner.
        """
        new_role = parse_assignable_role(role)
        team_id_vo = TeamId.create(team_id)
        target_id = UserId.create(target_user_id)

        _, actor = await self._membership_or_raise(team_id_vo, UserId.create(actor_user_id))
        if not actor.role.is_at_least(TeamRole.ADMIN):
            raise InsufficientTeamPermissionError.for_action("change member roles")

        target = await self._teams.get_membership(team_id_vo, target_id)
        if target is None:
            raise NotTeamMemberError(team_id_vo.value, target_id.value)
        if target.is_owner():
            raise CannotDemoteOwnerError()

        if actor.role is TeamRole.ADMIN:
            if new_role.is_higher_than(actor.role):
                raise InsufficientTeamPermissionError.for_action(
                    "assign a role higher than your own"
                )
            if target.role is TeamRole.ADMIN:
                raise InsufficientTeamPermissionError.for_action("change another admin's role")

        await self._teams.update_membership(target.change_role(new_role))
        logger.info(
            "member_role_changed",
            team_id=team_id_vo.value,
            target_user_id=target_id.value,
            role=new_role.value,
        )

        for member in await self._teams.get_memberships(team_id_vo):
            if member.membership.user_id == target_id:
                return member
        raise NotTeamMemberError(team_id_vo.value, target_id.value)

    async def remove_member(
        self, actor_user_id: str, team_id: str, target_user_id: str
    ) -> dict[str, bool]:
        """Remove another member from the team.

        Raises:
            InsufficientTeamPermissionError: If the actor cannot manage members,
                cannot remove this role, or targets themselves.
            NotTeamMemberError: If the target is not a member.
            CannotRemoveOwnerError: If the target is the owner.
        """
        team_id_vo = TeamId.create(team_id)
        target_id = UserId.create(target_user_id)

        _, actor = await self._membership_or_raise(team_id_vo, UserId.create(actor_user_id))
        if not actor.can_manage_members():
            raise InsufficientTeamPermissionError.for_action("remove team members")

        target = await self._teams.get_membership(team_id_vo, target_id)
        if target is None:
            raise NotTeamMemberError(team_id_vo.value, target_id.value)
        if target.is_owner():
            raise CannotRemoveOwnerError()
        if not actor.can_remove(target.role):
            raise InsufficientTeamPermissionError.for_action("remove this member")
        if actor.user_id == target_id:
            raise InsufficientTeamPermissionError.for_action(
                "remove yourself. Use leave team instead"
            )

        await self._teams.remove_membership(team_id_vo, target_id)
        logger.info("member_removed", team_id=team_id_vo.value, target_user_id=target_id.value)
        return {"success": True}

    async def leave_team(self, user_id: str, team_id: str) -> dict[str, bool]:
        team_id_vo = TeamId.create(team_id)
        user_id_vo = UserId.create(user_id)
        _, membership = await self._membership_or_raise(team_id_vo, user_id_vo)
        if membership.is_owner():
            raise OwnerCannotLeaveError()

        await self._teams.remove_membership(team_id_vo, user_id_vo)
        logger.info("member_left", team_id=team_id_vo.value, user_id=user_id_vo.value)
        return {"success": True}
