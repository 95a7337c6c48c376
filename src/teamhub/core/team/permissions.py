"""Role checks shared by team, invitation and project use cases."""

from __future__ import annotations

from collections.abc import Sequence

from teamhub.core.auth.types import UserId
from teamhub.core.team.errors import InsufficientTeamPermissionError, NotTeamMemberError
from teamhub.core.team.repository import TeamRepository
from teamhub.core.team.types import TeamId, TeamRole


async def assert_team_permission(
    teams: TeamRepository,
    team_id: TeamId,
    user_id: UserId,
    required_roles: Sequence[TeamRole],
) -> TeamRole:
    """Ensure the user holds one of the required roles in the team.

    Args:
        teams: Team repository used to look up the membership.
        team_id: Team being accessed.
        user_id: Acting user.
        required_roles: Roles allowed to proceed.

    Returns:
        The user's role in the team.

    Raises:
        NotTeamMemberError: If the user is not a member.
        InsufficientTeamPermissionError: If the role is not allowed.
    """
    membership = await teams.get_membership(team_id, user_id)
    if membership is None:
        raise NotTeamMemberError(team_id.value)

    if membership.role not in required_roles:
        required = " or ".join(role.value for role in required_roles)
        raise InsufficientTeamPermissionError(
            f"Insufficient permission. Required: {required}. Actual: {membership.role.value}"
        )
    return membership.role


async def assert_team_member(teams: TeamRepository, team_id: TeamId, user_id: UserId) -> TeamRole:
    return await assert_team_permission(teams, team_id, user_id, list(TeamRole))


async def assert_team_admin(teams: TeamRepository, team_id: TeamId, user_id: UserId) -> TeamRole:
    return await assert_team_permission(
        teams, team_id, user_id, [TeamRole.OWNER, TeamRole.ADMIN]
    )


async def assert_team_owner(teams: TeamRepository, team_id: TeamId, user_id: UserId) -> TeamRole:
    return await assert_team_permission(teams, team_id, user_id, [TeamRole.OWNER])
