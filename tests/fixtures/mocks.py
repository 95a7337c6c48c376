"""Mock repositories for testing services without a database."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from teamhub.core.auth.types import User, UserId
from teamhub.core.team.types import (
    MemberWithUser,
    Team,
    TeamId,
    TeamMembership,
    TeamWithMembership,
)


@pytest.fixture
def users(owner: User, admin: User, member: User, outsider: User) -> dict[UserId, User]:
    """Return every known user keyed by id."""
    return {u.id: u for u in (owner, admin, member, outsider)}


@pytest.fixture
def mock_user_repo(users: dict[UserId, User]) -> MagicMock:
    """Create a user repository mock that resolves the known users."""
    repo = MagicMock()
    repo.find_by_id = AsyncMock(side_effect=lambda user_id: users.get(user_id))
    repo.find_by_email = AsyncMock(
        side_effect=lambda email: next((u for u in users.values() if u.email == email), None)
    )
    repo.exists_by_email = AsyncMock(return_value=False)
    repo.save = AsyncMock(side_effect=lambda user: user)
    repo.update_profile = AsyncMock()
    repo.find_by_password_reset_token = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_team_repo(
    team: Team,
    memberships: dict[UserId, TeamMembership],
    users: dict[UserId, User],
) -> MagicMock:
    """Create a team repository mock backed by the ``memberships`` fixture."""
    repo = MagicMock()

    def get_membership(team_id: TeamId, user_id: UserId) -> TeamMembership | None:
        if team_id != team.id:
            return None
        return memberships.get(user_id)

    def find_with_membership(team_id: TeamId, user_id: UserId) -> TeamWithMembership | None:
        if team_id != team.id:
            return None
        return TeamWithMembership(team=team, membership=memberships.get(user_id))

    def get_memberships(team_id: TeamId) -> list[MemberWithUser]:
        return [
            MemberWithUser(
                membership=m,
                name=users[m.user_id].name,
                email=users[m.user_id].email.value,
            )
            for m in memberships.values()
        ]

    def update_membership(membership: TeamMembership) -> TeamMembership:
        memberships[membership.user_id] = membership
        return membership

    repo.find_by_id = AsyncMock(side_effect=lambda team_id: team if team_id == team.id else None)
    repo.find_by_id_with_membership = AsyncMock(side_effect=find_with_membership)
    repo.get_membership = AsyncMock(side_effect=get_membership)
    repo.get_memberships = AsyncMock(side_effect=get_memberships)
    repo.update_membership = AsyncMock(side_effect=update_membership)
    repo.create = AsyncMock(side_effect=lambda new_team, owner_id: new_team)
    repo.update = AsyncMock(side_effect=lambda updated: updated)
    repo.delete = AsyncMock(return_value=None)
    repo.add_membership = AsyncMock(side_effect=lambda membership: membership)
    repo.remove_membership = AsyncMock(return_value=None)
    repo.count_members = AsyncMock(side_effect=lambda team_id: len(memberships))
    repo.is_email_member = AsyncMock(return_value=False)
    repo.find_by_user_id = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_invitation_repo() -> MagicMock:
    """Create an invitation repository mock with no stored invitations."""
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda invitation: invitation)
    repo.update = AsyncMock(side_effect=lambda invitation: invitation)
    repo.find_by_id = AsyncMock(return_value=None)
    repo.find_by_token = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=None)
    repo.find_pending_by_email = AsyncMock(return_value=[])
    repo.find_pending_by_team_and_email = AsyncMock(return_value=None)
    repo.find_by_team = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_project_repo() -> MagicMock:
    """Create a project repository mock with no stored projects."""
    repo = MagicMock()
    repo.save = AsyncMock(side_effect=lambda project: project)
    repo.find_by_id = AsyncMock(return_value=None)
    repo.find_by_team_id = AsyncMock(return_value=[])
    repo.delete = AsyncMock(return_value=None)
    repo.get_next_position = AsyncMock(return_value=0)
    repo.update_positions = AsyncMock(return_value=None)
    return repo
