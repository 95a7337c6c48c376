"""Domain object fixtures for testing."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from teamhub.core.auth.types import Email, HashedPassword, User, UserId
from teamhub.core.project.types import Project, ProjectName
from teamhub.core.team.types import (
    Team,
    TeamInvitation,
    TeamMembership,
    TeamName,
    TeamRole,
)


def make_user(email: str = "user@example.com", name: str = "Test User", **kwargs: object) -> User:
    """Build a user with a placeholder password hash."""
    user = User.create(Email.create(email), HashedPassword.from_hash("$2b$04$hash"), name)
    if kwargs:
        user = replace(user, **kwargs)
    return user


def make_membership(user: User, team: Team, role: TeamRole) -> TeamMembership:
    return TeamMembership.create(user.id, team.id, role)


@pytest.fixture
def owner() -> User:
    """Return the owning user of ``team``."""
    return make_user("owner@example.com", "Olivia Owner")


@pytest.fixture
def admin() -> User:
    return make_user("admin@example.com", "Adam Admin")


@pytest.fixture
def member() -> User:
    return make_user("member@example.com", "Mia Member")


@pytest.fixture
def outsider() -> User:
    """Return a user who belongs to no team."""
    return make_user("outsider@example.com", "Oscar Outsider")


@pytest.fixture
def team() -> Team:
    return Team.create(TeamName.create("Platform"), "Platform engineering")


@pytest.fixture
def memberships(
    team: Team, owner: User, admin: User, member: User
) -> dict[UserId, TeamMembership]:
    """Return the memberships of ``team`` keyed by user id."""
    return {
        owner.id: make_membership(owner, team, TeamRole.OWNER),
        admin.id: make_membership(admin, team, TeamRole.ADMIN),
        member.id: make_membership(member, team, TeamRole.MEMBER),
    }


@pytest.fixture
def invitation(team: Team, owner: User) -> TeamInvitation:
    """Return a pending member invitation for new@example.com."""
    return TeamInvitation.create(
        team.id, Email.create("new@example.com"), TeamRole.MEMBER, owner.id
    )


@pytest.fixture
def expired_invitation(invitation: TeamInvitation) -> TeamInvitation:
    return replace(invitation, expires_at=datetime.now(UTC) - timedelta(minutes=1))


@pytest.fixture
def project(team: Team, owner: User) -> Project:
    return Project.create(team.id, ProjectName.create("Roadmap"), owner.id, "Q3 roadmap", 0)
