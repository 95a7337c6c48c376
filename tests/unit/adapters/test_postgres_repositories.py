"""Unit tests for the PostgreSQL repositories."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from teamhub.adapters.auth.postgres import PostgresUserRepository
from teamhub.adapters.project.postgres import PostgresProjectRepository
from teamhub.adapters.team.postgres import PostgresInvitationRepository, PostgresTeamRepository
from teamhub.core.auth.errors import UserNotFoundError
from teamhub.core.auth.types import Email, UserId
from teamhub.core.project.types import Project, ProjectId, ProjectStatus
from teamhub.core.team.types import InvitationStatus, Team, TeamId, TeamName, TeamRole

NOW = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def mock_db() -> MagicMock:
    """Return an AppDatabase mock."""
    db = MagicMock()
    db.fetch_one = AsyncMock(return_value=None)
    db.fetch_all = AsyncMock(return_value=[])
    db.fetch_value = AsyncMock(return_value=None)
    db.execute = AsyncMock(return_value="DELETE 1")
    db.execute_returning = AsyncMock(return_value=None)
    return db


def team_row(team_id: uuid.UUID, /, **extra: object) -> dict:
    return {
        "id": team_id,
        "name": "Platform",
        "description": None,
        "created_at": NOW,
        "updated_at": NOW,
        **extra,
    }


class TestPostgresTeamRepository:
    """Tests for PostgresTeamRepository."""

    async def test_find_with_membership(self, mock_db: MagicMock) -> None:
        team_id, user_id = uuid.uuid4(), uuid.uuid4()
        mock_db.fetch_one.return_value = team_row(
            team_id,
            membership_id=uuid.uuid4(),
            user_id=user_id,
            team_id=team_id,
            role="admin",
            joined_at=NOW,
        )
        repo = PostgresTeamRepository(mock_db)

        result = await repo.find_by_id_with_membership(TeamId(str(team_id)), UserId(str(user_id)))

        assert result is not None
        assert result.team.name.value == "Platform"
        assert result.membership is not None
        assert result.membership.role is TeamRole.ADMIN
        assert result.membership.user_id == UserId(str(user_id))

    async def test_find_with_membership_non_member(self, mock_db: MagicMock) -> None:
        team_id = uuid.uuid4()
        mock_db.fetch_one.return_value = team_row(
            team_id, membership_id=None, user_id=None, team_id=None, role=None, joined_at=None
        )
        repo = PostgresTeamRepository(mock_db)

        result = await repo.find_by_id_with_membership(TeamId(str(team_id)), UserId.generate())

        assert result is not None
        assert result.membership is None

    async def test_find_with_membership_missing_team(self, mock_db: MagicMock) -> None:
        repo = PostgresTeamRepository(mock_db)
        assert await repo.find_by_id_with_membership(TeamId.generate(), UserId.generate()) is None

    async def test_create_inserts_owner_membership(self, mock_db: MagicMock) -> None:
        team = Team.create(TeamName("Platform"))
        conn = MagicMock()
        conn.fetchrow = AsyncMock(return_value=team_row(team.id.uuid))
        conn.execute = AsyncMock()

        @asynccontextmanager
        async def transaction():
            yield conn

        mock_db.transaction = transaction
        repo = PostgresTeamRepository(mock_db)
        owner_id = UserId.generate()

        created = await repo.create(team, owner_id)

        assert created.id == team.id
        args = conn.execute.await_args.args
        assert args[2] == owner_id.uuid
        assert args[4] == "owner"

    async def test_count_members(self, mock_db: MagicMock) -> None:
        mock_db.fetch_value.return_value = 4
        repo = PostgresTeamRepository(mock_db)
        assert await repo.count_members(TeamId.generate()) == 4


class TestPostgresInvitationRepository:
    """Tests for PostgresInvitationRepository."""

    async def test_find_pending_by_email(self, mock_db: MagicMock) -> None:
        team_id = uuid.uuid4()
        mock_db.fetch_all.return_value = [
            {
                "id": uuid.uuid4(),
                "team_id": team_id,
                "email": "new@example.com",
                "role": "member",
                "token": "ab" * 32,
                "invited_by": uuid.uuid4(),
                "expires_at": NOW,
                "status": "pending",
                "created_at": NOW,
                "team_name": "Platform",
                "inviter_name": "Olivia Owner",
            }
        ]
        repo = PostgresInvitationRepository(mock_db)

        (result,) = await repo.find_pending_by_email(
            Email("new@example.com")
        )

        assert result.team_name == "Platform"
        assert result.inviter_name == "Olivia Owner"
        assert result.invitation.status is InvitationStatus.PENDING
        assert result.invitation.team_id == TeamId(str(team_id))


class TestPostgresProjectRepository:
    """Tests for PostgresProjectRepository."""

    async def test_next_position(self, mock_db: MagicMock) -> None:
        mock_db.fetch_value.return_value = 2
        repo = PostgresProjectRepository(mock_db)

        assert await repo.get_next_position(TeamId.generate()) == 2

    async def test_next_position_counts_archived(self, mock_db: MagicMock) -> None:
        """Next position is taken over every project of the team, archived included."""
        mock_db.fetch_value.return_value = 0
        repo = PostgresProjectRepository(mock_db)

        await repo.get_next_position(TeamId.generate())

        args = mock_db.fetch_value.await_args.args
        assert "status" not in args[0]
        assert len(args) == 2

    async def test_find_by_team_excludes_archived(self, mock_db: MagicMock) -> None:
        repo = PostgresProjectRepository(mock_db)
        await repo.find_by_team_id(TeamId.generate())
        assert "status = $2" in mock_db.fetch_all.await_args.args[0]

    async def test_save_round_trips_row(self, mock_db: MagicMock, project: Project) -> None:
        mock_db.execute_returning.return_value = {
            "id": project.id.uuid,
            "team_id": project.team_id.uuid,
            "name": "Roadmap",
            "description": "Q3 roadmap",
            "status": "archived",
            "position": 0,
            "created_by": project.created_by.uuid,
            "created_at": NOW,
            "updated_at": NOW,
        }
        repo = PostgresProjectRepository(mock_db)

        saved = await repo.save(project)

        assert saved.id == project.id
        assert saved.status is ProjectStatus.ARCHIVED

    async def test_update_positions(self, mock_db: MagicMock) -> None:
        conn = MagicMock()
        conn.executemany = AsyncMock()

        @asynccontextmanager
        async def transaction():
            yield conn

        mock_db.transaction = transaction
        repo = PostgresProjectRepository(mock_db)
        first, second = ProjectId.generate(), ProjectId.generate()

        await repo.update_positions([(first, 0), (second, 1)])

        rows = conn.executemany.await_args.args[1]
        assert rows == [(first.uuid, 0), (second.uuid, 1)]


class TestPostgresUserRepository:
    """Tests for PostgresUserRepository."""

    async def test_update_profile_missing_user(self, mock_db: MagicMock) -> None:
        repo = PostgresUserRepository(mock_db)
        with pytest.raises(UserNotFoundError):
            await repo.update_profile(UserId.generate(), "Name", None)
