"""PostgreSQL implementations of TeamRepository and TeamInvitationRepository."""

from typing import Any

import structlog

from teamhub.adapters.db.app_db import AppDatabase
from teamhub.core.auth.types import AvatarUrl, Email, UserId
from teamhub.core.team.errors import TeamNotFoundError
from teamhub.core.team.types import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    InvitationWithTeam,
    MembershipId,
    MemberWithUser,
    Team,
    TeamId,
    TeamInvitation,
    TeamMembership,
    TeamName,
    TeamRole,
    TeamWithMembership,
    TeamWithRole,
)

logger = structlog.get_logger()

INVITATION_COLUMNS = """i.id, i.team_id, i.email, i.role, i.token, i.invited_by,
    i.expires_at, i.status, i.created_at"""


def _row_to_team(row: dict[str, Any]) -> Team:
    """Convert database row to Team entity."""
    return Team(
        id=TeamId(str(row["id"])),
        name=TeamName(row["name"]),
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_membership(row: dict[str, Any]) -> TeamMembership:
    return TeamMembership(
        id=MembershipId(str(row["membership_id"])),
        user_id=UserId(str(row["user_id"])),
        team_id=TeamId(str(row["team_id"])),
        role=TeamRole(row["role"]),
        joined_at=row["joined_at"],
    )


def _row_to_invitation(row: dict[str, Any]) -> TeamInvitation:
    return TeamInvitation(
        id=InvitationId(str(row["id"])),
        team_id=TeamId(str(row["team_id"])),
        email=Email(row["email"]),
        role=TeamRole(row["role"]),
        token=InvitationToken(row["token"]),
        invited_by=UserId(str(row["invited_by"])),
        expires_at=row["expires_at"],
        status=InvitationStatus(row["status"]),
        created_at=row["created_at"],
    )


class PostgresTeamRepository:
    """PostgreSQL implementation of team repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def create(self, team: Team, owner_id: UserId) -> Team:
        """Create the team and its owner membership in one transaction."""
        owner = TeamMembership.create_owner(owner_id, team.id)
        async with self._db.transaction() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO teams (id, name, description, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING id, name, description, created_at, updated_at
                """,
                team.id.uuid,
                team.name.value,
                team.description,
                team.created_at,
                team.updated_at,
            )
            await conn.execute(
                """
                INSERT INTO team_memberships (id, user_id, team_id, role, joined_at)
                VALUES ($1, $2, $3, $4, $5)
                """,
                owner.id.uuid,
                owner.user_id.uuid,
                owner.team_id.uuid,
                owner.role.value,
                owner.joined_at,
            )
        return _row_to_team(dict(row))

    async def find_by_id(self, team_id: TeamId) -> Team | None:
        row = await self._db.fetch_one(
            "SELECT id, name, description, created_at, updated_at FROM teams WHERE id = $1",
            team_id.uuid,
        )
        return _row_to_team(row) if row else None

    async def find_by_id_with_membership(
        self, team_id: TeamId, user_id: UserId
    ) -> TeamWithMembership | None:
        row = await self._db.fetch_one(
            """
            SELECT t.id, t.name, t.description, t.created_at, t.updated_at,
                   m.id AS membership_id, m.user_id, m.team_id, m.role, m.joined_at
            FROM teams t
            LEFT JOIN team_memberships m ON m.team_id = t.id AND m.user_id = $2
            WHERE t.id = $1
            """,
            team_id.uuid,
            user_id.uuid,
        )
        if not row:
            return None
        membership = _row_to_membership(row) if row["membership_id"] else None
        return TeamWithMembership(team=_row_to_team(row), membership=membership)

    async def find_by_user_id(self, user_id: UserId) -> list[TeamWithRole]:
        rows = await self._db.fetch_all(
            """
            SELECT t.id, t.name, t.description, t.created_at, t.updated_at, m.role
            FROM teams t
            JOIN team_memberships m ON m.team_id = t.id
            WHERE m.user_id = $1
            ORDER BY t.name
            """,
            user_id.uuid,
        )
        return [TeamWithRole(team=_row_to_team(row), role=TeamRole(row["role"])) for row in rows]

    async def update(self, team: Team) -> Team:
        row = await self._db.execute_returning(
            """
            UPDATE teams SET name = $2, description = $3, updated_at = $4
            WHERE id = $1
            RETURNING id, name, description, created_at, updated_at
            """,
            team.id.uuid,
            team.name.value,
            team.description,
            team.updated_at,
        )
        if row is None:
            raise TeamNotFoundError(team.id.value)
        return _row_to_team(row)

    async def delete(self, team_id: TeamId) -> None:
        # Memberships, invitations and projects cascade
        result = await self._db.execute("DELETE FROM teams WHERE id = $1", team_id.uuid)
        if result != "DELETE 1":
            logger.warning("team_delete_noop", team_id=team_id.value)

    async def get_memberships(self, team_id: TeamId) -> list[MemberWithUser]:
        rows = await self._db.fetch_all(
            """
            SELECT m.id AS membership_id, m.user_id, m.team_id, m.role, m.joined_at,
                   u.name, u.email, u.avatar_url
            FROM team_memberships m
            JOIN users u ON u.id = m.user_id
            WHERE m.team_id = $1
            ORDER BY m.joined_at
            """,
            team_id.uuid,
        )
        return [
            MemberWithUser(
                membership=_row_to_membership(row),
                name=row["name"],
                email=row["email"],
                avatar_url=AvatarUrl(row["avatar_url"]) if row["avatar_url"] else None,
            )
            for row in rows
        ]

    async def get_membership(self, team_id: TeamId, user_id: UserId) -> TeamMembership | None:
        row = await self._db.fetch_one(
            """
            SELECT id AS membership_id, user_id, team_id, role, joined_at
            FROM team_memberships
            WHERE team_id = $1 AND user_id = $2
            """,
            team_id.uuid,
            user_id.uuid,
        )
        return _row_to_membership(row) if row else None

    async def add_membership(self, membership: TeamMembership) -> TeamMembership:
        await self._db.execute(
            """
            INSERT INTO team_memberships (id, user_id, team_id, role, joined_at)
            VALUES ($1, $2, $3, $4, $5)
            """,
            membership.id.uuid,
            membership.user_id.uuid,
            membership.team_id.uuid,
            membership.role.value,
            membership.joined_at,
        )
        return membership

    async def update_membership(self, membership: TeamMembership) -> TeamMembership:
        await self._db.execute(
            "UPDATE team_memberships SET role = $2 WHERE id = $1",
            membership.id.uuid,
            membership.role.value,
        )
        return membership

    async def remove_membership(self, team_id: TeamId, user_id: UserId) -> None:
        await self._db.execute(
            "DELETE FROM team_memberships WHERE team_id = $1 AND user_id = $2",
            team_id.uuid,
            user_id.uuid,
        )

    async def count_members(self, team_id: TeamId) -> int:
        count = await self._db.fetch_value(
            "SELECT COUNT(*) FROM team_memberships WHERE team_id = $1",
            team_id.uuid,
        )
        return int(count or 0)

    async def is_member(self, team_id: TeamId, user_id: UserId) -> bool:
        return await self.get_membership(team_id, user_id) is not None

    async def is_email_member(self, team_id: TeamId, email: Email) -> bool:
        result = await self._db.fetch_value(
            """
            SELECT EXISTS(
                SELECT 1 FROM team_memberships m
                JOIN users u ON u.id = m.user_id
                WHERE m.team_id = $1 AND u.email = $2
            )
            """,
            team_id.uuid,
            email.value,
        )
        return bool(result)


class PostgresInvitationRepository:
    """PostgreSQL implementation of team invitation repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        await self._db.execute(
            """
            INSERT INTO team_invitations
                (id, team_id, email, role, token, invited_by, expires_at, status, created_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            """,
            invitation.id.uuid,
            invitation.team_id.uuid,
            invitation.email.value,
            invitation.role.value,
            invitation.token.value,
            invitation.invited_by.uuid,
            invitation.expires_at,
            invitation.status.value,
            invitation.created_at,
        )
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> TeamInvitation | None:
        row = await self._db.fetch_one(
            f"SELECT {INVITATION_COLUMNS} FROM team_invitations i WHERE i.id = $1",
            invitation_id.uuid,
        )
        return _row_to_invitation(row) if row else None

    async def find_by_token(self, token: InvitationToken) -> TeamInvitation | None:
        row = await self._db.fetch_one(
            f"SELECT {INVITATION_COLUMNS} FROM team_invitations i WHERE i.token = $1",
            token.value,
        )
        return _row_to_invitation(row) if row else None

    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        await self._db.execute(
            "UPDATE team_invitations SET status = $2 WHERE id = $1",
            invitation.id.uuid,
            invitation.status.value,
        )
        return invitation

    async def delete(self, invitation_id: InvitationId) -> None:
        await self._db.execute("DELETE FROM team_invitations WHERE id = $1", invitation_id.uuid)

    async def find_pending_by_email(self, email: Email) -> list[InvitationWithTeam]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {INVITATION_COLUMNS}, t.name AS team_name, u.name AS inviter_name
            FROM team_invitations i
            JOIN teams t ON t.id = i.team_id
            JOIN users u ON u.id = i.invited_by
            WHERE i.email = $1 AND i.status = 'pending' AND i.expires_at > NOW()
            ORDER BY i.created_at DESC
            """,
            email.value,
        )
        return [
            InvitationWithTeam(
                invitation=_row_to_invitation(row),
                team_name=row["team_name"],
                inviter_name=row["inviter_name"],
            )
            for row in rows
        ]

    async def find_pending_by_team_and_email(
        self, team_id: TeamId, email: Email
    ) -> TeamInvitation | None:
        row = await self._db.fetch_one(
            f"""
            SELECT {INVITATION_COLUMNS} FROM team_invitations i
            WHERE i.team_id = $1 AND i.email = $2
              AND i.status = 'pending' AND i.expires_at > NOW()
            """,
            team_id.uuid,
            email.value,
        )
        return _row_to_invitation(row) if row else None

    async def find_by_team(self, team_id: TeamId) -> list[TeamInvitation]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {INVITATION_COLUMNS} FROM team_invitations i
            WHERE i.team_id = $1
            ORDER BY i.created_at DESC
            """,
            team_id.uuid,
        )
        return [_row_to_invitation(row) for row in rows]
