"""PostgreSQL implementation of ProjectRepository."""

from typing import Any

from teamhub.adapters.db.app_db import AppDatabase
from teamhub.core.auth.types import UserId
from teamhub.core.project.types import Project, ProjectId, ProjectName, ProjectStatus
from teamhub.core.team.types import TeamId

PROJECT_COLUMNS = """id, team_id, name, description, status, position,
    created_by, created_at, updated_at"""


def _row_to_project(row: dict[str, Any]) -> Project:
    """Convert database row to Project entity."""
    return Project(
        id=ProjectId(str(row["id"])),
        team_id=TeamId(str(row["team_id"])),
        name=ProjectName(row["name"]),
        created_by=UserId(str(row["created_by"])),
        description=row["description"],
        status=ProjectStatus(row["status"]),
        position=row["position"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PostgresProjectRepository:
    """PostgreSQL implementation of project repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def save(self, project: Project) -> Project:
        row = await self._db.execute_returning(
            f"""
            INSERT INTO projects (id, team_id, name, description, status, position,
                                  created_by, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            ON CONFLICT (id) DO UPDATE SET
                name = EXCLUDED.name,
                description = EXCLUDED.description,
                status = EXCLUDED.status,
                position = EXCLUDED.position,
                updated_at = EXCLUDED.updated_at
            RETURNING {PROJECT_COLUMNS}
            """,
            project.id.uuid,
            project.team_id.uuid,
            project.name.value,
            project.description,
            project.status.value,
            project.position,
            project.created_by.uuid,
            project.created_at,
            project.updated_at,
        )
        if row is None:
            raise RuntimeError("Failed to save project")
        return _row_to_project(row)

    async def find_by_id(self, project_id: ProjectId) -> Project | None:
        row = await self._db.fetch_one(
            f"SELECT {PROJECT_COLUMNS} FROM projects WHERE id = $1",
            project_id.uuid,
        )
        return _row_to_project(row) if row else None

    async def find_by_team_id(
        self, team_id: TeamId, include_archived: bool = False
    ) -> list[Project]:
        if include_archived:
            rows = await self._db.fetch_all(
                f"SELECT {PROJECT_COLUMNS} FROM projects WHERE team_id = $1 "
                "ORDER BY position ASC, created_at ASC",
                team_id.uuid,
            )
        else:
            rows = await self._db.fetch_all(
                f"SELECT {PROJECT_COLUMNS} FROM projects WHERE team_id = $1 AND status = $2 "
                "ORDER BY position ASC, created_at ASC",
                team_id.uuid,
                ProjectStatus.ACTIVE.value,
            )
        return [_row_to_project(row) for row in rows]

    async def delete(self, project_id: ProjectId) -> None:
        await self._db.execute("DELETE FROM projects WHERE id = $1", project_id.uuid)

    async def get_next_position(self, team_id: TeamId) -> int:
        # Archived projects keep their slot, so a restored project goes last
        value = await self._db.fetch_value(
            "SELECT COALESCE(MAX(position) + 1, 0) FROM projects WHERE team_id = $1",
            team_id.uuid,
        )
        return int(value)

    async def update_positions(self, positions: list[tuple[ProjectId, int]]) -> None:
        async with self._db.transaction() as conn:
            await conn.executemany(
                "UPDATE projects SET position = $2, updated_at = NOW() WHERE id = $1",
                [(project_id.uuid, position) for project_id, position in positions],
            )
