"""Project service: project lifecycle within a team."""

from __future__ import annotations

import structlog

from teamhub.core.auth.types import UserId
from teamhub.core.project.errors import (
    CannotUpdateArchivedProjectError,
    ProjectNotFoundError,
    ReorderProjectsInvalidError,
)
from teamhub.core.project.repository import ProjectRepository
from teamhub.core.project.types import Project, ProjectId, ProjectName
from teamhub.core.team.permissions import (
    assert_team_admin,
    assert_team_member,
    assert_team_owner,
)
from teamhub.core.team.repository import TeamRepository
from teamhub.core.team.types import TeamId
from teamhub.core.unset import UNSET

logger = structlog.get_logger()


class ProjectService:
    """Service for project operations.

    Reads require team membership, changes require owner/admin, and
    deletion is reserved to the team owner.
    """

    def __init__(self, projects: ProjectRepository, teams: TeamRepository) -> None:
        """Initialize the project service.

        Args:
            projects: Project repository.
            teams: Team repository, used for permission checks.
        """
        self._projects = projects
        self._teams = teams

    async def _get_or_raise(self, project_id: str) -> Project:
        project = await self._projects.find_by_id(ProjectId.create(project_id))
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def create_project(
        self,
        user_id: str,
        team_id: str,
        name: str,
        description: str | None = None,
    ) -> Project:
        """Create a project at the end of the team's list."""
        team_id_vo = TeamId.create(team_id)
        user_id_vo = UserId.create(user_id)
        project_name = ProjectName.create(name)
        await assert_team_admin(self._teams, team_id_vo, user_id_vo)

        position = await self._projects.get_next_position(team_id_vo)
        project = Project.create(team_id_vo, project_name, user_id_vo, description, position)
        project = await self._projects.save(project)
        logger.info("project_created", project_id=project.id.value, team_id=team_id_vo.value)
        return project

    async def get_project(self, user_id: str, project_id: str) -> Project:
        project = await self._get_or_raise(project_id)
        await assert_team_member(self._teams, project.team_id, UserId.create(user_id))
        return project

    async def get_team_projects(
        self, user_id: str, team_id: str, include_archived: bool = False
    ) -> list[Project]:
        team_id_vo = TeamId.create(team_id)
        await assert_team_member(self._teams, team_id_vo, UserId.create(user_id))
        return await self._projects.find_by_team_id(team_id_vo, include_archived)

    async def update_project(
        self,
        user_id: str,
        project_id: str,
        name: str | None = None,
        description: str | None = UNSET,
    ) -> Project:
        """Rename a project or change its description.

        An explicit None description clears it; leave it unset to keep the
        current one.

        Raises:
            ProjectNotFoundError: If the project does not exist.
            CannotUpdateArchivedProjectError: If the project is archived.
        """
        project = await self._get_or_raise(project_id)
        await assert_team_admin(self._teams, project.team_id, UserId.create(user_id))

        if project.is_archived:
            raise CannotUpdateArchivedProjectError(project.id.value)
        if name is None and description is UNSET:
            return project

        updated = project.update(
            name=ProjectName.create(name) if name is not None else None,
            description=description,
        )
        updated = await self._projects.save(updated)
        logger.info("project_updated", project_id=updated.id.value)
        return updated

    async def archive_project(self, user_id: str, project_id: str) -> Project:
        project = await self._get_or_raise(project_id)
        await assert_team_admin(self._teams, project.team_id, UserId.create(user_id))

        archived = await self._projects.save(project.archive())
        logger.info("project_archived", project_id=archived.id.value)
        return archived

    async def restore_project(self, user_id: str, project_id: str) -> Project:
        """Restore an archived project and move it to the end of the list."""
        project = await self._get_or_raise(project_id)
        await assert_team_admin(self._teams, project.team_id, UserId.create(user_id))

        restored = project.restore()
        position = await self._projects.get_next_position(project.team_id)
        restored = await self._projects.save(restored.update_position(position))
        logger.info("project_restored", project_id=restored.id.value, position=position)
        return restored

    async def delete_project(self, user_id: str, project_id: str) -> dict[str, bool]:
        """Delete a project (team owner only).

        Raises:
            ProjectNotFoundError: If the project does not exist.
            NotTeamMemberError: If the caller is not in the project's team.
            InsufficientTeamPermissionError: If the caller is not the owner.
        """
        project = await self._get_or_raise(project_id)
        await assert_team_owner(self._teams, project.team_id, UserId.create(user_id))

        await self._projects.delete(project.id)
        logger.info("project_deleted", project_id=project.id.value)
        return {"success": True}

    async def reorder_projects(
        self, user_id: str, team_id: str, project_ids: list[str]
    ) -> dict[str, bool]:
        """Set the order of a team's active projects.

        ``project_ids`` must list every active project exactly once; each
        project's position becomes its index in the list.

        Raises:
            ReorderProjectsInvalidError: If the list is empty, has duplicates,
                misses active projects or names unknown/archived ones.
        """
        if not project_ids:
            raise ReorderProjectsInvalidError("At least one project ID is required")
        ids = [ProjectId.create(project_id).value for project_id in project_ids]
        if len(set(ids)) != len(ids):
            raise ReorderProjectsInvalidError("Duplicate project IDs are not allowed")

        team_id_vo = TeamId.create(team_id)
        await assert_team_admin(self._teams, team_id_vo, UserId.create(user_id))

        active = await self._projects.find_by_team_id(team_id_vo, include_archived=False)
        active_ids = {project.id.value for project in active}

        missing = [project_id for project_id in active_ids if project_id not in ids]
        if missing:
            raise ReorderProjectsInvalidError(f"Missing project IDs: {', '.join(sorted(missing))}")
        extra = [project_id for project_id in ids if project_id not in active_ids]
        if extra:
            raise ReorderProjectsInvalidError(
                f"Invalid or non-active project IDs: {', '.join(extra)}"
            )

        await self._projects.update_positions(
            [(ProjectId(project_id), index) for index, project_id in enumerate(ids)]
        )
        logger.info("projects_reordered", team_id=team_id_vo.value, count=len(ids))
        return {"success": True}
