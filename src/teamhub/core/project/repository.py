"""Project repository protocol."""

from typing import Protocol, runtime_checkable

from teamhub.core.project.types import Project, ProjectId
from teamhub.core.team.types import TeamId


@runtime_checkable
class ProjectRepository(Protocol):
    """Protocol for project persistence."""

    async def save(self, project: Project) -> Project:
        """Insert or update a project."""
        ...

    async def find_by_id(self, project_id: ProjectId) -> Project | None:
        """Get project by ID."""
        ...

    async def find_by_team_id(
        self, team_id: TeamId, include_archived: bool = False
    ) -> list[Project]:
        """List a team's projects ordered by position."""
        ...

    async def delete(self, project_id: ProjectId) -> None:
        """Delete a project."""
        ...

    async def get_next_position(self, team_id: TeamId) -> int:
        """Position after the last active project of the team."""
        ...

    async def update_positions(self, positions: list[tuple[ProjectId, int]]) -> None:
        """Set positions of several projects atomically."""
        ...
