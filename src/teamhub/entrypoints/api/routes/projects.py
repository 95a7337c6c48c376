"""Project API routes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from teamhub.core.project.service import ProjectService
from teamhub.core.project.types import Project
from teamhub.core.unset import UNSET
from teamhub.entrypoints.api.deps import get_project_service
from teamhub.entrypoints.api.middleware.jwt_auth import CurrentUser

router = APIRouter(tags=["projects"])


class ProjectCreate(BaseModel):
    """Request to create a project."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class ProjectUpdate(BaseModel):
    """Request to update a project."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class ProjectReorder(BaseModel):
    """New order of the team's active projects."""

    project_ids: list[str] = Field(..., min_length=1)


class ProjectResponse(BaseModel):
    """Project response."""

    id: str
    team_id: str
    name: str
    description: str | None
    status: str
    position: int
    created_by: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_project(cls, project: Project) -> ProjectResponse:
        return cls(
            id=project.id.value,
            team_id=project.team_id.value,
            name=project.name.value,
            description=project.description,
            status=project.status.value,
            position=project.position,
            created_by=project.created_by.value,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class SuccessResponse(BaseModel):
    success: bool


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]


@router.get("/teams/{team_id}/projects", response_model=list[ProjectResponse])
async def list_team_projects(
    team_id: str,
    auth: CurrentUser,
    service: ProjectServiceDep,
    include_archived: Annotated[bool, Query()] = False,
) -> list[ProjectResponse]:
    """List a team's projects in display order."""
    projects = await service.get_team_projects(auth.user_id, team_id, include_archived)
    return [ProjectResponse.from_project(p) for p in projects]


@router.post("/teams/{team_id}/projects", response_model=ProjectResponse, status_code=201)
async def create_project(
    team_id: str,
    body: ProjectCreate,
    auth: CurrentUser,
    service: ProjectServiceDep,
) -> ProjectResponse:
    """Create a project (owner/admin)."""
    project = await service.create_project(auth.user_id, team_id, body.name, body.description)
    return ProjectResponse.from_project(project)


@router.put("/teams/{team_id}/projects/order", response_model=SuccessResponse)
async def reorder_projects(
    team_id: str,
    body: ProjectReorder,
    auth: CurrentUser,
    service: ProjectServiceDep,
) -> SuccessResponse:
    """Reorder the team's active projects (owner/admin)."""
    return SuccessResponse(**await service.reorder_projects(auth.user_id, team_id, body.project_ids))


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str, auth: CurrentUser, service: ProjectServiceDep
) -> ProjectResponse:
    """Get a project."""
    return ProjectResponse.from_project(await service.get_project(auth.user_id, project_id))


@router.patch("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    auth: CurrentUser,
    service: ProjectServiceDep,
) -> ProjectResponse:
    """Update a project's name or description (owner/admin)."""
    description = body.description if "description" in body.model_fields_set else UNSET
    project = await service.update_project(auth.user_id, project_id, body.name, description)
    return ProjectResponse.from_project(project)


@router.post("/projects/{project_id}/archive", response_model=ProjectResponse)
async def archive_project(
    project_id: str, auth: CurrentUser, service: ProjectServiceDep
) -> ProjectResponse:
    """Archive a project (owner/admin)."""
    return ProjectResponse.from_project(await service.archive_project(auth.user_id, project_id))


@router.post("/projects/{project_id}/restore", response_model=ProjectResponse)
async def restore_project(
    project_id: str, auth: CurrentUser, service: ProjectServiceDep
) -> ProjectResponse:
    """Restore an archived project to the end of the list (owner/admin)."""
    return ProjectResponse.from_project(await service.restore_project(auth.user_id, project_id))


@router.delete("/projects/{project_id}", response_model=SuccessResponse)
async def delete_project(
    project_id: str, auth: CurrentUser, service: ProjectServiceDep
) -> SuccessResponse:
    """Delete a project (team owner only)."""
    return SuccessResponse(**await service.delete_project(auth.user_id, project_id))
