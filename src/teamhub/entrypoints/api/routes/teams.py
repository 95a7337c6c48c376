"""Team management API routes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from teamhub.core.team.service import TeamService
from teamhub.core.team.types import MemberWithUser, Team
from teamhub.core.unset import UNSET
from teamhub.entrypoints.api.deps import get_team_service
from teamhub.entrypoints.api.middleware.jwt_auth import CurrentUser

router = APIRouter(prefix="/teams", tags=["teams"])


class TeamCreate(BaseModel):
    """Request to create a team."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class TeamUpdate(BaseModel):
    """Request to update a team."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class RoleChange(BaseModel):
    """Request to change a member's role."""

    role: Literal["admin", "member"]


class TeamResponse(BaseModel):
    """Team response."""

    id: str
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_team(cls, team: Team) -> TeamResponse:
        return cls(
            id=team.id.value,
            name=team.name.value,
            description=team.description,
            created_at=team.created_at,
            updated_at=team.updated_at,
        )


class TeamDetailResponse(BaseModel):
    """Team with the caller's role and member count."""

    team: TeamResponse
    role: str
    member_count: int


class MyTeamResponse(BaseModel):
    team: TeamResponse
    role: str


class MemberResponse(BaseModel):
    """Team member with user details."""

    id: str
    user_id: str
    user_name: str
    user_email: str
    user_avatar_url: str | None
    role: str
    joined_at: datetime

    @classmethod
    def from_member(cls, member: MemberWithUser) -> MemberResponse:
        return cls(
            id=member.membership.id.value,
            user_id=member.membership.user_id.value,
            user_name=member.name,
            user_email=member.email,
            user_avatar_url=member.avatar_url.value if member.avatar_url else None,
            role=member.membership.role.value,
            joined_at=member.membership.joined_at,
        )


class SuccessResponse(BaseModel):
    success: bool


TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]


@router.get("", response_model=list[MyTeamResponse])
async def list_my_teams(auth: CurrentUser, service: TeamServiceDep) -> list[MyTeamResponse]:
    """List teams the caller belongs to, with the caller's role."""
    teams = await service.get_my_teams(auth.user_id)
    return [MyTeamResponse(team=TeamResponse.from_team(t.team), role=t.role.value) for t in teams]


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(body: TeamCreate, auth: CurrentUser, service: TeamServiceDep) -> TeamResponse:
    """Create a new team owned by the caller."""
    team = await service.create_team(auth.user_id, body.name, body.description)
    return TeamResponse.from_team(team)


@router.get("/{team_id}", response_model=TeamDetailResponse)
async def get_team(team_id: str, auth: CurrentUser, service: TeamServiceDep) -> TeamDetailResponse:
    """Get a team by ID."""
    details = await service.get_team(auth.user_id, team_id)
    return TeamDetailResponse(
        team=TeamResponse.from_team(details.team),
        role=details.role.value,
        member_count=details.member_count,
    )


@router.patch("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: str, body: TeamUpdate, auth: CurrentUser, service: TeamServiceDep
) -> TeamResponse:
    """Update a team (owner/admin)."""
    description = body.description if "description" in body.model_fields_set else UNSET
    team = await service.update_team(auth.user_id, team_id, body.name, description)
    return TeamResponse.from_team(team)


@router.delete("/{team_id}", response_model=SuccessResponse)
async def delete_team(team_id: str, auth: CurrentUser, service: TeamServiceDep) -> SuccessResponse:
    """Delete a team (owner only)."""
    return SuccessResponse(**await service.delete_team(auth.user_id, team_id))


@router.get("/{team_id}/members", response_model=list[MemberResponse])
async def get_team_members(
    team_id: str, auth: CurrentUser, service: TeamServiceDep
) -> list[MemberResponse]:
    """List team members."""
    members = await service.get_team_members(auth.user_id, team_id)
    return [MemberResponse.from_member(m) for m in members]


@router.put("/{team_id}/members/{user_id}/role", response_model=MemberResponse)
async def change_member_role(
    team_id: str,
    user_id: str,
    body: RoleChange,
    auth: CurrentUser,
    service: TeamServiceDep,
) -> MemberResponse:
    """Change a member's role."""
    member = await service.change_member_role(auth.user_id, team_id, user_id, body.role)
    return MemberResponse.from_member(member)


@router.delete("/{team_id}/members/{user_id}", response_model=SuccessResponse)
async def remove_member(
    team_id: str, user_id: str, auth: CurrentUser, service: TeamServiceDep
) -> SuccessResponse:
    """Remove a member from a team."""
    return SuccessResponse(**await service.remove_member(auth.user_id, team_id, user_id))


@router.post("/{team_id}/leave", response_model=SuccessResponse)
async def leave_team(team_id: str, auth: CurrentUser, service: TeamServiceDep) -> SuccessResponse:
    """Leave a team."""
    return SuccessResponse(**await service.leave_team(auth.user_id, team_id))
