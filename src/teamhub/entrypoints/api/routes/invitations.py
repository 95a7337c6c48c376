"""Team invitation API routes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from teamhub.core.team.invitations import InvitationService
from teamhub.core.team.types import InvitationWithTeam, TeamInvitation
from teamhub.entrypoints.api.deps import get_invitation_service
from teamhub.entrypoints.api.middleware.jwt_auth import CurrentUser

router = APIRouter(tags=["invitations"])


class InvitationCreate(BaseModel):
    """Request to invite someone to a team."""

    email: EmailStr
    role: Literal["admin", "member"] = "member"


class AcceptByToken(BaseModel):
    token: str


class InvitationResponse(BaseModel):
    """Invitation response. The token is never exposed here."""

    id: str
    team_id: str
    email: str
    role: str
    status: str
    invited_by: str
    expires_at: datetime
    created_at: datetime

    @classmethod
    def from_invitation(cls, invitation: TeamInvitation) -> InvitationResponse:
        return cls(
            id=invitation.id.value,
            team_id=invitation.team_id.value,
            email=invitation.email.value,
            role=invitation.role.value,
            status=invitation.status.value,
            invited_by=invitation.invited_by.value,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
        )


class MyInvitationResponse(BaseModel):
    """Pending invitation addressed to the caller."""

    invitation: InvitationResponse
    team_name: str
    inviter_name: str

    @classmethod
    def from_pending(cls, pending: InvitationWithTeam) -> MyInvitationResponse:
        return cls(
            invitation=InvitationResponse.from_invitation(pending.invitation),
            team_name=pending.team_name,
            inviter_name=pending.inviter_name,
        )


class AcceptResponse(BaseModel):
    team_id: str
    team_name: str
    role: str


class SuccessResponse(BaseModel):
    success: bool


InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]


@router.post("/teams/{team_id}/invitations", response_model=InvitationResponse, status_code=201)
async def create_invitation(
    team_id: str,
    body: InvitationCreate,
    auth: CurrentUser,
    service: InvitationServiceDep,
) -> InvitationResponse:
    """Invite an email address to the team (owner/admin)."""
    invitation = await service.create_invitation(auth.user_id, team_id, body.email, body.role)
    return InvitationResponse.from_invitation(invitation)


@router.get("/teams/{team_id}/invitations", response_model=list[InvitationResponse])
async def list_team_invitations(
    team_id: str, auth: CurrentUser, service: InvitationServiceDep
) -> list[InvitationResponse]:
    """List all invitations of a team (owner/admin)."""
    invitations = await service.get_team_invitations(auth.user_id, team_id)
    return [InvitationResponse.from_invitation(i) for i in invitations]


@router.delete("/teams/{team_id}/invitations/{invitation_id}", response_model=SuccessResponse)
async def cancel_invitation(
    team_id: str,
    invitation_id: str,
    auth: CurrentUser,
    service: InvitationServiceDep,
) -> SuccessResponse:
    """Cancel a pending invitation (owner/admin)."""
    return SuccessResponse(**await service.cancel_invitation(auth.user_id, team_id, invitation_id))


@router.get("/invitations", response_model=list[MyInvitationResponse])
async def list_my_invitations(
    auth: CurrentUser, service: InvitationServiceDep
) -> list[MyInvitationResponse]:
    """List pending invitations addressed to the caller."""
    pending = await service.get_my_invitations(auth.user_id)
    return [MyInvitationResponse.from_pending(p) for p in pending]


@router.post("/invitations/accept", response_model=AcceptResponse)
async def accept_invitation_by_token(
    body: AcceptByToken, auth: CurrentUser, service: InvitationServiceDep
) -> AcceptResponse:
    """Accept an invitation using its emailed token."""
    return AcceptResponse(**await service.accept_invitation_by_token(auth.user_id, body.token))


@router.post("/invitations/{invitation_id}/accept", response_model=AcceptResponse)
async def accept_invitation(
    invitation_id: str, auth: CurrentUser, service: InvitationServiceDep
) -> AcceptResponse:
    """Accept an invitation addressed to the caller."""
    return AcceptResponse(**await service.accept_invitation(auth.user_id, invitation_id))


@router.post("/invitations/{invitation_id}/reject", response_model=SuccessResponse)
async def reject_invitation(
    invitation_id: str, auth: CurrentUser, service: InvitationServiceDep
) -> SuccessResponse:
    """Reject an invitation addressed to the caller."""
    return SuccessResponse(**await service.reject_invitation(auth.user_id, invitation_id))
