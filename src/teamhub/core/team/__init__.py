"""Teams, memberships, roles and invitations."""

from teamhub.core.team.invitations import InvitationService
from teamhub.core.team.service import TeamService
from teamhub.core.team.types import (
    InvitationStatus,
    InvitationToken,
    Team,
    TeamInvitation,
    TeamMembership,
    TeamRole,
)

__all__ = [
    "InvitationService",
    "InvitationStatus",
    "InvitationToken",
    "Team",
    "TeamInvitation",
    "TeamMembership",
    "TeamRole",
    "TeamService",
]
