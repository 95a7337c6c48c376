"""Team domain types: roles, identifiers, teams, memberships and invitations."""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Self

from teamhub.core.auth.types import AvatarUrl, Email, UserId
from teamhub.core.ids import EntityId
from teamhub.core.team.errors import (
    InvalidInvitationIdError,
    InvalidInvitationStatusError,
    InvalidInvitationTokenError,
    InvalidMembershipIdError,
    InvalidTeamIdError,
    InvalidTeamRoleError,
    InvitationEmailMismatchError,
    InvitationExpiredError,
    InvitationNotPendingError,
    TeamNameInvalidError,
)
from teamhub.core.unset import UNSET

MAX_TEAM_NAME_LENGTH = 100
INVITATION_TOKEN_BYTES = 32  # 256 bits, 64 hex characters
INVITATION_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{64}$", re.IGNORECASE)
DEFAULT_INVITATION_EXPIRY_DAYS = 7


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_aware(value: datetime) -> datetime:
    # Handle timezone-naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TeamId(EntityId):
    invalid_error = InvalidTeamIdError


class MembershipId(EntityId):
    invalid_error = InvalidMembershipIdError


class InvitationId(EntityId):
    invalid_error = InvalidInvitationIdError


class TeamRole(str, Enum):
    """Team roles, totally ordered: owner > admin > member."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def create(cls, value: str) -> TeamRole:
        """Parse a role name, ignoring case and surrounding whitespace.

        Raises:
            InvalidTeamRoleError: If the name is not a known role.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidTeamRoleError(value) from None

    @property
    def level(self) -> int:
        return ROLE_LEVELS[self]

    def is_at_least(self, other: TeamRole) -> bool:
        return self.level >= other.level

    def is_higher_than(self, other: TeamRole) -> bool:
        return self.level > other.level


ROLE_LEVELS = {TeamRole.OWNER: 3, TeamRole.ADMIN: 2, TeamRole.MEMBER: 1}

# Roles that can be granted through invitations or role changes
ASSIGNABLE_ROLES = (TeamRole.ADMIN, TeamRole.MEMBER)


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @classmethod
    def create(cls, value: str) -> InvitationStatus:
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidInvitationStatusError(value) from None


@dataclass(frozen=True)
class TeamName:
    value: str

    @classmethod
    def create(cls, value: str) -> Self:
        trimmed = value.strip()
        if not trimmed:
            raise TeamNameInvalidError("Team name cannot be empty")
        if len(trimmed) > MAX_TEAM_NAME_LENGTH:
            raise TeamNameInvalidError(
                f"Team name must be at most {MAX_TEAM_NAME_LENGTH} characters"
            )
        return cls(trimmed)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InvitationToken:
    """256-bit random secret rendered as 64 hex characters."""

    value: str = field(repr=False)

    @classmethod
    def generate(cls) -> Self:
        return cls(secrets.token_hex(INVITATION_TOKEN_BYTES))

    @classmethod
    def create(cls, value: str) -> Self:
        """Wrap an existing token.

        Raises:
            InvalidInvitationTokenError: If value is not 64 hex characters.
        """
        if not INVITATION_TOKEN_PATTERN.match(value):
            raise InvalidInvitationTokenError()
        return cls(value.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Team:
    id: TeamId
    name: TeamName
    description: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, name: TeamName, description: str | None = None) -> Team:
        now = _utcnow()
        return cls(
            id=TeamId.generate(),
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def update_name(self, name: TeamName) -> Team:
        return replace(self, name=name, updated_at=_utcnow())

    def update_description(self, description: str | None) -> Team:
        return replace(self, description=description, updated_at=_utcnow())

    def update(self, name: TeamName | None = None, description: str | None = UNSET) -> Team:
        return replace(
            self,
            name=name if name is not None else self.name,
            description=self.description if description is UNSET else description,
            updated_at=_utcnow(),
        )


@dataclass(frozen=True)
class TeamMembership:
    """A user's role within one team, with the permission rules of that role."""

    id: MembershipId
    user_id: UserId
    team_id: TeamId
    role: TeamRole
    joined_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, user_id: UserId, team_id: TeamId, role: TeamRole) -> TeamMembership:
        return cls(id=MembershipId.generate(), user_id=user_id, team_id=team_id, role=role)

    @classmethod
    def create_owner(cls, user_id: UserId, team_id: TeamId) -> TeamMembership:
        return cls.create(user_id, team_id, TeamRole.OWNER)

    def is_owner(self) -> bool:
        return self.role is TeamRole.OWNER

    def can_manage_members(self) -> bool:
        return self.role.is_at_least(TeamRole.ADMIN)

    def can_modify_team(self) -> bool:
        return self.role.is_at_least(TeamRole.ADMIN)

    def can_delete_team(self) -> bool:
        return self.is_owner()

    def can_change_roles(self) -> bool:
        return self.is_owner()

    def can_invite_as(self, role: TeamRole) -> bool:
        """Owners invite as any non-owner role, admins only as member."""
        if role is TeamRole.OWNER:
            return False
        if self.role is TeamRole.OWNER:
            return True
        if self.role is TeamRole.ADMIN:
            return role is TeamRole.MEMBER
        return False

    def can_remove(self, target_role: TeamRole) -> bool:
        """Nobody removes the owner; owners remove anyone else, admins only members."""
        if target_role is TeamRole.OWNER:
            return False
        if self.role is TeamRole.OWNER:
            return True
        if self.role is TeamRole.ADMIN:
            return target_role is TeamRole.MEMBER
        return False

    def change_role(self, role: TeamRole) -> TeamMembership:
        return replace(self, role=role)


@dataclass(frozen=True)
class TeamInvitation:
    """Single-use invitation for an email address to join a team."""

    id: InvitationId
    team_id: TeamId
    email: Email
    role: TeamRole
    token: InvitationToken
    invited_by: UserId
    expires_at: datetime
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        team_id: TeamId,
        email: Email,
        role: TeamRole,
        invited_by: UserId,
        expiry_days: int = DEFAULT_INVITATION_EXPIRY_DAYS,
    ) -> TeamInvitation:
        now = _utcnow()
        return cls(
            id=InvitationId.generate(),
            team_id=team_id,
            email=email,
            role=role,
            token=InvitationToken.generate(),
            invited_by=invited_by,
            expires_at=now + timedelta(days=expiry_days),
            created_at=now,
        )

    def is_expired(self) -> bool:
        return _utcnow() > _as_aware(self.expires_at)

    def is_pending(self) -> bool:
        return self.status is InvitationStatus.PENDING

    def can_be_accepted_by(self, email: Email) -> bool:
        return self.is_pending() and not self.is_expired() and self.email == email

    def accept(self, email: Email) -> TeamInvitation:
        """Mark the invitation accepted by the given email.

        Raises:
            InvitationExpiredError: If past its expiry.
            InvitationNotPendingError: If already accepted/rejected/expired.
            InvitationEmailMismatchError: If addressed to another email.
        """
        if self.is_expired():
            raise InvitationExpiredError()
        if not self.is_pending():
            raise InvitationNotPendingError(self.status.value)
        if self.email != email:
            raise InvitationEmailMismatchError()
        return replace(self, status=InvitationStatus.ACCEPTED)

    def reject(self) -> TeamInvitation:
        if not self.is_pending():
            raise InvitationNotPendingError(self.status.value)
        return replace(self, status=InvitationStatus.REJECTED)

    def mark_expired(self) -> TeamInvitation:
        return replace(self, status=InvitationStatus.EXPIRED)


@dataclass(frozen=True)
class TeamWithRole:
    """A team together with the requesting user's role in it."""

    team: Team
    role: TeamRole


@dataclass(frozen=True)
class TeamWithMembership:
    """A team with one user's membership, which is None for non-members."""

    team: Team
    membership: TeamMembership | None


@dataclass(frozen=True)
class TeamDetails:
    team: Team
    role: TeamRole
    member_count: int


@dataclass(frozen=True)
class MemberWithUser:
    """Membership joined with the member's public profile."""

    membership: TeamMembership
    name: str
    email: str
    avatar_url: AvatarUrl | None = None


@dataclass(frozen=True)
class InvitationWithTeam:
    """Pending invitation joined with the team and inviter names."""

    invitation: TeamInvitation
    team_name: str
    inviter_name: str
