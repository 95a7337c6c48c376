"""Errors raised by the team and invitation domain."""

from __future__ import annotations

from teamhub.core.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class InvalidTeamIdError(ValidationError):
    code = "INVALID_TEAM_ID"

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid team ID format: {value}")


class InvalidMembershipIdError(ValidationError):
    code = "INVALID_MEMBERSHIP_ID"

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid membership ID format: {value}")


class InvalidInvitationIdError(ValidationError):
    code = "INVALID_INVITATION_ID"

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid invitation ID format: {value}")


class TeamNameInvalidError(ValidationError):
    code = "TEAM_NAME_INVALID"


class InvalidTeamRoleError(ValidationError):
    code = "INVALID_TEAM_ROLE"

    def __init__(self, role: str, valid: tuple[str, ...] = ("owner", "admin", "member")) -> None:
        super().__init__(f"Invalid team role: {role}. Valid roles are: {', '.join(valid)}")


class InvalidInvitationTokenError(ValidationError):
    code = "INVALID_INVITATION_TOKEN"

    def __init__(self) -> None:
        super().__init__("Invalid invitation token format")


class InvalidInvitationStatusError(ValidationError):
    code = "INVALID_INVITATION_STATUS"

    def __init__(self, status: str) -> None:
        super().__init__(f"Invalid invitation status: {status}")


class TeamNotFoundError(NotFoundError):
    code = "TEAM_NOT_FOUND"

    def __init__(self, team_id: str) -> None:
        super().__init__(f"Team not found: {team_id}")


class InvitationNotFoundError(NotFoundError):
    code = "INVITATION_NOT_FOUND"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Invitation not found: {identifier}")


class InsufficientTeamPermissionError(PermissionDeniedError):
    code = "INSUFFICIENT_PERMISSION"

    @classmethod
    def for_action(cls, action: str) -> InsufficientTeamPermissionError:
        return cls(f"Insufficient permission to {action}")


class NotTeamMemberError(PermissionDeniedError):
    code = "NOT_MEMBER"

    def __init__(self, team_id: str, user_id: str | None = None) -> None:
        if user_id is None:
            super().__init__(f"User is not a member of team {team_id}")
        else:
            super().__init__(f"User {user_id} is not a member of team {team_id}")


class InvitationEmailMismatchError(PermissionDeniedError):
    code = "INVITATION_EMAIL_MISMATCH"

    def __init__(self) -> None:
        super().__init__("This invitation was sent to a different email address")


class AlreadyTeamMemberError(ConflictError):
    code = "ALREADY_MEMBER"

    def __init__(self, team_id: str) -> None:
        super().__init__(f"User is already a member of team {team_id}")


class InvitationAlreadyExistsError(ConflictError):
    code = "INVITATION_ALREADY_EXISTS"

    def __init__(self, email: str) -> None:
        super().__init__(f"A pending invitation already exists for {email}")


class CannotRemoveOwnerError(BusinessRuleError):
    code = "CANNOT_REMOVE_OWNER"

    def __init__(self) -> None:
        super().__init__("The team owner cannot be removed")


class OwnerCannotLeaveError(BusinessRuleError):
    code = "OWNER_CANNOT_LEAVE"

    def __init__(self) -> None:
        super().__init__("The team owner cannot leave the team. Delete the team instead")


class CannotDemoteOwnerError(BusinessRuleError):
    code = "CANNOT_DEMOTE_OWNER"

    def __init__(self) -> None:
        super().__init__("The team owner's role cannot be changed")


class InvitationExpiredError(BusinessRuleError):
    code = "INVITATION_EXPIRED"

    def __init__(self) -> None:
        super().__init__("This invitation has expired")


class InvitationNotPendingError(BusinessRuleError):
    code = "INVITATION_NOT_PENDING"

    def __init__(self, status: str) -> None:
        super().__init__(f"Invitation is no longer pending (status: {status})")
