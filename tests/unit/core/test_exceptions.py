"""Tests for the domain exception hierarchy."""

from __future__ import annotations

import pytest

from teamhub.core.auth.errors import InvalidCredentialsError, InvalidEmailError
from teamhub.core.exceptions import (
    AuthenticationError,
    BusinessRuleError,
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    TeamhubError,
    ValidationError,
)
from teamhub.core.project.errors import ProjectAlreadyArchivedError, ProjectNotFoundError
from teamhub.core.team.errors import (
    AlreadyTeamMemberError,
    InsufficientTeamPermissionError,
    NotTeamMemberError,
)


class TestHierarchy:
    """Every domain error belongs to exactly one category."""

    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (InvalidEmailError("x"), ValidationError),
            (InvalidCredentialsError(), AuthenticationError),
            (InsufficientTeamPermissionError.for_action("delete team"), PermissionDeniedError),
            (NotTeamMemberError("t"), PermissionDeniedError),
            (ProjectNotFoundError("p"), NotFoundError),
            (AlreadyTeamMemberError("t"), ConflictError),
            (ProjectAlreadyArchivedError("p"), BusinessRuleError),
        ],
    )
    def test_category(self, error: DomainError, category: type[DomainError]) -> None:
        """Error is an instance of its category and of the base classes."""
        assert isinstance(error, category)
        assert isinstance(error, DomainError)
        assert isinstance(error, TeamhubError)

    def test_catch_all(self) -> None:
        """TeamhubError catches any domain error."""
        with pytest.raises(TeamhubError):
            raise ProjectNotFoundError("abc")


class TestPayload:
    """Tests for DomainError.to_dict."""

    def test_code_and_message(self) -> None:
        error = InvalidCredentialsError()
        assert error.to_dict() == {
            "code": "INVALID_CREDENTIALS",
            "message": "Invalid email or password",
        }

    def test_insufficient_permission_message(self) -> None:
        error = InsufficientTeamPermissionError.for_action("delete team")
        assert error.code == "INSUFFICIENT_PERMISSION"
        assert str(error) == "Insufficient permission to delete team"
