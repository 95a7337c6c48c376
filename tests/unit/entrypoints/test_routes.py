"""API tests running the real services over mocked repositories."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from teamhub.core.auth.jwt import JwtTokenService
from teamhub.core.auth.service import AuthService
from teamhub.core.auth.types import User
from teamhub.core.project.service import ProjectService
from teamhub.core.project.types import Project
from teamhub.core.team.invitations import InvitationService
from teamhub.core.team.service import TeamService
from teamhub.core.team.types import Team, TeamId
from teamhub.entrypoints.api.app import app
from teamhub.entrypoints.api.deps import (
    get_auth_service,
    get_invitation_service,
    get_project_service,
    get_team_service,
    get_token_service,
)

SECRET = "test-secret-that-is-at-least-32-characters"  # pragma: allowlist secret


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(SECRET)


@pytest.fixture
def client(
    token_service: JwtTokenService,
    mock_user_repo: MagicMock,
    mock_team_repo: MagicMock,
    mock_invitation_repo: MagicMock,
    mock_project_repo: MagicMock,
) -> Iterator[TestClient]:
    """Client whose dependencies resolve to in-memory mocks.

    The lifespan is not entered, so no database or Redis is needed.
    """
    refresh_store = MagicMock()
    refresh_store.store = AsyncMock()
    refresh_store.exists = AsyncMock(return_value=True)
    refresh_store.revoke = AsyncMock()
    refresh_store.revoke_all = AsyncMock()
    hasher = MagicMock()

    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        mock_user_repo, hasher, token_service, refresh_store
    )
    app.dependency_overrides[get_team_service] = lambda: TeamService(mock_team_repo)
    app.dependency_overrides[get_invitation_service] = lambda: InvitationService(
        mock_team_repo, mock_invitation_repo, mock_user_repo
    )
    app.dependency_overrides[get_project_service] = lambda: ProjectService(
        mock_project_repo, mock_team_repo
    )
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def auth_header(tokens: JwtTokenService, user: User) -> dict[str, str]:
    token = tokens.generate_access_token(user.id.value, user.email.value)
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAuthentication:
    """Tests for bearer token handling."""

    def test_missing_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/teams")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    def test_refresh_token_is_not_an_access_token(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        refresh = token_service.generate_refresh_token(owner.id.value, owner.email.value)
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {refresh}"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    def test_me(self, client: TestClient, token_service: JwtTokenService, owner: User) -> None:
        response = client.get("/api/v1/auth/me", headers=auth_header(token_service, owner))

        assert response.status_code == 200
        assert response.json()["email"] == "owner@example.com"

    def test_login_unknown_user(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "Str0ng!Pass"},
        )
        assert response.status_code == 401
        assert response.json() == {
            "error": {"code": "INVALID_CREDENTIALS", "message": "Invalid email or password"}
        }

    def test_password_reset_request_is_uniform(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/auth/password-reset/request", json={"email": "nobody@example.com"}
        )
        assert response.status_code == 200
        assert "message" in response.json()


class TestErrorMapping:
    """Domain errors map to HTTP statuses by category."""

    def test_validation_error(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        response = client.get("/api/v1/teams/not-a-uuid", headers=auth_header(token_service, owner))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TEAM_ID"

    def test_domain_error_is_logged_as_event(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        with capture_logs() as logs:
            client.get("/api/v1/teams/not-a-uuid", headers=auth_header(token_service, owner))

        assert {
            "event": "domain_error",
            "log_level": "info",
            "code": "INVALID_TEAM_ID",
            "status": 400,
            "path": "/api/v1/teams/not-a-uuid",
        } in logs

    def test_request_body_validation(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        response = client.post(
            "/api/v1/teams", json={"name": ""}, headers=auth_header(token_service, owner)
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_not_member(
        self, client: TestClient, token_service: JwtTokenService, team: Team, outsider: User
    ) -> None:
        response = client.get(
            f"/api/v1/teams/{team.id.value}", headers=auth_header(token_service, outsider)
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_MEMBER"

    def test_team_not_found(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        response = client.get(
            f"/api/v1/teams/{TeamId.generate().value}", headers=auth_header(token_service, owner)
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TEAM_NOT_FOUND"

    def test_business_rule(
        self, client: TestClient, token_service: JwtTokenService, team: Team, owner: User
    ) -> None:
        response = client.post(
            f"/api/v1/teams/{team.id.value}/leave", headers=auth_header(token_service, owner)
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "OWNER_CANNOT_LEAVE"

    def test_unexpected_error(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        mock_team_repo: MagicMock,
        owner: User,
    ) -> None:
        mock_team_repo.find_by_user_id.side_effect = RuntimeError("connection lost")
        response = client.get("/api/v1/teams", headers=auth_header(token_service, owner))

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert "connection lost" not in response.text

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/v1/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": {"code": "HTTP_ERROR", "message": "Not Found"}}

    def test_method_not_allowed(self, client: TestClient) -> None:
        response = client.delete("/health")
        assert response.status_code == 405
        assert response.json()["error"]["code"] == "HTTP_ERROR"


class TestTeamRoutes:
    """Tests for team endpoints."""

    def test_get_team(
        self, client: TestClient, token_service: JwtTokenService, team: Team, member: User
    ) -> None:
        response = client.get(
            f"/api/v1/teams/{team.id.value}", headers=auth_header(token_service, member)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["team"]["name"] == "Platform"
        assert body["role"] == "member"
        assert body["member_count"] == 3

    def test_create_team(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        response = client.post(
            "/api/v1/teams",
            json={"name": "Data", "description": "pipelines"},
            headers=auth_header(token_service, owner),
        )
        assert response.status_code == 201
        assert response.json()["name"] == "Data"

    def test_create_team_description_too_long(
        self, client: TestClient, token_service: JwtTokenService, owner: User
    ) -> None:
        response = client.post(
            "/api/v1/teams",
            json={"name": "Data", "description": "x" * 1001},
            headers=auth_header(token_service, owner),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_update_team_description_too_long(
        self, client: TestClient, token_service: JwtTokenService, team: Team, owner: User
    ) -> None:
        response = client.patch(
            f"/api/v1/teams/{team.id.value}",
            json={"description": "x" * 1001},
            headers=auth_header(token_service, owner),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_update_team_clears_description(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        mock_team_repo: MagicMock,
        team: Team,
        owner: User,
    ) -> None:
        """A JSON null description removes it."""
        response = client.patch(
            f"/api/v1/teams/{team.id.value}",
            json={"description": None},
            headers=auth_header(token_service, owner),
        )

        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["name"] == "Platform"
        mock_team_repo.update.assert_awaited_once()

    def test_update_team_omitted_description_is_kept(
        self, client: TestClient, token_service: JwtTokenService, team: Team, owner: User
    ) -> None:
        response = client.patch(
            f"/api/v1/teams/{team.id.value}",
            json={"name": "Infra"},
            headers=auth_header(token_service, owner),
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Infra"
        assert response.json()["description"] == "Platform engineering"

    def test_change_role_rejects_owner(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        team: Team,
        owner: User,
        member: User,
    ) -> None:
        response = client.put(
            f"/api/v1/teams/{team.id.value}/members/{member.id.value}/role",
            json={"role": "owner"},
            headers=auth_header(token_service, owner),
        )
        assert response.status_code == 400


class TestInvitationRoutes:
    """Tests for invitation endpoints."""

    def test_create_invitation_hides_token(
        self, client: TestClient, token_service: JwtTokenService, team: Team, owner: User
    ) -> None:
        response = client.post(
            f"/api/v1/teams/{team.id.value}/invitations",
            json={"email": "guest@example.com", "role": "member"},
            headers=auth_header(token_service, owner),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "guest@example.com"
        assert "token" not in body

    def test_member_cannot_invite(
        self, client: TestClient, token_service: JwtTokenService, team: Team, member: User
    ) -> None:
        response = client.post(
            f"/api/v1/teams/{team.id.value}/invitations",
            json={"email": "guest@example.com", "role": "member"},
            headers=auth_header(token_service, member),
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSION"


class TestProjectRoutes:
    """Tests for project endpoints."""

    def test_delete_requires_owner(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        mock_project_repo: MagicMock,
        project: Project,
        admin: User,
    ) -> None:
        mock_project_repo.find_by_id.return_value = project
        response = client.delete(
            f"/api/v1/projects/{project.id.value}", headers=auth_header(token_service, admin)
        )
        assert response.status_code == 403

    def test_delete_as_owner(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        mock_project_repo: MagicMock,
        project: Project,
        owner: User,
    ) -> None:
        mock_project_repo.find_by_id.return_value = project
        response = client.delete(
            f"/api/v1/projects/{project.id.value}", headers=auth_header(token_service, owner)
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_reorder_requires_ids(
        self, client: TestClient, token_service: JwtTokenService, team: Team, admin: User
    ) -> None:
        response = client.put(
            f"/api/v1/teams/{team.id.value}/projects/order",
            json={"project_ids": []},
            headers=auth_header(token_service, admin),
        )
        assert response.status_code == 400

    def test_list_projects(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        mock_project_repo: MagicMock,
        team: Team,
        project: Project,
        member: User,
    ) -> None:
        mock_project_repo.find_by_team_id.return_value = [project]
        response = client.get(
            f"/api/v1/teams/{team.id.value}/projects?include_archived=true",
            headers=auth_header(token_service, member),
        )

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Roadmap"]
        mock_project_repo.find_by_team_id.assert_awaited_once_with(team.id, True)

    def test_update_clears_description(
        self,
        client: TestClient,
        token_service: JwtTokenService,
        mock_project_repo: MagicMock,
        project: Project,
        admin: User,
    ) -> None:
        """A JSON null description removes it."""
        mock_project_repo.find_by_id.return_value = project
        response = client.patch(
            f"/api/v1/projects/{project.id.value}",
            json={"description": None},
            headers=auth_header(token_service, admin),
        )

        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["name"] == "Roadmap"

    def test_create_description_too_long(
        self, client: TestClient, token_service: JwtTokenService, team: Team, admin: User
    ) -> None:
        response = client.post(
            f"/api/v1/teams/{team.id.value}/projects",
            json={"name": "Plan", "description": "x" * 1001},
            headers=auth_header(token_service, admin),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
