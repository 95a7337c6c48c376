"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import redis.asyncio as redis
import structlog
from fastapi import Request

from teamhub.adapters.auth.console_notifier import ConsoleNotifier
from teamhub.adapters.auth.postgres import PostgresUserRepository
from teamhub.adapters.cache.redis_refresh_tokens import RedisRefreshTokenStorage
from teamhub.adapters.db.app_db import AppDatabase
from teamhub.adapters.project.postgres import PostgresProjectRepository
from teamhub.adapters.team.postgres import PostgresInvitationRepository, PostgresTeamRepository
from teamhub.core.auth.jwt import JwtTokenService
from teamhub.core.auth.password import BcryptPasswordHasher
from teamhub.core.auth.service import AuthService
from teamhub.core.project.service import ProjectService
from teamhub.core.team.invitations import InvitationService
from teamhub.core.team.service import TeamService
from teamhub.logging_config import setup_logging

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()

TTL_PATTERN = re.compile(r"^(\d+)([smhd])$")
TTL_UNITS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}
MIN_JWT_SECRET_LENGTH = 32


def parse_ttl_to_seconds(value: str) -> int:
    """Convert a duration such as "15m" or "7d" to seconds.

    Raises:
        ValueError: If the value is not <digits><s|m|h|d>.
    """
    match = TTL_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid TTL format: {value!r} (expected e.g. 30s, 15m, 12h, 7d)")
    amount, unit = match.groups()
    return int(amount) * TTL_UNITS[unit]


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables.

        Raises:
            ValueError: If JWT_SECRET is too short or a TTL is malformed.
        """
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/teamhub")
        self.redis_url = os.getenv("REDIS_URL", "redis://localhost:6379/0")
        self.jwt_secret = os.getenv("JWT_SECRET", "dev-secret-change-in-production-0000")
        if len(self.jwt_secret) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters")

        self.access_token_ttl = parse_ttl_to_seconds(os.getenv("JWT_ACCESS_TOKEN_TTL", "15m"))
        self.refresh_token_ttl = parse_ttl_to_seconds(os.getenv("JWT_REFRESH_TOKEN_TTL", "7d"))
        self.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "12"))

        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGIN", "http://localhost:3000").split(",")
            if origin.strip()
        ]
        self.frontend_url = os.getenv("FRONTEND_URL", self.cors_origins[0] if self.cors_origins else "")
        self.port = int(os.getenv("PORT", "4000"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.json_logs = os.getenv("LOG_FORMAT", "console").lower() == "json"
        self.auto_migrate = os.getenv("AUTO_MIGRATE", "true").lower() == "true"


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - setup and teardown.

    This context manager handles:
    - Logging configuration
    - Database connection pool setup and schema creation
    - Redis client for refresh token storage
    """
    setup_logging(settings.log_level, settings.json_logs)

    app_db = AppDatabase(settings.database_url)
    await app_db.connect()
    if settings.auto_migrate:
        await app_db.apply_schema()

    redis_client = redis.from_url(settings.redis_url)

    # Store in app state
    app.state.app_db = app_db
    app.state.redis = redis_client
    app.state.token_service = JwtTokenService(
        secret=settings.jwt_secret,
        access_token_ttl=settings.access_token_ttl,
        refresh_token_ttl=settings.refresh_token_ttl,
    )
    app.state.password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.notifier = ConsoleNotifier(settings.frontend_url)
    logger.info("application_started", port=settings.port)

    yield

    await redis_client.aclose()
    await app_db.close()
    logger.info("application_stopped")


def get_token_service(request: Request) -> JwtTokenService:
    """Get token service from app state."""
    token_service: JwtTokenService = request.app.state.token_service
    return token_service


def get_auth_service(request: Request) -> AuthService:
    """Get auth service from request context."""
    state = request.app.state
    return AuthService(
        users=PostgresUserRepository(state.app_db),
        hasher=state.password_hasher,
        tokens=state.token_service,
        refresh_tokens=RedisRefreshTokenStorage(state.redis),
        reset_notifier=state.notifier,
    )


def get_team_service(request: Request) -> TeamService:
    """Get team service from request context."""
    return TeamService(PostgresTeamRepository(request.app.state.app_db))


def get_invitation_service(request: Request) -> InvitationService:
    """Get invitation service from request context."""
    app_db = request.app.state.app_db
    return InvitationService(
        teams=PostgresTeamRepository(app_db),
        invitations=PostgresInvitationRepository(app_db),
        users=PostgresUserRepository(app_db),
        notifier=request.app.state.notifier,
    )


def get_project_service(request: Request) -> ProjectService:
    """Get project service from request context."""
    app_db = request.app.state.app_db
    return ProjectService(PostgresProjectRepository(app_db), PostgresTeamRepository(app_db))
