"""Project domain types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Self

from teamhub.core.auth.types import UserId
from teamhub.core.ids import EntityId
from teamhub.core.project.errors import (
    CannotUpdateArchivedProjectError,
    InvalidProjectIdError,
    ProjectAlreadyArchivedError,
    ProjectNameInvalidError,
    ProjectNotArchivedError,
)
from teamhub.core.team.types import TeamId
from teamhub.core.unset import UNSET

MAX_PROJECT_NAME_LENGTH = 100


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProjectId(EntityId):
    invalid_error = InvalidProjectIdError


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"

    def can_archive(self) -> bool:
        return self is ProjectStatus.ACTIVE

    def can_restore(self) -> bool:
        return self is ProjectStatus.ARCHIVED


@dataclass(frozen=True)
class ProjectName:
    value: str

    @classmethod
    def create(cls, value: str) -> Self:
        trimmed = value.strip()
        if not trimmed:
            raise ProjectNameInvalidError("name cannot be empty")
        if len(trimmed) > MAX_PROJECT_NAME_LENGTH:
            raise ProjectNameInvalidError(
                f"name must be at most {MAX_PROJECT_NAME_LENGTH} characters"
            )
        return cls(trimmed)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Project:
    """A team project. Active projects are ordered by ``position``."""

    id: ProjectId
    team_id: TeamId
    name: ProjectName
    created_by: UserId
    description: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    position: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        team_id: TeamId,
        name: ProjectName,
        created_by: UserId,
        description: str | None = None,
        position: int = 0,
    ) -> Project:
        now = _utcnow()
        return cls(
            id=ProjectId.generate(),
            team_id=team_id,
            name=name,
            created_by=created_by,
            description=description,
            position=position,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_archived(self) -> bool:
        return self.status is ProjectStatus.ARCHIVED

    def update(
        self, name: ProjectName | None = None, description: str | None = UNSET
    ) -> Project:
        """Return a copy with new name and/or description.

        An explicit None description clears it.

        Raises:
            CannotUpdateArchivedProjectError: If the project is archived.
        """
        if self.is_archived:
            raise CannotUpdateArchivedProjectError(self.id.value)
        return replace(
            self,
            name=name if name is not None else self.name,
            description=self.description if description is UNSET else description,
            updated_at=_utcnow(),
        )

    def archive(self) -> Project:
        if not self.status.can_archive():
            raise ProjectAlreadyArchivedError(self.id.value)
        return replace(self, status=ProjectStatus.ARCHIVED, updated_at=_utcnow())

    def restore(self) -> Project:
        if not self.status.can_restore():
            raise ProjectNotArchivedError(self.id.value)
        return replace(self, status=ProjectStatus.ACTIVE, updated_at=_utcnow())

    def update_position(self, position: int) -> Project:
        return replace(self, position=position, updated_at=_utcnow())
