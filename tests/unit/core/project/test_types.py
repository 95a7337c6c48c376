"""Tests for project value objects and the Project entity."""

from __future__ import annotations

import pytest

from teamhub.core.project.errors import (
    CannotUpdateArchivedProjectError,
    InvalidProjectIdError,
    ProjectAlreadyArchivedError,
    ProjectNameInvalidError,
    ProjectNotArchivedError,
)
from teamhub.core.project.types import Project, ProjectId, ProjectName, ProjectStatus


class TestProjectName:
    """Tests for ProjectName."""

    def test_trims(self) -> None:
        assert ProjectName.create("  Roadmap ").value == "Roadmap"

    @pytest.mark.parametrize("value", ["", "  ", "p" * 101])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ProjectNameInvalidError, match="Invalid project name"):
            ProjectName.create(value)


class TestProjectId:
    def test_invalid(self) -> None:
        with pytest.raises(InvalidProjectIdError):
            ProjectId.create("123")


class TestProject:
    """Tests for project state transitions."""

    def test_defaults(self, project: Project) -> None:
        assert project.status is ProjectStatus.ACTIVE
        assert not project.is_archived
        assert project.position == 0

    def test_update(self, project: Project) -> None:
        updated = project.update(description="H2 roadmap")
        assert updated.name == project.name
        assert updated.description == "H2 roadmap"

    def test_update_none_clears_description(self, project: Project) -> None:
        assert project.update(description=None).description is None

    def test_update_name_keeps_description(self, project: Project) -> None:
        updated = project.update(name=ProjectName.create("Plan"))
        assert updated.description == project.description

    def test_archive_and_restore(self, project: Project) -> None:
        archived = project.archive()
        assert archived.is_archived
        assert archived.restore().status is ProjectStatus.ACTIVE

    def test_archive_twice(self, project: Project) -> None:
        with pytest.raises(ProjectAlreadyArchivedError):
            project.archive().archive()

    def test_restore_active(self, project: Project) -> None:
        with pytest.raises(ProjectNotArchivedError):
            project.restore()

    def test_archived_is_read_only(self, project: Project) -> None:
        with pytest.raises(CannotUpdateArchivedProjectError):
            project.archive().update(name=ProjectName.create("New"))

    def test_update_position(self, project: Project) -> None:
        assert project.update_position(4).position == 4
