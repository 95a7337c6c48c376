"""Errors raised by the project domain."""

from __future__ import annotations

from teamhub.core.exceptions import BusinessRuleError, NotFoundError, ValidationError


class InvalidProjectIdError(ValidationError):
    code = "INVALID_PROJECT_ID"

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid project ID: {value}")


class ProjectNameInvalidError(ValidationError):
    code = "PROJECT_NAME_INVALID"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid project name: {reason}")


class ReorderProjectsInvalidError(ValidationError):
    code = "REORDER_PROJECTS_INVALID"


class ProjectNotFoundError(NotFoundError):
    code = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project not found: {project_id}")


class ProjectAlreadyArchivedError(BusinessRuleError):
    code = "PROJECT_ALREADY_ARCHIVED"

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project is already archived: {project_id}")


class ProjectNotArchivedError(BusinessRuleError):
    code = "PROJECT_NOT_ARCHIVED"

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project is not archived: {project_id}")


class CannotUpdateArchivedProjectError(BusinessRuleError):
    code = "CANNOT_UPDATE_ARCHIVED_PROJECT"

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Cannot update archived project: {project_id}")
