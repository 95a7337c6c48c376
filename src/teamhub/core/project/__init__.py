"""Team projects."""

from teamhub.core.project.service import ProjectService
from teamhub.core.project.types import Project, ProjectStatus

__all__ = ["Project", "ProjectService", "ProjectStatus"]
