"""API route modules."""

from fastapi import APIRouter

from teamhub.entrypoints.api.routes.auth import router as auth_router
from teamhub.entrypoints.api.routes.invitations import router as invitations_router
from teamhub.entrypoints.api.routes.projects import router as projects_router
from teamhub.entrypoints.api.routes.teams import router as teams_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(teams_router)
api_router.include_router(invitations_router)
api_router.include_router(projects_router)

__all__ = ["api_router"]
