"""FastAPI application definition."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamhub import __version__

from .deps import lifespan, settings
from .error_handlers import register_error_handlers
from .routes import api_router

app = FastAPI(
    title="teamhub",
    description="Team and project collaboration API",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,  # Prevent 307 redirects that lose auth headers
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("teamhub.entrypoints.api.app:app", host="0.0.0.0", port=settings.port)
