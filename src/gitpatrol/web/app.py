"""FastAPI application factory for the GitPatrol web endpoint."""

from __future__ import annotations

from fastapi import FastAPI

from gitpatrol import __version__


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="GitPatrol",
        version=__version__,
        docs_url="/api/docs",
    )

    from gitpatrol.web.api.scans import router as scans_router

    app.include_router(scans_router, prefix="/api")

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app
