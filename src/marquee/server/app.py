"""FastAPI application for the health-check endpoint."""

from fastapi import FastAPI

from marquee.server.routes import health


def create_app() -> FastAPI:
    """Create the health-check app."""
    app = FastAPI(title="Marquee", docs_url=None, redoc_url=None)
    app.include_router(health.router)
    return app
