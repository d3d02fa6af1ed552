"""FastAPI application factory for the repository loader service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from repo_loader.infrastructure.config import Settings, get_settings
from repo_loader.interface.dependencies import build_loader_factory
from repo_loader.interface.error_handlers import register_error_handlers
from repo_loader.interface.routes import router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the FastAPI application.

    *settings* defaults to the environment-derived :func:`get_settings`.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout_seconds)
        ) as client:
            app.state.loader_factory = build_loader_factory(client, settings)
            logger.info(
                "GitHub API at %s (token configured: %s)",
                settings.github_api_url,
                settings.github_token is not None,
            )
            yield
            app.state.loader_factory = None

    app = FastAPI(
        title="GitHub Repo Loader",
        version="1.0.0",
        description=(
            "Validates a GitHub repository URL, resolves the branch to read "
            "and returns either every text document on that branch or the "
            "content of a single file."
        ),
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
