"""Global exception handlers — translate domain errors to HTTP responses.

Every RepoLoaderError subclass maps to an HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_loader.domain.exceptions import (
    ContentExtractionError,
    GitHubRateLimitError,
    InvalidGitHubUrlError,
    LoaderNotReadyError,
    RepoLoaderError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    UnknownFileTypeError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RepoLoaderError], int]] = [
    (InvalidGitHubUrlError, 422),
    (LoaderNotReadyError, 409),
    (RepositoryNotFoundError, 404),
    (RepositoryAccessDeniedError, 403),
    (GitHubRateLimitError, 429),
    (UnknownFileTypeError, 422),
    (ContentExtractionError, 502),
    (RepoLoaderError, 500),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def _domain_handler(status_code: int):  # type: ignore[no-untyped-def]
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        level = logging.ERROR if status_code >= 500 else logging.WARNING
        logger.log(level, "%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
        return _error_json(status_code, str(exc))

    return handler


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Starlette resolves handlers along the exception MRO, so subclasses listed
    in ``_EXCEPTION_STATUS`` take precedence over :class:`RepoLoaderError`.
    """
    for exc_type, code in _EXCEPTION_STATUS:
        app.add_exception_handler(exc_type, _domain_handler(code))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', 'validation error')}"
            for err in exc.errors()
        ]
        return _error_json(422, "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s", request.url.path)
        return _error_json(500, "An unexpected error occurred. Please try again later.")
