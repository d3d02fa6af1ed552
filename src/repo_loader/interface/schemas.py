"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class _RepoRequest(BaseModel):
    url: str
    access_token: str | None = None

    @field_validator("url")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "url must not be empty."
            raise ValueError(msg)
        return stripped


class BranchesRequest(_RepoRequest):
    """Request body for ``POST /github/branches``."""


class LoadRequest(_RepoRequest):
    """Request body for ``POST /github/load``."""

    branch: str | None = None
    ignore_paths: list[str] = Field(default_factory=list)


class FileRequest(_RepoRequest):
    """Request body for ``POST /github/file``."""

    path: str
    branch: str | None = None


class BranchesResponse(BaseModel):
    branches: list[str]


class DocumentOut(BaseModel):
    path: str
    content: str


class LoadResponse(BaseModel):
    """Successful response from ``POST /github/load``."""

    branch: str
    documents: list[DocumentOut]


class FileResponse(BaseModel):
    path: str
    content: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
