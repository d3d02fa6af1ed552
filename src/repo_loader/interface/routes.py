"""API routes — thin controllers that delegate to the repository loader."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from repo_loader.domain.exceptions import InvalidGitHubUrlError, RepositoryNotFoundError
from repo_loader.interface.dependencies import LoaderFactory, get_loader_factory
from repo_loader.interface.schemas import (
    BranchesRequest,
    BranchesResponse,
    DocumentOut,
    ErrorResponse,
    FileRequest,
    FileResponse,
    LoadRequest,
    LoadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/github")


@router.post("/branches", response_model=BranchesResponse)
async def list_branches(
    body: BranchesRequest,
    factory: LoaderFactory = Depends(get_loader_factory),
) -> BranchesResponse:
    """List branches of a repository, default branches first."""
    loader = factory(body.url, access_token=body.access_token)
    return BranchesResponse(branches=await loader.get_repo_branches())


@router.post(
    "/load",
    response_model=LoadResponse,
    responses={
        409: {"model": ErrorResponse, "description": "Loader did not become ready"},
        422: {"model": ErrorResponse, "description": "Invalid GitHub URL or unparseable file"},
        429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
    },
)
async def load_repository(
    body: LoadRequest,
    factory: LoaderFactory = Depends(get_loader_factory),
) -> LoadResponse:
    """Load every text document of the resolved branch."""
    loader = factory(
        body.url,
        branch=body.branch,
        access_token=body.access_token,
        ignore_paths=body.ignore_paths,
    )
    if await loader.init() is None:
        raise InvalidGitHubUrlError(f"Not a valid GitHub repository URL: '{body.url}'.")

    docs = await loader.recursive_loader()
    logger.info("Loaded %d documents from %s", len(docs), loader.repo_url)
    return LoadResponse(
        branch=loader.branch or "",
        documents=[DocumentOut(path=d.path, content=d.page_content) for d in docs],
    )


@router.post(
    "/file",
    response_model=FileResponse,
    responses={
        404: {"model": ErrorResponse, "description": "File could not be fetched"},
        422: {"model": ErrorResponse, "description": "Invalid GitHub URL"},
    },
)
async def fetch_file(
    body: FileRequest,
    factory: LoaderFactory = Depends(get_loader_factory),
) -> FileResponse:
    """Return the content of one file on the resolved branch."""
    loader = factory(body.url, branch=body.branch, access_token=body.access_token)
    if await loader.init() is None:
        raise InvalidGitHubUrlError(f"Not a valid GitHub repository URL: '{body.url}'.")

    content = await loader.fetch_single_file(body.path)
    if content is None:
        raise RepositoryNotFoundError(f"Could not fetch '{body.path}' from {loader.repo_url}.")
    return FileResponse(path=body.path, content=content)
