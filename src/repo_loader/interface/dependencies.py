"""FastAPI dependency injection wiring.

The app lifespan opens one ``httpx.AsyncClient`` and stores a loader factory
on ``app.state``; every request builds its own :class:`GitHubRepoLoader`
from that factory, since loaders are single-use and stateful.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import httpx
from fastapi import Request

from repo_loader.infrastructure.config import Settings
from repo_loader.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_loader.infrastructure.github_tree_loader import GitHubTreeLoader
from repo_loader.services.repo_loader import GitHubRepoLoader


class LoaderFactory(Protocol):
    def __call__(
        self,
        repo: str,
        *,
        branch: str | None = None,
        access_token: str | None = None,
        ignore_paths: Iterable[str] | None = None,
    ) -> GitHubRepoLoader: ...


def build_loader_factory(
    client: httpx.AsyncClient, settings: Settings
) -> LoaderFactory:
    """Return a callable creating one loader per request on a shared client.

    A request without its own token falls back to ``GITHUB_TOKEN``.
    """
    adapter = GitHubRestAdapter(
        client=client,
        api_url=settings.github_api_url,
        api_version=settings.github_api_version,
    )
    tree_loader = GitHubTreeLoader(adapter)
    default_token = (
        settings.github_token.get_secret_value() if settings.github_token else None
    )

    def _factory(
        repo: str,
        *,
        branch: str | None = None,
        access_token: str | None = None,
        ignore_paths: Iterable[str] | None = None,
    ) -> GitHubRepoLoader:
        return GitHubRepoLoader(
            repo,
            fetcher=adapter,
            bulk_loader=tree_loader,
            branch=branch,
            access_token=access_token or default_token,
            ignore_paths=ignore_paths,
            max_concurrency=settings.max_concurrency,
        )

    return _factory


def get_loader_factory(request: Request) -> LoaderFactory:
    """Return the factory installed on the app by its lifespan."""
    factory: LoaderFactory | None = getattr(request.app.state, "loader_factory", None)
    if factory is None:
        raise RuntimeError("Loader factory missing: the app lifespan did not run.")
    return factory
