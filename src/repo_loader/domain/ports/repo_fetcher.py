"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from repo_loader.domain.entities import ContentNode
from repo_loader.domain.value_objects import GitHubUrl


class RepoFetcher(Protocol):
    """Abstract contract for the GitHub REST calls the loader makes."""

    async def verify_token(self, token: str) -> bool:
        """Return True only if *token* is accepted by the API."""
        ...

    async def fetch_branch_page(
        self, url: GitHubUrl, page: int, token: str | None = None
    ) -> list[str]:
        """Return the branch names on one page of the branch listing."""
        ...

    async def fetch_contents(
        self, url: GitHubUrl, path: str, branch: str | None, token: str | None = None
    ) -> Any:
        """Return the raw JSON body of a contents lookup."""
        ...

    async def fetch_tree(
        self, url: GitHubUrl, branch: str, token: str | None = None
    ) -> list[ContentNode]:
        """Return every entry of the branch in a single listing."""
        ...

    async def list_directory(
        self, url: GitHubUrl, path: str, branch: str, token: str | None = None
    ) -> list[ContentNode]:
        """Return the entries of one directory."""
        ...

    async def fetch_file_bytes(
        self, url: GitHubUrl, path: str, branch: str, token: str | None = None
    ) -> bytes:
        """Return the raw bytes of a single file."""
        ...
