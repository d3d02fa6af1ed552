"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from repo_loader.domain.entities import ContentNode
from repo_loader.domain.exceptions import (
    ContentExtractionError,
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from repo_loader.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
BRANCHES_PER_PAGE = 100
_RAW_BASE = "https://raw.githubusercontent.com"
_USER_AGENT = "github-repo-loader/1.0"
_TREE_TYPES = {"blob": "file", "tree": "dir"}


def _quote_path(path: str) -> str:
    return quote(path.strip("/"), safe="/")


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API.

    The adapter is stateless with respect to credentials: the token is passed
    per call because the loader may revoke it between requests.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = GITHUB_API,
        api_version: str = GITHUB_API_VERSION,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
            "User-Agent": _USER_AGENT,
        }

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = dict(self._api_headers)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def verify_token(self, token: str) -> bool:
        """GET /octocat with the token; any non-2xx answer means invalid."""
        url = f"{self._api_url}/octocat"
        try:
            resp = await self._client.get(url, headers=self._headers(token))
        except httpx.HTTPError as exc:
            logger.debug("Token check failed with network error: %s", exc)
            return False
        if not resp.is_success:
            logger.debug("Token check returned HTTP %d", resp.status_code)
        return resp.is_success

    async def fetch_branch_page(
        self, url: GitHubUrl, page: int, token: str | None = None
    ) -> list[str]:
        """GET /repos/{owner}/{repo}/branches?per_page=100&page={page} → [name]."""
        resp = await self._api_get(
            f"/repos/{url.owner}/{url.repo}/branches",
            params={"per_page": str(BRANCHES_PER_PAGE), "page": str(page)},
            token=token,
        )
        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, list):
            raise ContentExtractionError(
                f"Unexpected branch listing payload for {url.full_name}"
            )
        return [item["name"] for item in data if isinstance(item, dict) and item.get("name")]

    async def fetch_contents(
        self, url: GitHubUrl, path: str, branch: str | None, token: str | None = None
    ) -> Any:
        """GET /repos/{owner}/{repo}/contents/{path}?ref={branch} → JSON body.

        Without a branch the API answers for the default branch.
        """
        resp = await self._api_get(
            f"/repos/{url.owner}/{url.repo}/contents/{_quote_path(path)}",
            params={"ref": branch} if branch else None,
            token=token,
        )
        try:
            return resp.json()
        except ValueError as exc:
            raise ContentExtractionError(
                f"Contents API returned a non-JSON body for {path}"
            ) from exc

    async def fetch_tree(
        self, url: GitHubUrl, branch: str, token: str | None = None
    ) -> list[ContentNode]:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → [ContentNode].

        One request for the whole branch.  Blobs map to ``file`` and trees to
        ``dir``; a truncated listing is logged and returned as is.
        """
        resp = await self._api_get(
            f"/repos/{url.owner}/{url.repo}/git/trees/{_quote_path(branch)}",
            params={"recursive": "1"},
            token=token,
        )
        data = resp.json()
        if data.get("truncated"):
            logger.warning(
                "Tree listing for %s@%s was truncated by GitHub", url.full_name, branch
            )
        return [
            ContentNode(
                path=item["path"],
                type=_TREE_TYPES.get(item.get("type", "blob"), "other"),
                size=item.get("size", 0),
            )
            for item in data.get("tree", [])
        ]

    async def list_directory(
        self, url: GitHubUrl, path: str, branch: str, token: str | None = None
    ) -> list[ContentNode]:
        """Contents lookup on a directory → [ContentNode]."""
        data = await self.fetch_contents(url, path, branch, token)
        if not isinstance(data, list):
            raise ContentExtractionError(f"'{path or '/'}' is not a directory.")
        return [
            ContentNode(
                path=item["path"],
                type=item.get("type", "file"),
                size=item.get("size", 0),
            )
            for item in data
        ]

    async def fetch_file_bytes(
        self, url: GitHubUrl, path: str, branch: str, token: str | None = None
    ) -> bytes:
        """Fetch raw file bytes via raw.githubusercontent.com."""
        raw_url = (
            f"{_RAW_BASE}/{url.owner}/{url.repo}/{_quote_path(branch)}/{_quote_path(path)}"
        )
        headers = {"User-Agent": _USER_AGENT}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            resp = await self._client.get(raw_url, headers=headers)
        except httpx.HTTPError as exc:
            raise ContentExtractionError(
                f"Network error fetching {raw_url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp.content

        if resp.status_code == 404:
            raise ContentExtractionError(f"File not found: {path}")

        raise ContentExtractionError(
            f"raw.githubusercontent.com returned HTTP {resp.status_code} for {path}"
        )

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        token: str | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._headers(token), params=params
            )
        except httpx.HTTPError as exc:
            raise ContentExtractionError(
                f"Network error fetching {url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise RepositoryNotFoundError(f"Not found: {endpoint}")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Provide an access token to increase the limit."
                )
            raise RepositoryAccessDeniedError(
                "Access denied. The repository may be private."
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        raise ContentExtractionError(
            f"GitHub API returned HTTP {resp.status_code} for {url}"
        )
