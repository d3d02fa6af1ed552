"""GitHub repository loader — the main ingestion client.

This is the single entry point for the business logic.  It depends only on
the two ports (:class:`RepoFetcher` and :class:`RecursiveLoader`) and the
pure service modules.  The interface layer injects concrete adapters at
runtime.

Every step upstream of the bulk load degrades instead of raising: an invalid
URL leaves the loader not ready, a rejected token is dropped, a failing
branch page truncates the listing, and a failing file fetch yields ``None``.
The only hard failure is calling :meth:`GitHubRepoLoader.recursive_loader`
before :meth:`GitHubRepoLoader.init` succeeded.

Instances are not safe for overlapping calls; await each operation before
issuing the next.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Iterable
from typing import Any

from repo_loader.domain.entities import (
    DEFAULT_MAX_CONCURRENCY,
    LoaderState,
    RecursiveLoadOptions,
    RepoDocument,
    StepOutcome,
    UnknownPolicy,
)
from repo_loader.domain.exceptions import LoaderNotReadyError, RepoLoaderError
from repo_loader.domain.ports.recursive_loader import RecursiveLoader
from repo_loader.domain.ports.repo_fetcher import RepoFetcher
from repo_loader.domain.value_objects import GitHubUrl
from repo_loader.services.branch_resolver import (
    dedupe,
    pick_branch,
    prefer_default_branches,
)
from repo_loader.services.lifecycle import advance
from repo_loader.services.url_resolver import normalize_repo_url, resolve_github_url

logger = logging.getLogger(__name__)


class GitHubRepoLoader:
    """Validates a GitHub repository and loads its content.

    Parameters
    ----------
    repo:
        Repository URL, e.g. ``https://github.com/acme/widgets.git``.
    fetcher:
        Adapter performing the GitHub REST calls.
    bulk_loader:
        Delegate that walks a whole branch for :meth:`recursive_loader`.
    branch:
        Branch to read; replaced by a default during ``init`` when missing
        or unknown.
    access_token:
        Optional bearer token, dropped if the API rejects it.
    ignore_paths:
        Patterns handed unmodified to the bulk loader.
    max_concurrency:
        Fan-out limit for the bulk loader's sub-requests.
    """

    def __init__(
        self,
        repo: str | None,
        fetcher: RepoFetcher,
        bulk_loader: RecursiveLoader,
        *,
        branch: str | None = None,
        access_token: str | None = None,
        ignore_paths: Iterable[str] | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        self._fetcher = fetcher
        self._bulk_loader = bulk_loader
        self._max_concurrency = max_concurrency

        self.repo_url = normalize_repo_url(repo)
        self.branch = branch or None
        self.access_token = access_token or None
        self.ignore_paths: list[str] = list(ignore_paths or [])

        self.owner: str | None = None
        self.project: str | None = None
        self.branches: list[str] = []
        self.state = LoaderState.UNINITIALIZED
        self._url: GitHubUrl | None = None

    @property
    def ready(self) -> bool:
        return self.state is LoaderState.READY

    # ── URL resolution ──────────────────────────────────────────────────

    def validate_url(self) -> bool:
        """Check the URL points at ``github.com/<owner>/<project>``."""
        outcome = resolve_github_url(self.repo_url)
        if outcome.value is None:
            logger.warning("Invalid GitHub URL provided! %s", outcome.reason)
            return False

        self._url = outcome.value
        self.owner = outcome.value.owner
        self.project = outcome.value.repo
        return True

    # ── Token validation ────────────────────────────────────────────────

    async def validate_access_token(self) -> None:
        """Check the token against the API and drop it when rejected."""
        outcome = await self._check_token()
        if outcome.degraded:
            logger.warning(
                "Invalid GitHub access token provided! Access token will not be used. (%s)",
                outcome.reason,
            )
        self.access_token = outcome.value

    async def _check_token(self) -> StepOutcome[str | None]:
        if not self.access_token:
            return StepOutcome.ok(None)
        if await self._fetcher.verify_token(self.access_token):
            return StepOutcome.ok(self.access_token)
        return StepOutcome.fallback(None, "token was rejected by the API")

    # ── Branch resolution ───────────────────────────────────────────────

    async def get_repo_branches(self) -> list[str]:
        """Return every branch name, ``main``/``master`` first.

        Returns an empty list without touching the network when the URL is
        invalid.  A failing page ends pagination with what was collected.
        """
        if not self.validate_url() or self._url is None:
            return []
        await self.validate_access_token()

        outcome = await self._collect_branch_names(self._url)
        if outcome.degraded:
            logger.warning(
                "Branch listing for %s stopped early: %s",
                self._url.full_name,
                outcome.reason,
            )

        self.branches = prefer_default_branches(dedupe(outcome.value))
        return list(self.branches)

    async def _collect_branch_names(self, url: GitHubUrl) -> StepOutcome[list[str]]:
        names: list[str] = []
        page = 0
        while True:
            logger.info("Fetching page %d of branches for %s", page, url.repo)
            try:
                batch = await self._fetcher.fetch_branch_page(
                    url, page, self.access_token
                )
            except RepoLoaderError as exc:
                return StepOutcome.fallback(names, str(exc))
            if not batch:
                return StepOutcome.ok(names)
            names.extend(batch)
            page += 1

    async def resolve_branch(self) -> None:
        """Keep the requested branch if it exists, else pick a default."""
        await self.get_repo_branches()
        outcome = pick_branch(self.branch, self.branches)
        if outcome.degraded:
            logger.info(
                "Auto-assigning default branch (%s). Branch set to %s.",
                outcome.reason,
                outcome.value,
            )
        self.branch = outcome.value

    # ── Lifecycle ───────────────────────────────────────────────────────

    async def init(self) -> GitHubRepoLoader | None:
        """Validate URL, resolve the branch and check the token.

        Returns the loader once ready, or ``None`` when the URL is invalid.
        A loader that is already ready is returned as is without repeating
        the steps, so ``ready`` can never drop back to false.
        """
        if self.ready:
            return self

        self.state = LoaderState.UNINITIALIZED
        url_ok = self.validate_url()
        self.state = advance(self.state, url_ok)
        if not url_ok:
            return None

        await self.resolve_branch()
        self.state = advance(self.state)

        await self.validate_access_token()
        self.state = advance(self.state)

        self.state = advance(self.state)
        logger.info(
            "Loader ready for %s@%s (authenticated=%s)",
            self.repo_url,
            self.branch,
            bool(self.access_token),
        )
        return self

    # ── Content retrieval ───────────────────────────────────────────────

    async def recursive_loader(self) -> list[RepoDocument]:
        """Load every document of the branch through the bulk loader.

        Raises :class:`LoaderNotReadyError` before a successful ``init``.
        Errors raised by the bulk loader propagate unchanged.
        """
        if not self.ready or self.repo_url is None or self.branch is None:
            raise LoaderNotReadyError("GitHub loader is not in a ready state!")

        # Unauthenticated recursion would exhaust the public rate limit.
        if self.access_token:
            logger.info("Access token set! Recursive loading enabled.")

        options = RecursiveLoadOptions(
            repository_url=self.repo_url,
            branch=self.branch,
            recursive=bool(self.access_token),
            max_concurrency=self._max_concurrency,
            ignore_paths=tuple(self.ignore_paths),
            access_token=self.access_token,
            unknown=UnknownPolicy.WARN,
        )
        return await self._bulk_loader.load(options)

    async def fetch_single_file(self, source_file_path: str) -> str | None:
        """Return the decoded content of one file, or ``None`` on any failure."""
        url = self._url
        if url is None:
            if not self.validate_url() or self._url is None:
                logger.error("Cannot fetch %s: repository URL is invalid", source_file_path)
                return None
            url = self._url

        try:
            body = await self._fetcher.fetch_contents(
                url, source_file_path, self.branch, self.access_token
            )
        except RepoLoaderError as exc:
            logger.error("Failed to fetch %s from GitHub: %s", source_file_path, exc)
            return None

        return _decode_content(source_file_path, body)


def _decode_content(path: str, body: Any) -> str | None:
    if not isinstance(body, dict):
        logger.error("Failed to fetch %s: response is not a file object", path)
        return None
    if "status" in body or "content" not in body:
        logger.error(
            "Failed to fetch %s: %s", path, body.get("message") or "missing content"
        )
        return None
    try:
        raw = base64.b64decode(body["content"] or "")
    except (binascii.Error, TypeError, ValueError) as exc:
        logger.error("Failed to decode %s: %s", path, exc)
        return None
    return raw.decode("utf-8", errors="replace")
