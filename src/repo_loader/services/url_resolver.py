"""URL resolution — normalise a repository URL and extract owner / project."""

from __future__ import annotations

import logging

from repo_loader.domain.entities import StepOutcome
from repo_loader.domain.exceptions import InvalidGitHubUrlError
from repo_loader.domain.value_objects import GitHubUrl, strip_git_suffix

logger = logging.getLogger(__name__)


def normalize_repo_url(raw: str | None) -> str | None:
    """Strip a trailing ``.git`` from the URL path.

    Best effort: an empty or unparseable input is returned unchanged.
    """
    if not raw:
        return raw
    try:
        return strip_git_suffix(raw)
    except ValueError as exc:
        logger.error("Error processing repository URL %s: %s", raw, exc)
        return raw


def resolve_github_url(url: str | None) -> StepOutcome[GitHubUrl | None]:
    """Validate a normalised URL; a degraded outcome carries ``None``."""
    if not url:
        return StepOutcome.fallback(None, "no repository URL provided")
    try:
        return StepOutcome.ok(GitHubUrl.from_string(url))
    except InvalidGitHubUrlError as exc:
        return StepOutcome.fallback(None, str(exc))
