"""Domain exception hierarchy.

Most of these are raised by the HTTP adapter and absorbed by the loader,
which degrades instead of failing.  Only :class:`LoaderNotReadyError` is a
hard failure surfaced to callers of the loader itself; the interface layer
maps every exception to an HTTP status code.
"""

from __future__ import annotations


class RepoLoaderError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidGitHubUrlError(RepoLoaderError):
    """The supplied URL does not point to a valid GitHub repository."""


# ── Lifecycle ───────────────────────────────────────────────────────────────


class LoaderNotReadyError(RepoLoaderError):
    """A bulk load was requested before ``init()`` completed."""


class InvalidStateTransitionError(RepoLoaderError):
    """The initialisation state machine was asked to make an illegal move."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(RepoLoaderError):
    """The repository or path does not exist or is not accessible (404)."""


class RepositoryAccessDeniedError(RepoLoaderError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(RepoLoaderError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


# ── Processing errors ───────────────────────────────────────────────────────


class ContentExtractionError(RepoLoaderError):
    """Failed to retrieve or decode repository content."""


class UnknownFileTypeError(ContentExtractionError):
    """A file could not be parsed as text and the policy says to fail."""
