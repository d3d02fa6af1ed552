"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit, urlunsplit

from repo_loader.domain.exceptions import InvalidGitHubUrlError

GITHUB_HOST = "github.com"
_GIT_SUFFIX = ".git"


def parse_absolute_url(url: str) -> SplitResult:
    """Split *url*, rejecting anything without both a scheme and a host."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"'{url}' is not an absolute URL")
    return parts


def strip_git_suffix(url: str) -> str:
    """Drop a literal ``.git`` from the end of the URL path, nothing else."""
    parts = parse_absolute_url(url)
    path = parts.path
    if path.endswith(_GIT_SUFFIX):
        path = path[: -len(_GIT_SUFFIX)]
    return urlunsplit(parts._replace(path=path))


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Validated GitHub repository URL.

    Extracts *owner* and *repo* from a URL like
    ``https://github.com/psf/requests``.  Segments after the second one
    (``/tree/main/docs`` and friends) are accepted and ignored.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse and validate an already-normalised URL string."""
        try:
            parts = parse_absolute_url(url)
        except ValueError as exc:
            raise InvalidGitHubUrlError(f"Invalid GitHub URL: {exc}") from exc

        if parts.hostname != GITHUB_HOST:
            raise InvalidGitHubUrlError(
                f"Hostname must be '{GITHUB_HOST}'. Got '{parts.hostname}'."
            )

        segments = parts.path[1:].split("/")
        owner = segments[0]
        repo = segments[1] if len(segments) > 1 else ""
        if not owner or not repo:
            raise InvalidGitHubUrlError(
                f"URL must be in the format of '{GITHUB_HOST}/<owner>/<repo>'. "
                f"Got '{parts.path}'."
            )
        return cls(owner=owner, repo=repo, raw=url)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
