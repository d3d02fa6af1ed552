"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT_MAX_CONCURRENCY = 5


class LoaderState(str, Enum):
    """Lifecycle of a :class:`GitHubRepoLoader` instance."""

    UNINITIALIZED = "uninitialized"
    URL_VALIDATED = "url_validated"
    BRANCH_RESOLVED = "branch_resolved"
    TOKEN_CHECKED = "token_checked"
    READY = "ready"
    NOT_READY = "not_ready"


class UnknownPolicy(str, Enum):
    """What the bulk loader does with files it cannot parse as text."""

    WARN = "warn"
    IGNORE = "ignore"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class StepOutcome(Generic[T]):
    """Result of a fallible step: the value plus whether it was degraded."""

    value: T
    degraded: bool = False
    reason: str | None = None

    @classmethod
    def ok(cls, value: T) -> StepOutcome[T]:
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, reason: str) -> StepOutcome[T]:
        return cls(value=value, degraded=True, reason=reason)


@dataclass(frozen=True, slots=True)
class ContentNode:
    """A single entry from the contents API (file or directory)."""

    path: str
    type: str  # "file", "dir", "symlink" or "submodule"
    size: int = 0


@dataclass(frozen=True, slots=True)
class RepoDocument:
    """One loaded file: its text plus provenance metadata."""

    page_content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return str(self.metadata.get("source", ""))


@dataclass(frozen=True, slots=True)
class RecursiveLoadOptions:
    """Everything the delegated bulk loader needs to walk one branch."""

    repository_url: str
    branch: str
    recursive: bool = False
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    ignore_paths: tuple[str, ...] = ()
    access_token: str | None = None
    unknown: UnknownPolicy = UnknownPolicy.WARN
