"""Port: recursive repository loader — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_loader.domain.entities import RecursiveLoadOptions, RepoDocument


class RecursiveLoader(Protocol):
    """Abstract contract for walking a branch and returning its documents."""

    async def load(self, options: RecursiveLoadOptions) -> list[RepoDocument]:
        """Return one document per loaded file of ``options.branch``."""
        ...
