"""GitHub tree loader — implements the RecursiveLoader port.

Lists a branch (the whole git tree, or just the root when not recursive) and
downloads every kept file concurrently under a semaphore.
"""

from __future__ import annotations

import asyncio
import logging

from repo_loader.domain.entities import (
    ContentNode,
    RecursiveLoadOptions,
    RepoDocument,
    UnknownPolicy,
)
from repo_loader.domain.exceptions import UnknownFileTypeError
from repo_loader.domain.ports.repo_fetcher import RepoFetcher
from repo_loader.domain.value_objects import GitHubUrl
from repo_loader.services.file_filter import decode_text, is_binary_path, is_ignored

logger = logging.getLogger(__name__)


class GitHubTreeLoader:
    """Concrete ``RecursiveLoader`` built on the REST adapter.

    Without ``recursive`` only the files at the repository root are loaded.
    """

    def __init__(self, fetcher: RepoFetcher) -> None:
        self._fetcher = fetcher

    async def load(self, options: RecursiveLoadOptions) -> list[RepoDocument]:
        """Return one :class:`RepoDocument` per text file on the branch."""
        url = GitHubUrl.from_string(options.repository_url)
        sem = asyncio.Semaphore(max(1, options.max_concurrency))

        files = await self._collect_files(url, options)
        logger.info(
            "Loading %d files from %s@%s", len(files), url.full_name, options.branch
        )

        async def _load_one(node: ContentNode) -> RepoDocument | None:
            if is_binary_path(node.path):
                return _handle_unknown(node.path, options.unknown)
            async with sem:
                data = await self._fetcher.fetch_file_bytes(
                    url, node.path, options.branch, options.access_token
                )
            text = decode_text(data)
            if text is None:
                return _handle_unknown(node.path, options.unknown)
            return RepoDocument(
                page_content=text,
                metadata={
                    "source": node.path,
                    "repository": options.repository_url,
                    "branch": options.branch,
                },
            )

        results = await asyncio.gather(*(_load_one(node) for node in files))
        return [doc for doc in results if doc is not None]

    async def _collect_files(
        self,
        url: GitHubUrl,
        options: RecursiveLoadOptions,
    ) -> list[ContentNode]:
        """List candidate files, honouring ignore paths.

        Recursive loads read the whole git tree in one request; otherwise only
        the root directory is listed.
        """
        if options.recursive:
            nodes = await self._fetcher.fetch_tree(
                url, options.branch, options.access_token
            )
        else:
            nodes = await self._fetcher.list_directory(
                url, "", options.branch, options.access_token
            )

        files: list[ContentNode] = []
        for node in nodes:
            if node.type != "file":
                continue
            if is_ignored(node.path, options.ignore_paths):
                logger.debug("Ignoring %s", node.path)
                continue
            files.append(node)
        return files


def _handle_unknown(path: str, policy: UnknownPolicy) -> None:
    if policy is UnknownPolicy.ERROR:
        raise UnknownFileTypeError(f"Unknown file type: {path}")
    if policy is UnknownPolicy.WARN:
        logger.warning("Unknown file type: %s", path)
    return None
