"""Shared fixtures: an in-memory GitHub API behind ``httpx.MockTransport``."""
from __future__ import annotations

import base64
import re
from typing import Any, AsyncGenerator, Callable

import httpx
import pytest

from repo_loader.domain.entities import RecursiveLoadOptions, RepoDocument
from repo_loader.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_loader.infrastructure.github_tree_loader import GitHubTreeLoader
from repo_loader.services.repo_loader import GitHubRepoLoader

REPO_URL = "https://github.com/acme/widgets"

_BRANCHES_RE = re.compile(r"^/repos/[^/]+/[^/]+/branches$")
_CONTENTS_RE = re.compile(r"^/repos/[^/]+/[^/]+/contents/?(?P<path>.*)$")
_TREES_RE = re.compile(r"^/repos/[^/]+/[^/]+/git/trees/(?P<ref>.+)$")


class FakeGitHub:
    """Minimal stand-in for api.github.com and raw.githubusercontent.com."""

    def __init__(self) -> None:
        self.branch_pages: list[list[str]] = []
        self.fail_page: int | None = None
        self.valid_tokens: set[str] = set()
        self.files: dict[str, bytes] = {}
        self.contents_overrides: dict[str, tuple[int, Any]] = {}
        self.raw_status: dict[str, int] = {}
        self.unreachable: set[str] = set()
        self.tree_truncated = False
        self.requests: list[httpx.Request] = []

    def requests_to(self, suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if request.url.host == "raw.githubusercontent.com":
            return self._raw(path)

        if path == "/octocat":
            auth = request.headers.get("authorization", "")
            token = auth.removeprefix("Bearer ")
            return httpx.Response(200 if token in self.valid_tokens else 401, text="")

        if _BRANCHES_RE.match(path):
            page = int(request.url.params["page"])
            if page == self.fail_page:
                return httpx.Response(500, json={"message": "Server Error"})
            names = self.branch_pages[page] if page < len(self.branch_pages) else []
            return httpx.Response(200, json=[{"name": n, "protected": False} for n in names])

        match = _TREES_RE.match(path)
        if match:
            return self._tree()

        match = _CONTENTS_RE.match(path)
        if match:
            return self._contents(match["path"].strip("/"))

        return httpx.Response(404, json={"message": "Not Found"})

    def _raw(self, path: str) -> httpx.Response:
        file_path = "/".join(path.split("/")[4:])
        if file_path in self.raw_status:
            return httpx.Response(self.raw_status[file_path], text="")
        if file_path not in self.files:
            return httpx.Response(404, text="404: Not Found")
        return httpx.Response(200, content=self.files[file_path])

    def _tree(self) -> httpx.Response:
        entries: dict[str, dict[str, Any]] = {}
        for file_path, data in self.files.items():
            parts = file_path.split("/")
            for depth in range(1, len(parts)):
                directory = "/".join(parts[:depth])
                entries.setdefault(directory, {"path": directory, "type": "tree"})
            entries[file_path] = {"path": file_path, "type": "blob", "size": len(data)}
        return httpx.Response(
            200,
            json={"sha": "abc123", "tree": list(entries.values()), "truncated": self.tree_truncated},
        )

    def _contents(self, path: str) -> httpx.Response:
        if path in self.contents_overrides:
            status, body = self.contents_overrides[path]
            return httpx.Response(status, json=body)

        if path in self.files:
            data = self.files[path]
            return httpx.Response(
                200,
                json={
                    "type": "file",
                    "path": path,
                    "size": len(data),
                    "encoding": "base64",
                    "content": base64.encodebytes(data).decode("ascii"),
                },
            )

        prefix = f"{path}/" if path else ""
        entries: dict[str, dict[str, Any]] = {}
        for file_path, data in self.files.items():
            if not file_path.startswith(prefix):
                continue
            head, _, rest = file_path[len(prefix):].partition("/")
            child = prefix + head
            if rest:
                entries.setdefault(child, {"type": "dir", "path": child, "size": 0})
            else:
                entries[child] = {"type": "file", "path": child, "size": len(data)}

        if not entries:
            return httpx.Response(404, json={"message": "Not Found", "status": "404"})
        return httpx.Response(200, json=list(entries.values()))


class RecordingBulkLoader:
    """Bulk loader double that remembers the options it was called with."""

    def __init__(self, documents: list[RepoDocument] | None = None) -> None:
        self.documents = documents if documents is not None else []
        self.calls: list[RecursiveLoadOptions] = []

    async def load(self, options: RecursiveLoadOptions) -> list[RepoDocument]:
        self.calls.append(options)
        return self.documents


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Create an empty fake GitHub."""
    return FakeGitHub()


@pytest.fixture
async def http_client(fake_github: FakeGitHub) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create an HTTP client routed to the fake GitHub."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_github)) as client:
        yield client


@pytest.fixture
def adapter(http_client: httpx.AsyncClient) -> GitHubRestAdapter:
    return GitHubRestAdapter(client=http_client)


@pytest.fixture
def bulk_loader() -> RecordingBulkLoader:
    return RecordingBulkLoader()


@pytest.fixture
def make_loader(
    adapter: GitHubRestAdapter, bulk_loader: RecordingBulkLoader
) -> Callable[..., GitHubRepoLoader]:
    """Build loaders wired to the fake GitHub and the recording bulk loader."""

    def _make(repo: str | None = REPO_URL, **kwargs: Any) -> GitHubRepoLoader:
        return GitHubRepoLoader(repo, fetcher=adapter, bulk_loader=bulk_loader, **kwargs)

    return _make


@pytest.fixture
def tree_loader(adapter: GitHubRestAdapter) -> GitHubTreeLoader:
    return GitHubTreeLoader(adapter)
