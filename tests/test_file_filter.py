"""Tests for ignore-path matching and text detection."""
from __future__ import annotations

import pytest

from repo_loader.services.file_filter import decode_text, is_binary_path, is_ignored


@pytest.mark.parametrize(
    ("path", "patterns"),
    [
        ("docs/guide.md", ["docs"]),
        ("docs/guide.md", ["docs/"]),
        ("docs/guide.md", ["/docs"]),
        ("src/app.py", ["*.py"]),
        ("web/node_modules/pkg/index.js", ["node_modules"]),
        ("src/generated/schema.json", ["src/generated/*"]),
        ("package-lock.json", ["README.md", "package-lock.json"]),
    ],
)
def test_is_ignored_matches(path: str, patterns: list[str]) -> None:
    assert is_ignored(path, patterns)


@pytest.mark.parametrize(
    ("path", "patterns"),
    [
        ("docsite/index.md", ["docs"]),
        ("src/app.py", ["*.md"]),
        ("src/app.py", []),
        ("src/app.py", ["", "# comment"]),
        ("lib/src/app.py", ["src/app.py"]),
    ],
)
def test_is_ignored_no_match(path: str, patterns: list[str]) -> None:
    assert not is_ignored(path, patterns)


def test_binary_extensions() -> None:
    assert is_binary_path("assets/logo.PNG")
    assert is_binary_path("dist/app.tar.gz")
    assert not is_binary_path("src/app.py")
    assert not is_binary_path(".gitignore")
    assert not is_binary_path("Makefile")


def test_decode_text() -> None:
    assert decode_text("héllo".encode()) == "héllo"
    assert decode_text(b"\x89PNG\x00\x01") is None
    assert decode_text(b"\xff\xfe\xfa") is None
