"""File filtering — ignore-path matching and text/binary detection."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatch

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".pyc", ".pyo", ".so", ".o", ".a", ".dylib",
        ".dll", ".exe", ".bin", ".class", ".jar", ".wasm",
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".tiff",
        ".webp", ".mp3", ".mp4", ".avi", ".mov", ".wav", ".ogg",
        ".woff", ".woff2", ".ttf", ".eot", ".otf",
        ".zip", ".tar", ".gz", ".bz2", ".xz", ".rar", ".7z",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        ".sqlite", ".db", ".pickle", ".pkl", ".npy", ".parquet",
    }
)


def _filename(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]


def matches_pattern(path: str, pattern: str) -> bool:
    """Match *path* against a single ignore pattern.

    A pattern excludes an exact path, everything under a directory prefix
    (``docs`` or ``docs/``), any glob match on the full path, and, for
    patterns without a slash, any path segment matching the glob.
    """
    pattern = pattern.strip().strip("/")
    if not pattern or pattern.startswith("#"):
        return False
    if path == pattern or path.startswith(pattern + "/"):
        return True
    if fnmatch(path, pattern):
        return True
    if "/" not in pattern:
        return any(fnmatch(segment, pattern) for segment in path.split("/"))
    return False


def is_ignored(path: str, patterns: Iterable[str]) -> bool:
    """Return *True* if any of *patterns* excludes *path*."""
    return any(matches_pattern(path, pattern) for pattern in patterns)


def is_binary_path(path: str) -> bool:
    """Return *True* for extensions that never hold parseable text."""
    name = _filename(path).lower()
    dot = name.rfind(".")
    if dot <= 0:
        return False
    return name[dot:] in BINARY_EXTENSIONS


def decode_text(data: bytes) -> str | None:
    """Decode file bytes as UTF-8; ``None`` when they are not text."""
    if b"\x00" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None
