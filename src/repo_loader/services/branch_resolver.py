"""Branch ordering and default-branch selection."""

from __future__ import annotations

from collections.abc import Iterable

from repo_loader.domain.entities import StepOutcome

PREFERRED_BRANCHES: tuple[str, ...] = ("main", "master")
FALLBACK_BRANCH = "master"


def dedupe(names: Iterable[str]) -> list[str]:
    """Drop repeated names, keeping the first occurrence of each."""
    return list(dict.fromkeys(names))


def prefer_default_branches(branches: Iterable[str]) -> list[str]:
    """Move ``main``/``master`` to the front, leaving the rest in order.

    Each preferred name is pushed to the very front as it is encountered, so
    ``[feature-a, master, feature-b, main]`` becomes
    ``[main, master, feature-a, feature-b]``.
    """
    preferred: list[str] = []
    others: list[str] = []
    for name in branches:
        if name in PREFERRED_BRANCHES:
            preferred.insert(0, name)
        else:
            others.append(name)
    return preferred + others


def pick_branch(requested: str | None, branches: list[str]) -> StepOutcome[str]:
    """Keep *requested* if it exists, otherwise fall back to a default name.

    The fallback is ``main`` when discovered, else the literal ``master`` even
    if it was never observed (the listing may have failed upstream).
    """
    if requested and requested in branches:
        return StepOutcome.ok(requested)
    chosen = "main" if "main" in branches else FALLBACK_BRANCH
    reason = (
        f"branch '{requested}' not found" if requested else "no branch set"
    )
    return StepOutcome.fallback(chosen, reason)
