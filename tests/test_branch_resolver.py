"""Tests for branch ordering and default-branch selection."""
from __future__ import annotations

from repo_loader.services.branch_resolver import dedupe, pick_branch, prefer_default_branches


def test_preferred_branches_move_to_front() -> None:
    """Test the documented discovery-order example."""
    ordered = prefer_default_branches(["feature-a", "master", "feature-b", "main"])
    assert ordered == ["main", "master", "feature-a", "feature-b"]


def test_other_branches_keep_relative_order() -> None:
    ordered = prefer_default_branches(["zeta", "alpha", "main", "beta"])
    assert ordered == ["main", "zeta", "alpha", "beta"]


def test_no_preferred_branches() -> None:
    assert prefer_default_branches(["b", "a"]) == ["b", "a"]


def test_dedupe_keeps_first_occurrence() -> None:
    assert dedupe(["dev", "main", "dev", "x", "main"]) == ["dev", "main", "x"]


def test_pick_keeps_existing_branch() -> None:
    outcome = pick_branch("dev", ["main", "dev"])
    assert outcome.value == "dev"
    assert not outcome.degraded


def test_pick_replaces_unknown_branch_with_main() -> None:
    outcome = pick_branch("nope", ["dev", "main"])
    assert outcome.value == "main"
    assert outcome.degraded


def test_pick_falls_back_to_master_even_if_unseen() -> None:
    """Test the literal master fallback when main is absent."""
    assert pick_branch("nope", ["dev"]).value == "master"
    assert pick_branch(None, []).value == "master"
