# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for clone discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from clonesync.locator import find_package


def test_find_package_in_sibling_folder(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    package_b = write_package(workspace / "b", "@fixture/b")

    found = find_package("@fixture/b", package_a, context)

    assert found is not None
    assert found.path == package_b
    assert context.cloned_packages["@fixture/b"] is found


def test_find_package_across_an_ancestor_sibling(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "group" / "nested" / "a", "@fixture/a")
    package_c = write_package(workspace / "c", "@fixture/c")

    found = find_package("@fixture/c", package_a / "package.json", context)

    assert found is not None
    assert found.path == package_c


def test_find_package_does_not_descend_into_unrelated_subtrees(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    write_package(workspace / "other" / "deep" / "d", "@fixture/d")

    assert find_package("@fixture/d", package_a, context) is None


def test_find_package_skips_manifests_below_sibling_folders(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    broken = workspace / "other" / "broken"
    broken.mkdir(parents=True)
    (broken / "package.json").write_text("{not json", encoding="utf-8")

    assert find_package("@fixture/absent", package_a, context) is None


def test_find_package_caches_misses(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")

    assert find_package("@fixture/late", package_a, context) is None
    write_package(workspace / "late", "@fixture/late")

    assert find_package("@fixture/late", package_a, context) is None
    assert "@fixture/late" in context.cloned_packages


def test_find_package_returns_cached_hit_without_searching(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    package_b = write_package(workspace / "b", "@fixture/b")
    first = find_package("@fixture/b", package_a, context)

    (package_b / "package.json").unlink()

    assert find_package("@fixture/b", package_a, context) is first


def test_find_package_prefers_lexicographic_sibling(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    write_package(workspace / "zz", "@fixture/twin")
    first_twin = write_package(workspace / "mm", "@fixture/twin")

    found = find_package("@fixture/twin", package_a, context)

    assert found is not None
    assert found.path == first_twin


def test_find_package_matches_the_start_folder_itself(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")

    found = find_package("@fixture/a", package_a / "package.json", context)

    assert found is not None
    assert found.path == package_a


def test_find_package_with_missing_start_path(workspace: Path, context) -> None:
    assert find_package("@fixture/a", workspace / "missing", context) is None


def test_find_package_without_context_uses_a_fresh_cache(workspace: Path, write_package) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    package_b = write_package(workspace / "b", "@fixture/b")

    found = find_package("@fixture/b", package_a)

    assert found is not None
    assert found.path == package_b


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_find_package_survives_symlink_cycles(workspace: Path, write_package, context) -> None:
    package_a = write_package(workspace / "a", "@fixture/a")
    (workspace / "loop").symlink_to(workspace, target_is_directory=True)
    package_b = write_package(workspace / "b", "@fixture/b")

    found = find_package("@fixture/b", package_a, context)

    assert found is not None
    assert found.path == package_b
