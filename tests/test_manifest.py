# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for manifest and lock file helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from clonesync.errors import ManifestError
from clonesync.manifest import (
    PackageLock,
    PackageManifest,
    find_manifest_file,
    is_manifest_published,
    read_manifest,
    remove_resolved_entries,
    write_manifest,
)


def test_find_manifest_file_walks_upward(workspace: Path, write_package) -> None:
    package = write_package(workspace / "a", "@fixture/a")
    nested = package / "src" / "lib"
    nested.mkdir(parents=True)
    source_file = nested / "index.js"
    source_file.write_text("", encoding="utf-8")

    assert find_manifest_file(nested) == package / "package.json"
    assert find_manifest_file(source_file) == package / "package.json"
    assert find_manifest_file(package / "package.json") == package / "package.json"


def test_find_manifest_file_missing_path(workspace: Path) -> None:
    assert find_manifest_file(workspace / "does-not-exist") is None


def test_manifest_round_trip_preserves_unknown_keys_and_order(tmp_path: Path) -> None:
    path = tmp_path / "demo" / "package.json"
    path.parent.mkdir()
    path.write_text(
        '{\n  "name": "demo",\n  "scripts": {"build": "tsc"},\n  "dependencies": {"x": "^1.0.0"}\n}',
        encoding="utf-8",
    )

    manifest = read_manifest(path)
    manifest.section("dependencies")["x"] = "file:/ws/x"
    write_manifest(manifest, path)

    text = path.read_text(encoding="utf-8")
    assert not text.endswith("\n")
    assert list(json.loads(text)) == ["name", "scripts", "dependencies"]
    assert json.loads(text)["dependencies"] == {"x": "file:/ws/x"}


def test_read_manifest_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken" / "package.json"
    path.parent.mkdir()
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ManifestError) as excinfo:
        read_manifest(path)

    assert excinfo.value.path == path


def test_read_manifest_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "broken" / "package.json"
    path.parent.mkdir()
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ManifestError):
        read_manifest(path)


def test_read_manifest_rejects_non_utf8_content(tmp_path: Path) -> None:
    path = tmp_path / "broken" / "package.json"
    path.parent.mkdir()
    path.write_bytes(b'{"name": "\xff\xfe"}')

    with pytest.raises(ManifestError, match="UTF-8") as excinfo:
        read_manifest(path)

    assert excinfo.value.path == path


def test_dependency_names_cover_both_sections() -> None:
    manifest = PackageManifest(
        data={"dependencies": {"a": "1"}, "devDependencies": {"b": "2"}, "peerDependencies": {"c": "3"}},
    )

    assert list(manifest.dependency_names()) == ["a", "b"]


def test_remove_resolved_entries_prunes_both_lock_layouts() -> None:
    lock = PackageLock(
        data={
            "lockfileVersion": 2,
            "packages": {
                "": {"name": "root"},
                "node_modules/b": {"version": "1.0.0"},
                "node_modules/c": {"version": "2.0.0"},
            },
            "dependencies": {"b": {"version": "1.0.0"}, "c": {"version": "2.0.0"}},
        },
    )

    remove_resolved_entries(lock, "b", "missing")

    assert lock.data["packages"] == {"": {"name": "root"}, "node_modules/c": {"version": "2.0.0"}}
    assert lock.data["dependencies"] == {"c": {"version": "2.0.0"}}
    assert lock.removed == ["b"]


def test_is_manifest_published(registry) -> None:
    registry.published.add(("@azure/ms-rest-js", "1.1.1"))

    assert is_manifest_published(PackageManifest(data={"version": "1.2.3"}), registry) is False
    assert is_manifest_published(PackageManifest(data={"name": "@azure/ms-rest-js"}), registry) is False
    assert is_manifest_published(PackageManifest(data={"name": "@azure/ms-rest-js", "version": "1.1.1"}), registry)
    assert not is_manifest_published(PackageManifest(data={"name": "@azure/ms-rest-js", "version": "0.9.7"}), registry)
