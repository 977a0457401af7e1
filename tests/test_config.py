# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from clonesync.config import ConfigError, ConfigLoader, SyncConfig, load_config


def test_load_config_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)

    assert cfg == SyncConfig()
    assert cfg.recursive is True
    assert cfg.force_install is False


def test_pyproject_section_and_project_file_are_layered(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[project]
name = "host"

[tool.clonesync]
force_install = true
extra_files = ["src/Versions.java"]

[[tool.clonesync.package_folders]]
path = "../sibling"
run_install = false
dependencies_to_ignore = ["left-pad"]
""".strip(),
        encoding="utf-8",
    )
    (tmp_path / ".clonesync.toml").write_text("recursive = false\n", encoding="utf-8")

    cfg = load_config(tmp_path)

    assert cfg.force_install is True
    assert cfg.recursive is False
    assert cfg.extra_files == [tmp_path.resolve() / "src" / "Versions.java"]
    assert len(cfg.package_folders) == 1
    folder = cfg.package_folders[0]
    assert folder.path == tmp_path.resolve() / ".." / "sibling"
    assert folder.run_install is False
    assert folder.dependencies_to_ignore == frozenset({"left-pad"})


def test_project_file_expands_environment_and_includes(tmp_path: Path) -> None:
    (tmp_path / "shared.toml").write_text('extra_files = ["$VERSIONS_FILE"]\n', encoding="utf-8")
    (tmp_path / ".clonesync.toml").write_text(
        'include = "shared.toml"\npackage_folders = ["${PEER}"]\n',
        encoding="utf-8",
    )

    cfg = ConfigLoader.for_root(tmp_path, env={"VERSIONS_FILE": "/abs/Versions.java", "PEER": "peer"}).load()

    assert cfg.extra_files == [Path("/abs/Versions.java")]
    assert [folder.path for folder in cfg.package_folders] == [tmp_path.resolve() / "peer"]


def test_circular_include_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".clonesync.toml").write_text('include = "other.toml"\n', encoding="utf-8")
    (tmp_path / "other.toml").write_text('include = ".clonesync.toml"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Circular include"):
        load_config(tmp_path)


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".clonesync.toml").write_text("recurse = true\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    (tmp_path / ".clonesync.toml").write_text("recursive = \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_to_options_applies_overrides(tmp_path: Path) -> None:
    cfg = SyncConfig(force_install=True, extra_files=[tmp_path / "a.txt"])

    options = cfg.to_options(recursive=False, extra_files=[tmp_path / "b.txt"], package_folders=[tmp_path])

    assert options.recursive is False
    assert options.force_install is True
    assert options.extra_files == (tmp_path / "a.txt", tmp_path / "b.txt")
    assert [folder.path for folder in options.package_folders] == [tmp_path]
