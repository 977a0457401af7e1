# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from clonesync.context import SyncContext
from clonesync.filesystem import LocalFileSystem

PackageWriter = Callable[..., Path]


class RecordingLogger:
    def __init__(self) -> None:
        self.sections: list[str] = []
        self.infos: list[str] = []
        self.errors: list[str] = []

    def section(self, text: str) -> None:
        self.sections.append(text)

    def info(self, text: str) -> None:
        self.infos.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)


class FakeRegistry:
    def __init__(self) -> None:
        self.latest: dict[str, str] = {}
        self.published: set[tuple[str, str]] = set()
        self.queries: list[str] = []
        self.failures: dict[str, Exception] = {}

    def query_latest_version(self, package_name: str) -> str | None:
        self.queries.append(package_name)
        if package_name in self.failures:
            raise self.failures[package_name]
        return self.latest.get(package_name)

    def is_version_published(self, package_name: str, version: str) -> bool:
        return (package_name, version) in self.published


class RecordingInstaller:
    def __init__(self) -> None:
        self.calls: list[Path] = []
        self.exit_codes: dict[Path, int] = {}

    def run_install(self, folder: Path) -> int:
        self.calls.append(folder)
        return self.exit_codes.get(folder, 0)


class RecordingFileSystem(LocalFileSystem):
    def __init__(self) -> None:
        self.writes: list[Path] = []

    def write_file(self, path: Path, contents: str) -> None:
        self.writes.append(path)
        super().write_file(path, contents)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return a resolved folder that holds the packages of a test."""

    root = (tmp_path / "ws").resolve()
    root.mkdir()
    return root


@pytest.fixture
def write_package() -> PackageWriter:
    """Return a helper writing ``package.json`` (and optionally a lock file) into a folder."""

    def _write(
        folder: Path,
        name: str,
        *,
        dependencies: Mapping[str, str] | None = None,
        dev_dependencies: Mapping[str, str] | None = None,
        lock: Mapping[str, Any] | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        manifest: dict[str, Any] = {"name": name, "version": "1.0.0", **(extra or {})}
        if dependencies is not None:
            manifest["dependencies"] = dict(dependencies)
        if dev_dependencies is not None:
            manifest["devDependencies"] = dict(dev_dependencies)
        (folder / "package.json").write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
        if lock is not None:
            (folder / "package-lock.json").write_text(json.dumps(lock, indent=2) + "\n", encoding="utf-8")
        return folder

    return _write


@pytest.fixture
def read_json() -> Callable[[Path], Any]:
    return lambda path: json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def installer() -> RecordingInstaller:
    return RecordingInstaller()


@pytest.fixture
def filesystem() -> RecordingFileSystem:
    return RecordingFileSystem()


@pytest.fixture
def make_context(
    filesystem: RecordingFileSystem,
    registry: FakeRegistry,
    installer: RecordingInstaller,
    logger: RecordingLogger,
) -> Callable[[], SyncContext]:
    """Return a factory producing fresh run contexts that share the fake collaborators."""

    def _make() -> SyncContext:
        return SyncContext(filesystem=filesystem, registry=registry, installer=installer, logger=logger)

    return _make


@pytest.fixture
def context(make_context: Callable[[], SyncContext]) -> SyncContext:
    return make_context()
