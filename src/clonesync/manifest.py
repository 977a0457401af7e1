# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reading and writing ``package.json`` manifests and ``package-lock.json`` files."""

from __future__ import annotations

import json
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import (
    DEPENDENCY_SECTIONS,
    LOCK_DEPENDENCIES_KEY,
    LOCK_PACKAGES_KEY,
    LOCK_PACKAGES_PREFIX,
    MANIFEST_FILE_NAME,
)
from .errors import ManifestError
from .filesystem import LocalFileSystem, parent_folder
from .interfaces import FileSystem, PackageRegistry

_JSON_INDENT = 2


@dataclass(slots=True)
class JsonDocument:
    """Raw JSON object preserving unknown keys and key order."""

    data: dict[str, Any]
    trailing_newline: bool = True

    def dumps(self) -> str:
        text = json.dumps(self.data, indent=_JSON_INDENT, ensure_ascii=False)
        return f"{text}\n" if self.trailing_newline else text


@dataclass(slots=True)
class PackageManifest(JsonDocument):
    """A package descriptor declaring a name and dependency maps."""

    @property
    def name(self) -> str | None:
        value = self.data.get("name")
        return value if isinstance(value, str) else None

    @property
    def version(self) -> str | None:
        value = self.data.get("version")
        return value if isinstance(value, str) else None

    def section(self, key: str) -> MutableMapping[str, str] | None:
        """Return the dependency map stored under ``key`` when present."""

        value = self.data.get(key)
        return value if isinstance(value, dict) else None

    def dependency_names(self) -> Iterator[str]:
        """Yield every name in ``dependencies`` then ``devDependencies``."""

        for key in DEPENDENCY_SECTIONS:
            if (dependencies := self.section(key)) is not None:
                yield from dependencies


@dataclass(slots=True)
class PackageLock(JsonDocument):
    """A lock file recording resolved dependency versions."""

    removed: list[str] = field(default_factory=list)


def parse_json_document(text: str, path: Path) -> tuple[dict[str, Any], bool]:
    """Parse ``text`` as a JSON object.

    Args:
        text: Raw document contents.
        path: Location used in error messages.

    Returns:
        tuple[dict[str, Any], bool]: Parsed object and whether the source
        ended with a newline.

    Raises:
        ManifestError: If the document is not valid JSON or not an object.

    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(path, str(exc)) from exc
    if not isinstance(payload, dict):
        raise ManifestError(path, "top-level value must be an object")
    return payload, text.endswith("\n")


def _read_document(path: Path, filesystem: FileSystem | None) -> tuple[dict[str, Any], bool]:
    fs = filesystem or LocalFileSystem()
    try:
        text = fs.read_file(path)
    except UnicodeDecodeError as exc:
        raise ManifestError(path, f"not valid UTF-8 ({exc.reason})") from exc
    return parse_json_document(text, path)


def read_manifest(path: Path, filesystem: FileSystem | None = None) -> PackageManifest:
    data, trailing_newline = _read_document(path, filesystem)
    return PackageManifest(data=data, trailing_newline=trailing_newline)


def write_manifest(manifest: PackageManifest, path: Path, filesystem: FileSystem | None = None) -> None:
    fs = filesystem or LocalFileSystem()
    fs.write_file(path, manifest.dumps())


def read_lock(path: Path, filesystem: FileSystem | None = None) -> PackageLock:
    data, trailing_newline = _read_document(path, filesystem)
    return PackageLock(data=data, trailing_newline=trailing_newline)


def write_lock(lock: PackageLock, path: Path, filesystem: FileSystem | None = None) -> None:
    fs = filesystem or LocalFileSystem()
    fs.write_file(path, lock.dumps())


def remove_resolved_entries(lock: PackageLock, *names: str) -> None:
    """Drop the resolved entries for ``names`` from ``lock`` in place.

    Both the legacy ``dependencies`` map and the ``packages`` map keyed by
    ``node_modules/<name>`` are pruned so the next install resolves the
    dependency afresh.

    Args:
        lock: Lock file to mutate.
        *names: Dependency names whose resolved entries should be removed.

    """

    dependencies = lock.data.get(LOCK_DEPENDENCIES_KEY)
    packages = lock.data.get(LOCK_PACKAGES_KEY)
    for name in names:
        removed = False
        if isinstance(dependencies, dict) and dependencies.pop(name, None) is not None:
            removed = True
        if isinstance(packages, dict) and packages.pop(f"{LOCK_PACKAGES_PREFIX}{name}", None) is not None:
            removed = True
        if removed:
            lock.removed.append(name)


def find_manifest_file(start_path: Path, filesystem: FileSystem | None = None) -> Path | None:
    """Return the nearest manifest at or above ``start_path``.

    Args:
        start_path: Manifest file, file inside a package, or folder to start from.
        filesystem: Filesystem used for existence checks.

    Returns:
        Path | None: Manifest path, or ``None`` when no ancestor holds one.

    """

    fs = filesystem or LocalFileSystem()
    if fs.file_exists(start_path):
        if start_path.name == MANIFEST_FILE_NAME:
            return start_path
        folder: Path | None = start_path.parent
    elif fs.folder_exists(start_path):
        folder = start_path
    else:
        return None

    while folder is not None:
        candidate = folder / MANIFEST_FILE_NAME
        if fs.file_exists(candidate):
            return candidate
        folder = parent_folder(folder)
    return None


def is_manifest_published(manifest: PackageManifest, registry: PackageRegistry) -> bool:
    """Return ``True`` when the manifest's exact ``name@version`` is published."""

    if not manifest.name or not manifest.version:
        return False
    return registry.is_version_published(manifest.name, manifest.version)


__all__ = [
    "JsonDocument",
    "PackageLock",
    "PackageManifest",
    "find_manifest_file",
    "is_manifest_published",
    "parse_json_document",
    "read_lock",
    "read_manifest",
    "remove_resolved_entries",
    "write_lock",
    "write_manifest",
]
