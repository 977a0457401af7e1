# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate locally cloned packages by manifest name."""

from __future__ import annotations

from pathlib import Path

from .constants import MANIFEST_FILE_NAME
from .context import SyncContext
from .filesystem import best_effort_resolve, parent_folder, path_key
from .interfaces import FileSystem
from .manifest import read_manifest
from .models import ClonedPackage
from .search import frontier_search


def find_package(name: str, start_path: Path, context: SyncContext | None = None) -> ClonedPackage | None:
    """Return the clone of package ``name`` nearest to ``start_path``.

    The search starts at the folder containing ``start_path`` and widens by
    moving to the parent folder and then across the parent's child folders,
    so clones checked out beside any ancestor are found. Results, including
    misses, are memoized in ``context`` for the rest of the run.

    Args:
        name: Package name declared in the wanted manifest.
        start_path: File or folder the search starts from.
        context: Run context holding the clone cache; a throwaway context is
            used when omitted.

    Returns:
        ClonedPackage | None: The clone record, or ``None`` when no folder
        reachable from ``start_path`` declares ``name``.

    """

    ctx = context or SyncContext()
    if ctx.is_known(name):
        return ctx.lookup(name)

    filesystem = ctx.filesystem
    match = frontier_search(
        _start_folders(best_effort_resolve(start_path), filesystem),
        expand=lambda folder: _neighbour_folders(folder, filesystem),
        is_goal=lambda folder: _declares_package(folder, name, filesystem),
        key=path_key,
    )
    result = ClonedPackage(path=match) if match is not None else None
    ctx.remember(name, result)
    return result


def _start_folders(start_path: Path, filesystem: FileSystem) -> list[Path]:
    if filesystem.file_exists(start_path):
        return [start_path.parent]
    if filesystem.folder_exists(start_path):
        return [start_path]
    return []


def _neighbour_folders(folder: Path, filesystem: FileSystem) -> list[Path]:
    parent = parent_folder(folder)
    if parent is None:
        return []
    return [parent, *filesystem.list_child_folders(parent)]


def _declares_package(folder: Path, name: str, filesystem: FileSystem) -> bool:
    manifest_path = folder / MANIFEST_FILE_NAME
    if not filesystem.file_exists(manifest_path):
        return False
    return read_manifest(manifest_path, filesystem).name == name


__all__ = ["find_package"]
