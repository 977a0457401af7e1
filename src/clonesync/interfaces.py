# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capability protocols consumed by the synchronisation engine."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Filesystem primitives used for manifest discovery and rewriting."""

    def file_exists(self, path: Path) -> bool:
        """Return ``True`` when ``path`` is an existing regular file."""

        raise NotImplementedError

    def folder_exists(self, path: Path) -> bool:
        """Return ``True`` when ``path`` is an existing directory."""

        raise NotImplementedError

    def read_file(self, path: Path) -> str:
        """Return the UTF-8 text stored at ``path``."""

        raise NotImplementedError

    def write_file(self, path: Path, contents: str) -> None:
        """Replace the contents of ``path`` with ``contents``."""

        raise NotImplementedError

    def list_child_folders(self, path: Path) -> Sequence[Path]:
        """Return the immediate child directories of ``path``."""

        raise NotImplementedError


@runtime_checkable
class PackageRegistry(Protocol):
    """Query published package metadata."""

    def query_latest_version(self, package_name: str) -> str | None:
        """Return the version behind the ``latest`` distribution tag, if any."""

        raise NotImplementedError

    def is_version_published(self, package_name: str, version: str) -> bool:
        """Return ``True`` when ``package_name@version`` exists in the registry."""

        raise NotImplementedError


@runtime_checkable
class Installer(Protocol):
    """Install a package folder's dependencies."""

    def run_install(self, folder: Path) -> int:
        """Install dependencies inside ``folder`` and return the exit code."""

        raise NotImplementedError


@runtime_checkable
class SyncLogger(Protocol):
    """Receive progress events emitted during a synchronisation run."""

    def section(self, text: str) -> None:
        """Record the start of a new unit of work."""

        raise NotImplementedError

    def info(self, text: str) -> None:
        """Record an informational detail."""

        raise NotImplementedError

    def error(self, text: str) -> None:
        """Record a failure."""

        raise NotImplementedError


__all__ = ["FileSystem", "Installer", "PackageRegistry", "SyncLogger"]
