# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run-scoped state shared by the locator, resolver, and orchestrator."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .filesystem import LocalFileSystem
from .interfaces import FileSystem, Installer, PackageRegistry, SyncLogger
from .logging import ConsoleSyncLogger
from .models import ClonedPackage
from .npm import NpmInstaller, NpmRegistry


@dataclass(slots=True)
class SyncContext:
    """Collaborators plus the clone cache for a single synchronisation run.

    ``cloned_packages`` maps a package name to its clone, or to ``None`` once a
    search for that name came back empty. Create a fresh context per run.
    """

    filesystem: FileSystem = field(default_factory=LocalFileSystem)
    registry: PackageRegistry = field(default_factory=NpmRegistry)
    installer: Installer = field(default_factory=NpmInstaller)
    logger: SyncLogger = field(default_factory=ConsoleSyncLogger)
    cloned_packages: dict[str, ClonedPackage | None] = field(default_factory=dict)

    def is_known(self, name: str) -> bool:
        return name in self.cloned_packages

    def lookup(self, name: str) -> ClonedPackage | None:
        return self.cloned_packages.get(name)

    def remember(self, name: str, package: ClonedPackage | None) -> None:
        self.cloned_packages[name] = package

    def resolved_packages(self) -> Iterator[tuple[str, ClonedPackage]]:
        """Yield clones that received a target version during this run."""

        for name, package in self.cloned_packages.items():
            if package is not None and package.target_version:
                yield name, package


__all__ = ["SyncContext"]
