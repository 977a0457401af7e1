# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Keep locally cloned npm packages pointing at each other, or at their published releases."""

from __future__ import annotations

from importlib import metadata

from .context import SyncContext
from .locator import find_package
from .models import ClonedPackage, DependencyEdit, DependencyType, PackageFolderConfig, SyncOptions, SyncResult
from .orchestrator import SyncOrchestrator, sync
from .resolver import resolve_target_version

__all__ = [
    "ClonedPackage",
    "DependencyEdit",
    "DependencyType",
    "PackageFolderConfig",
    "SyncContext",
    "SyncOptions",
    "SyncOrchestrator",
    "SyncResult",
    "__version__",
    "find_package",
    "resolve_target_version",
    "sync",
]

try:
    __version__ = metadata.version("clonesync")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
