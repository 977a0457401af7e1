# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compute the version string a dependency should be rewritten to."""

from __future__ import annotations

from .constants import CARET_RANGE_PREFIX, LOCAL_VERSION_PREFIX
from .context import SyncContext
from .locator import find_package
from .models import ClonedPackage, DependencyType


def resolve_target_version(
    requester: ClonedPackage,
    dependency_name: str,
    dependency_type: DependencyType,
    context: SyncContext,
) -> str | None:
    """Return the target version for ``dependency_name`` as seen from ``requester``.

    The first resolution of a name wins for the rest of the run: later calls
    return the cached value even when asked for a different dependency type,
    and an empty result is cached too so the registry is queried at most once.

    Args:
        requester: Clone whose manifest references the dependency; the clone
            search starts from its folder.
        dependency_name: Name of the dependency to resolve.
        dependency_type: ``local`` for a ``file:`` reference to the clone,
            ``latest`` for a caret range on the published ``latest`` tag.
        context: Run context shared with the locator.

    Returns:
        str | None: New version string, or ``None`` to leave the entry alone.

    """

    dependency = find_package(dependency_name, requester.path, context)
    if dependency is None:
        return None
    if not dependency.target_resolved:
        dependency.target_version = _compute_target_version(dependency_name, dependency, dependency_type, context)
        dependency.target_resolved = True
    return dependency.target_version


def _compute_target_version(
    dependency_name: str,
    dependency: ClonedPackage,
    dependency_type: DependencyType,
    context: SyncContext,
) -> str | None:
    if dependency_type is DependencyType.LOCAL:
        return f"{LOCAL_VERSION_PREFIX}{dependency.path}"
    latest = context.registry.query_latest_version(dependency_name)
    if latest:
        return f"{CARET_RANGE_PREFIX}{latest}"
    return dependency.default_version


__all__ = ["resolve_target_version"]
