# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rewrite version registrations embedded in auxiliary text files."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

from .constants import VERSION_REGISTRATION_REPLACEMENT, VERSION_REGISTRATION_TEMPLATE
from .context import SyncContext


class VersionChange(NamedTuple):
    name: str
    old_version: str
    new_version: str


def registration_pattern(package_name: str) -> re.Pattern[str]:
    """Return the pattern matching the version registration for ``package_name``."""

    return re.compile(VERSION_REGISTRATION_TEMPLATE.format(name=re.escape(package_name)))


def rewrite_registrations(contents: str, targets: Iterable[tuple[str, str]]) -> tuple[str, list[VersionChange]]:
    """Rewrite the first registration of each ``(name, version)`` pair in ``contents``.

    Args:
        contents: Original file text.
        targets: Package names paired with the version they should register.

    Returns:
        tuple[str, list[VersionChange]]: Updated text and the changes applied.

    """

    changes: list[VersionChange] = []
    for name, version in targets:
        pattern = registration_pattern(name)
        match = pattern.search(contents)
        if match is None or match.group(1) == version:
            continue
        replacement = VERSION_REGISTRATION_REPLACEMENT.format(name=name, version=version)
        contents = pattern.sub(lambda _match, text=replacement: text, contents, count=1)
        changes.append(VersionChange(name, match.group(1), version))
    return contents, changes


def update_extra_file(path: Path, context: SyncContext) -> bool:
    """Patch ``path`` with every target version resolved so far.

    Args:
        path: Existing text file to update.
        context: Run context holding the resolved clones.

    Returns:
        bool: ``True`` when the file content changed and was written back.

    """

    logger = context.logger
    logger.section(f'Updating extra file "{path}"...')
    original = context.filesystem.read_file(path)
    targets = [
        (name, package.target_version)
        for name, package in context.resolved_packages()
        if package.target_version is not None
    ]
    updated, changes = rewrite_registrations(original, targets)
    for change in changes:
        logger.info(f'  Changing "{change.name}" version from "{change.old_version}" to "{change.new_version}"...')
    if updated == original:
        logger.info("  No changes made.")
        return False
    logger.info("  Writing changes back to file...")
    context.filesystem.write_file(path, updated)
    return True


__all__ = ["VersionChange", "registration_pattern", "rewrite_registrations", "update_extra_file"]
