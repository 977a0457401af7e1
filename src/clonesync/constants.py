# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for clone discovery and dependency synchronisation."""

from __future__ import annotations

from typing import Final

MANIFEST_FILE_NAME: Final[str] = "package.json"
LOCK_FILE_NAME: Final[str] = "package-lock.json"

DEPENDENCY_SECTIONS: Final[tuple[str, ...]] = ("dependencies", "devDependencies")

LOCAL_VERSION_PREFIX: Final[str] = "file:"
CARET_RANGE_PREFIX: Final[str] = "^"
LATEST_DIST_TAG: Final[str] = "latest"

LOCK_DEPENDENCIES_KEY: Final[str] = "dependencies"
LOCK_PACKAGES_KEY: Final[str] = "packages"
LOCK_PACKAGES_PREFIX: Final[str] = "node_modules/"

# Matches ``.StringProperty("<name>", "<version>");`` with the version captured.
VERSION_REGISTRATION_TEMPLATE: Final[str] = r'\.StringProperty\("{name}", "(.*)"\);'
VERSION_REGISTRATION_REPLACEMENT: Final[str] = '.StringProperty("{name}", "{version}");'

EXIT_SUCCESS: Final[int] = 0
EXIT_MANIFEST_NOT_FOUND: Final[int] = 1
EXIT_EXTRA_FILE_MISSING: Final[int] = 2

__all__ = [
    "CARET_RANGE_PREFIX",
    "DEPENDENCY_SECTIONS",
    "EXIT_EXTRA_FILE_MISSING",
    "EXIT_MANIFEST_NOT_FOUND",
    "EXIT_SUCCESS",
    "LATEST_DIST_TAG",
    "LOCAL_VERSION_PREFIX",
    "LOCK_DEPENDENCIES_KEY",
    "LOCK_FILE_NAME",
    "LOCK_PACKAGES_KEY",
    "LOCK_PACKAGES_PREFIX",
    "MANIFEST_FILE_NAME",
    "VERSION_REGISTRATION_REPLACEMENT",
    "VERSION_REGISTRATION_TEMPLATE",
]
