# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by clonesync."""

from __future__ import annotations

from pathlib import Path


class ClonesyncError(RuntimeError):
    """Base class for errors surfaced to the CLI."""


class ManifestError(ClonesyncError):
    """Raised when a manifest or lock file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid JSON document at {path}: {reason}")
        self.path = path
        self.reason = reason


class RegistryQueryError(ClonesyncError):
    """Raised when the package registry query fails for a reason other than absence."""

    def __init__(self, package_name: str, message: str) -> None:
        super().__init__(f"Registry query for '{package_name}' failed: {message}")
        self.package_name = package_name


__all__ = ["ClonesyncError", "ManifestError", "RegistryQueryError"]
