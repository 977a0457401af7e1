# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Local filesystem access and path normalisation helpers."""

from __future__ import annotations

import os
import tempfile
from os import PathLike
from pathlib import Path

_Pathish = str | PathLike[str] | Path


def best_effort_resolve(path: _Pathish) -> Path:
    """Return ``path`` resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.

    """

    candidate = Path(path).expanduser()
    try:
        return candidate.resolve(strict=False)
    except (OSError, RuntimeError):
        return candidate.absolute() if not candidate.is_absolute() else candidate


def path_key(path: _Pathish) -> str:
    """Return a normalised identity key for ``path``.

    Symlinks are resolved and the result is case folded on platforms whose
    filesystems are case-insensitive, so two spellings of one folder share a
    key.

    Args:
        path: Path for which to build the key.

    Returns:
        str: Key suitable for set membership checks.

    """

    return os.path.normcase(str(best_effort_resolve(path)))


def parent_folder(path: Path) -> Path | None:
    """Return the parent of ``path`` or ``None`` at the filesystem root."""

    parent = path.parent
    if parent == path:
        return None
    return parent


class LocalFileSystem:
    """:class:`~clonesync.interfaces.FileSystem` backed by the host filesystem."""

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def folder_exists(self, path: Path) -> bool:
        return path.is_dir()

    def read_file(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_file(self, path: Path, contents: str) -> None:
        # Write to a sibling temp file then swap it in so readers never see a partial file.
        descriptor, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8", newline="") as handle:
                handle.write(contents)
            if path.exists():
                os.chmod(temp_name, path.stat().st_mode & 0o7777)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def list_child_folders(self, path: Path) -> list[Path]:
        try:
            entries = list(path.iterdir())
        except (FileNotFoundError, NotADirectoryError, PermissionError):
            return []
        return sorted((entry for entry in entries if entry.is_dir()), key=lambda entry: entry.name)


__all__ = ["LocalFileSystem", "best_effort_resolve", "parent_folder", "path_key"]
