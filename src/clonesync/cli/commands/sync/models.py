# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the sync CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ....models import DependencyType

PATH_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Package folder (or a path inside it) to synchronise.", show_default=False),
]
TYPE_OPTION = Annotated[
    DependencyType,
    typer.Option("--type", "-t", help="Rewrite cloned dependencies to local file references or latest releases."),
]
RECURSIVE_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--recursive/--no-recursive",
        help="Also update the cloned dependencies of cloned dependencies.",
        show_default=False,
    ),
]
FORCE_INSTALL_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--force-install/--no-force-install",
        help="Run npm install even in folders whose dependencies did not change.",
        show_default=False,
    ),
]
EXTRA_FILE_OPTION = Annotated[
    list[Path] | None,
    typer.Option("--extra-file", "-e", help="Text file whose version registrations should be updated."),
]
PACKAGE_FOLDER_OPTION = Annotated[
    list[Path] | None,
    typer.Option("--package-folder", "-p", help="Additional package folder to synchronise."),
]
CONFIG_ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--config-root", help="Folder holding pyproject.toml or .clonesync.toml.", show_default=False),
]


@dataclass(slots=True)
class SyncCommandOptions:
    """Normalised CLI inputs for the sync workflow."""

    path: Path
    dependency_type: DependencyType
    recursive: bool | None
    force_install: bool | None
    extra_files: list[Path]
    package_folders: list[Path]
    config_root: Path
    use_emoji: bool


def build_sync_options(
    path: Path,
    dependency_type: DependencyType,
    recursive: bool | None,
    force_install: bool | None,
    extra_file: list[Path] | None,
    package_folder: list[Path] | None,
    config_root: Path | None,
    emoji: bool,
) -> SyncCommandOptions:
    """Construct ``SyncCommandOptions`` from Typer parameters.

    Args:
        path: Package path supplied on the command line.
        dependency_type: Requested dependency type.
        recursive: Recursion override, ``None`` when not given.
        force_install: Forced install override, ``None`` when not given.
        extra_file: Extra files supplied via CLI options.
        package_folder: Extra package folders supplied via CLI options.
        config_root: Explicit configuration folder, ``None`` to use the package path.
        emoji: Flag controlling emoji usage in CLI output.

    Returns:
        SyncCommandOptions: Structured CLI options for the sync workflow.
    """

    resolved = path.resolve()
    if config_root is not None:
        root = config_root.resolve()
    else:
        root = resolved if resolved.is_dir() else resolved.parent
    return SyncCommandOptions(
        path=resolved,
        dependency_type=dependency_type,
        recursive=recursive,
        force_install=force_install,
        extra_files=[entry.resolve() for entry in extra_file or []],
        package_folders=[entry.resolve() for entry in package_folder or []],
        config_root=root,
        use_emoji=emoji,
    )


__all__ = [
    "CONFIG_ROOT_OPTION",
    "EXTRA_FILE_OPTION",
    "FORCE_INSTALL_OPTION",
    "PACKAGE_FOLDER_OPTION",
    "PATH_ARGUMENT",
    "RECURSIVE_OPTION",
    "SyncCommandOptions",
    "TYPE_OPTION",
    "build_sync_options",
]
