# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command for synchronising cloned dependency versions."""

from __future__ import annotations

from pathlib import Path

import typer

from ....context import SyncContext
from ....logging import ConsoleSyncLogger, fail, ok
from ....models import DependencyType, SyncResult
from ....orchestrator import SyncOrchestrator
from ...shared import EMOJI_OPTION, RUN_FAILURES, load_configuration
from .models import (
    CONFIG_ROOT_OPTION,
    EXTRA_FILE_OPTION,
    FORCE_INSTALL_OPTION,
    PACKAGE_FOLDER_OPTION,
    PATH_ARGUMENT,
    RECURSIVE_OPTION,
    TYPE_OPTION,
    SyncCommandOptions,
    build_sync_options,
)


def sync_command(
    path: PATH_ARGUMENT = Path("."),
    dependency_type: TYPE_OPTION = DependencyType.LOCAL,
    recursive: RECURSIVE_OPTION = None,
    force_install: FORCE_INSTALL_OPTION = None,
    extra_file: EXTRA_FILE_OPTION = None,
    package_folder: PACKAGE_FOLDER_OPTION = None,
    config_root: CONFIG_ROOT_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Rewrite cloned dependencies to local or latest versions and reinstall."""

    options = build_sync_options(
        path,
        dependency_type,
        recursive,
        force_install,
        extra_file,
        package_folder,
        config_root,
        emoji,
    )
    result = _run_sync(options)
    _emit_sync_summary(result, use_emoji=options.use_emoji)


def _run_sync(options: SyncCommandOptions) -> SyncResult:
    """Run the synchronisation described by ``options``.

    Args:
        options: Parsed CLI options controlling the run.

    Returns:
        SyncResult: Outcome reported by the orchestrator.

    Raises:
        typer.Exit: When configuration loading or the run itself fails unexpectedly.
    """

    config = load_configuration(options.config_root, use_emoji=options.use_emoji)
    sync_options = config.to_options(
        recursive=options.recursive,
        force_install=options.force_install,
        extra_files=options.extra_files,
        package_folders=options.package_folders,
    )
    context = SyncContext(logger=ConsoleSyncLogger(use_emoji=options.use_emoji))
    try:
        return SyncOrchestrator(context).run([options.path], options.dependency_type, sync_options)
    except RUN_FAILURES as exc:
        fail(str(exc), use_emoji=options.use_emoji)
        raise typer.Exit(code=1) from exc


def _emit_sync_summary(result: SyncResult, *, use_emoji: bool) -> None:
    """Render a summary of the run and exit with its exit code.

    Args:
        result: Aggregated outcome from :class:`SyncOrchestrator`.
        use_emoji: Whether to include emoji glyphs in output.

    Raises:
        typer.Exit: Always, carrying the run's exit code.
    """

    if not result.succeeded:
        fail(f"Dependency sync failed with exit code {result.exit_code}.", use_emoji=use_emoji)
        raise typer.Exit(code=result.exit_code)

    ok(
        f"Processed {len(result.processed)} package folder(s); "
        f"changed {len(result.edits)} dependency version(s).",
        use_emoji=use_emoji,
    )
    raise typer.Exit(code=0)


__all__ = ["sync_command"]
