# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing the folder of a locally cloned package."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ....context import SyncContext
from ....locator import find_package
from ....logging import ConsoleSyncLogger, fail
from ...shared import EMOJI_OPTION, RUN_FAILURES

NAME_ARGUMENT = Annotated[str, typer.Argument(help="Package name declared in the wanted package.json.")]
FROM_OPTION = Annotated[
    Path,
    typer.Option("--from", "-f", help="File or folder to start searching from.", show_default=False),
]


def find_command(
    name: NAME_ARGUMENT,
    start: FROM_OPTION = Path("."),
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the folder of the clone of NAME nearest to the start path."""

    context = SyncContext(logger=ConsoleSyncLogger(use_emoji=emoji))
    start_path = start.resolve()
    try:
        package = find_package(name, start_path, context)
    except RUN_FAILURES as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc
    if package is None:
        fail(f'Package "{name}" was not found near "{start_path}".', use_emoji=emoji)
        raise typer.Exit(code=1)
    typer.echo(str(package.path))


__all__ = ["find_command"]
