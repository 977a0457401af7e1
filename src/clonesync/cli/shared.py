# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared option declarations and helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer

from ..config import ConfigError, SyncConfig, load_config
from ..errors import ClonesyncError
from ..logging import fail

EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]

# Failures reported as a single error line instead of a traceback.
RUN_FAILURES: tuple[type[Exception], ...] = (ClonesyncError, OSError)


def register_command(app: typer.Typer, callback: Callable[..., Any], *, name: str) -> None:
    """Register ``callback`` on ``app`` under ``name``.

    Args:
        app: Typer application receiving the command.
        callback: Command implementation.
        name: Command name shown in CLI usage output.
    """

    app.command(name=name)(callback)


def load_configuration(root: Path, *, use_emoji: bool) -> SyncConfig:
    """Load the project configuration rooted at ``root``.

    Args:
        root: Folder holding ``pyproject.toml`` and/or ``.clonesync.toml``.
        use_emoji: Whether error output should include emoji glyphs.

    Returns:
        SyncConfig: Loaded configuration.

    Raises:
        typer.Exit: When the configuration is invalid.
    """

    try:
        return load_config(root)
    except ConfigError as exc:
        fail(f"Configuration invalid: {exc}", use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc


__all__ = ["EMOJI_OPTION", "RUN_FAILURES", "load_configuration", "register_command"]
