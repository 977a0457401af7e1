# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Find CLI command."""

from __future__ import annotations

from typer import Typer

from ...shared import register_command
from .command import find_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Register the find command with ``app``.

    Args:
        app: Typer application receiving the find command registration.
    """

    register_command(app, find_command, name="find")
