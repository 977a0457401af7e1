# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Published CLI command."""

from __future__ import annotations

from typer import Typer

from ...shared import register_command
from .command import published_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Register the published command with ``app``.

    Args:
        app: Typer application receiving the published command registration.
    """

    register_command(app, published_command, name="published")
