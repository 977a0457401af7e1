# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Sync CLI command."""

from __future__ import annotations

from typer import Typer

from ...shared import register_command
from .command import sync_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Register the sync command with ``app``.

    Args:
        app: Typer application receiving the sync command registration.
    """

    register_command(app, sync_command, name="sync")
