# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m clonesync``."""

from __future__ import annotations

from .cli.app import app

app(prog_name="clonesync")
