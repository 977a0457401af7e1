# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# package manager execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path

from .errors import ClonesyncError


class ExecutableNotFoundError(ClonesyncError):
    """Raised when the program a command starts with cannot be located."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable '{executable}' was not found on PATH")
        self.executable = executable


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise ExecutableNotFoundError(head)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    capture_output: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    The exit status is returned to the caller rather than raised; callers
    decide which codes are failures.
    """
    normalized = _normalize_args(args)
    # Bandit: commands are assembled from fixed npm argument lists; no shell expansion.
    return subprocess.run(  # nosec B603
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        check=False,
        capture_output=capture_output,
        text=True,
    )


__all__ = ["ExecutableNotFoundError", "run_command"]
