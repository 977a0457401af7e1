# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""npm-backed implementations of the installer and registry collaborators."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Final

from .constants import LATEST_DIST_TAG
from .errors import RegistryQueryError
from .process_utils import run_command

CommandRunner = Callable[[Sequence[str], Path | None], Any]

NPM_EXECUTABLE: Final[str] = "npm"
NOT_FOUND_CODE: Final[str] = "E404"


def _default_runner(args: Sequence[str], cwd: Path | None) -> Any:
    return run_command(args, cwd=cwd, capture_output=True)


def _install_runner(args: Sequence[str], cwd: Path | None) -> Any:
    return run_command(args, cwd=cwd)


class NpmInstaller:
    """Run ``npm install`` inside package folders."""

    def __init__(self, *, runner: CommandRunner | None = None) -> None:
        self._runner = runner or _install_runner

    def run_install(self, folder: Path) -> int:
        completed = self._runner((NPM_EXECUTABLE, "install"), folder)
        return int(completed.returncode)


class NpmRegistry:
    """Query the npm registry through ``npm view``."""

    def __init__(self, *, runner: CommandRunner | None = None) -> None:
        self._runner = runner or _default_runner

    def query_latest_version(self, package_name: str) -> str | None:
        payload = self._view(package_name, "dist-tags")
        if not isinstance(payload, dict):
            return None
        latest = payload.get(LATEST_DIST_TAG)
        return latest if isinstance(latest, str) and latest else None

    def is_version_published(self, package_name: str, version: str) -> bool:
        payload = self._view(f"{package_name}@{version}", "version")
        if isinstance(payload, list):
            return version in payload
        return payload == version

    def _view(self, spec: str, field: str) -> Any:
        completed = self._runner((NPM_EXECUTABLE, "view", spec, field, "--json"), None)
        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if completed.returncode != 0:
            if NOT_FOUND_CODE in stdout or NOT_FOUND_CODE in stderr:
                return None
            message = stderr.strip() or stdout.strip() or f"exit code {completed.returncode}"
            raise RegistryQueryError(spec, message)
        if not stdout.strip():
            return None
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise RegistryQueryError(spec, f"unparseable output: {exc}") from exc


__all__ = ["CommandRunner", "NpmInstaller", "NpmRegistry"]
