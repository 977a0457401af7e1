# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the npm-backed registry and installer."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from clonesync.errors import RegistryQueryError
from clonesync.npm import NpmInstaller, NpmRegistry
from clonesync.process_utils import ExecutableNotFoundError, run_command


class ScriptedRunner:
    def __init__(self, *results: CompletedProcess[str]) -> None:
        self._results = list(results)
        self.calls: list[tuple[tuple[str, ...], Path | None]] = []

    def __call__(self, args: Sequence[str], cwd: Path | None) -> CompletedProcess[str]:
        self.calls.append((tuple(args), cwd))
        return self._results.pop(0)


def _completed(*, stdout: str = "", stderr: str = "", returncode: int = 0) -> CompletedProcess[str]:
    return CompletedProcess(args=["npm"], returncode=returncode, stdout=stdout, stderr=stderr)


def test_query_latest_version_reads_dist_tags() -> None:
    runner = ScriptedRunner(_completed(stdout=json.dumps({"latest": "1.4.2", "next": "2.0.0-beta.1"})))

    assert NpmRegistry(runner=runner).query_latest_version("@fixture/b") == "1.4.2"
    assert runner.calls == [(("npm", "view", "@fixture/b", "dist-tags", "--json"), None)]


def test_query_latest_version_without_latest_tag() -> None:
    runner = ScriptedRunner(_completed(stdout=json.dumps({"next": "2.0.0-beta.1"})))

    assert NpmRegistry(runner=runner).query_latest_version("@fixture/b") is None


def test_query_latest_version_for_unpublished_package() -> None:
    runner = ScriptedRunner(
        _completed(returncode=1, stdout=json.dumps({"error": {"code": "E404", "summary": "Not Found"}})),
    )

    assert NpmRegistry(runner=runner).query_latest_version("@fixture/unpublished") is None


def test_query_latest_version_raises_on_other_failures() -> None:
    runner = ScriptedRunner(_completed(returncode=1, stderr="npm ERR! code ECONNREFUSED"))

    with pytest.raises(RegistryQueryError, match="ECONNREFUSED"):
        NpmRegistry(runner=runner).query_latest_version("@fixture/b")


def test_is_version_published() -> None:
    runner = ScriptedRunner(_completed(stdout='"1.1.1"\n'), _completed(stdout=""))
    registry = NpmRegistry(runner=runner)

    assert registry.is_version_published("@azure/ms-rest-js", "1.1.1") is True
    assert registry.is_version_published("@azure/ms-rest-js", "0.9.7") is False
    assert runner.calls[0][0] == ("npm", "view", "@azure/ms-rest-js@1.1.1", "version", "--json")


def test_installer_runs_npm_install_in_folder(tmp_path: Path) -> None:
    runner = ScriptedRunner(_completed(returncode=3))

    exit_code = NpmInstaller(runner=runner).run_install(tmp_path)

    assert exit_code == 3
    assert runner.calls == [(("npm", "install"), tmp_path)]


def test_run_command_reports_missing_executable(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PATH", str(tmp_path / "empty-bin"))

    with pytest.raises(ExecutableNotFoundError) as excinfo:
        run_command(["npm", "install"], cwd=tmp_path)

    assert excinfo.value.executable == "npm"
    assert "npm" in str(excinfo.value)
