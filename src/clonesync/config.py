# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and layered TOML loading for clonesync."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ClonesyncError
from .models import PackageFolderConfig, SyncOptions

PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILE_NAME: Final[str] = ".clonesync.toml"
PYPROJECT_SECTION: Final[tuple[str, ...]] = ("tool", "clonesync")
DEFAULT_INCLUDE_KEY: Final[str] = "include"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigError(ClonesyncError):
    """Raised when configuration input is invalid."""


class SyncConfig(BaseModel):
    """Defaults for the ``sync`` command read from project configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    recursive: bool = True
    force_install: bool = False
    extra_files: list[Path] = Field(default_factory=list)
    package_folders: list[PackageFolderConfig] = Field(default_factory=list)

    def to_options(
        self,
        *,
        recursive: bool | None = None,
        force_install: bool | None = None,
        extra_files: Sequence[Path] = (),
        package_folders: Sequence[Path] = (),
    ) -> SyncOptions:
        """Return :class:`SyncOptions` with CLI overrides applied on top of this config.

        Args:
            recursive: Override for recursive propagation, ``None`` keeps the config value.
            force_install: Override for forced installs, ``None`` keeps the config value.
            extra_files: Extra files appended to the configured ones.
            package_folders: Extra package folders appended to the configured ones.

        Returns:
            SyncOptions: Options ready for the orchestrator.
        """

        return SyncOptions(
            recursive=self.recursive if recursive is None else recursive,
            force_install=self.force_install if force_install is None else force_install,
            extra_files=(*self.extra_files, *extra_files),
            package_folders=(*self.package_folders, *package_folders),
        )


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return SyncConfig().model_dump(mode="python")

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource:
    """Load configuration data from a TOML document with include support."""

    def __init__(
        self,
        path: Path,
        *,
        section: tuple[str, ...] = (),
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = str(path)
        self._section = section
        self._include_key = include_key
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        if not path.exists():
            return {}
        if path in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, path))
            raise ConfigError(f"Circular include detected: {include_chain}")
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        document = dict(self._select_section(data, path))
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, path.parent):
            merged = _deep_merge(merged, self._load(include_path, stack + (path,)))
        anchored = _anchor_paths(_expand_env(document, self._env), path.parent)
        return _deep_merge(merged, anchored)

    def _select_section(self, data: Mapping[str, Any], path: Path) -> Mapping[str, Any]:
        current: Any = data
        for key in self._section:
            if not isinstance(current, Mapping):
                return {}
            current = current.get(key)
        if current is None:
            return {}
        if not isinstance(current, MutableMapping):
            raise ConfigError(f"Configuration at {path} must be a table")
        return current

    def _coerce_includes(self, raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            return [_resolve_path(Path(raw), base_dir)]
        if isinstance(raw, list):
            return [_resolve_path(Path(item), base_dir) for item in raw]
        raise ConfigError(f"Unsupported include declaration: {raw!r}")

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.clonesync]`` within ``pyproject.toml``."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        super().__init__(path, section=PYPROJECT_SECTION, env=env)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, sources: Sequence[DefaultConfigSource | TomlConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, env: Mapping[str, str] | None = None) -> ConfigLoader:
        """Build a loader reading defaults, ``pyproject.toml``, then ``.clonesync.toml``.

        Args:
            project_root: Folder holding the configuration files.
            env: Environment used for ``$VAR`` expansion; defaults to ``os.environ``.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        return cls(
            [
                DefaultConfigSource(),
                PyProjectConfigSource(root / PYPROJECT_FILE_NAME, env=env),
                TomlConfigSource(root / PROJECT_CONFIG_FILE_NAME, env=env),
            ],
        )

    def load(self) -> SyncConfig:
        merged: dict[str, Any] = {}
        for source in self._sources:
            merged = _deep_merge(merged, source.load())
        try:
            return SyncConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(project_root: Path) -> SyncConfig:
    """Return the configuration in effect for ``project_root``."""

    return ConfigLoader.for_root(project_root).load()


def _resolve_path(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else (base_dir / path)


def _anchor_paths(document: Mapping[str, Any], base_dir: Path) -> dict[str, Any]:
    anchored = dict(document)
    extra_files = anchored.get("extra_files")
    if isinstance(extra_files, list):
        anchored["extra_files"] = [_resolve_path(Path(str(item)), base_dir) for item in extra_files]
    folders = anchored.get("package_folders")
    if isinstance(folders, list):
        anchored["package_folders"] = [_anchor_folder(entry, base_dir) for entry in folders]
    return anchored


def _anchor_folder(entry: Any, base_dir: Path) -> Any:
    if isinstance(entry, str):
        return {"path": _resolve_path(Path(entry), base_dir)}
    if isinstance(entry, Mapping) and "path" in entry:
        return {**entry, "path": _resolve_path(Path(str(entry["path"])), base_dir)}
    return entry


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "ConfigError",
    "ConfigLoader",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "SyncConfig",
    "TomlConfigSource",
    "load_config",
]
