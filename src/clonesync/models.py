# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data model shared by the locator, resolver, and orchestrator."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import EXIT_SUCCESS


class DependencyType(Enum):
    """Policy deciding which version string is written into a manifest."""

    LOCAL = "local"
    LATEST = "latest"


def _coerce_names(value: object) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset((value,))
    if isinstance(value, Iterable):
        return frozenset(str(entry) for entry in value)
    raise TypeError("dependency names must be a sequence of strings")


class PackageFolderConfig(BaseModel):
    """User supplied settings for one requested package folder."""

    model_config = ConfigDict(frozen=True)

    path: Path
    run_install: bool = True
    default_version: str | None = None
    dependencies_to_ignore: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("dependencies_to_ignore", mode="before")
    @classmethod
    def _coerce_ignored(cls, value: object) -> frozenset[str]:
        return _coerce_names(value)

    @classmethod
    def coerce(cls, value: PackageFolderConfig | str | PathLike[str]) -> PackageFolderConfig:
        """Return ``value`` as a config, wrapping bare paths with default settings."""

        if isinstance(value, PackageFolderConfig):
            return value
        return cls(path=Path(value))


class ClonedPackage(BaseModel):
    """Run-scoped record for a package whose source is checked out locally."""

    model_config = ConfigDict(validate_assignment=True)

    path: Path
    run_install: bool = True
    default_version: str | None = None
    dependencies_to_ignore: frozenset[str] = Field(default_factory=frozenset)
    target_version: str | None = None
    target_resolved: bool = False
    updated: bool = False

    @classmethod
    def from_folder_config(cls, path: Path, config: PackageFolderConfig | None) -> ClonedPackage:
        if config is None:
            return cls(path=path)
        return cls(
            path=path,
            run_install=config.run_install,
            default_version=config.default_version,
            dependencies_to_ignore=config.dependencies_to_ignore,
        )

    def ignores(self, dependency_name: str) -> bool:
        return dependency_name in self.dependencies_to_ignore


class DependencyEdit(BaseModel):
    """A single dependency version rewrite applied to a manifest."""

    model_config = ConfigDict(frozen=True)

    folder: Path
    section: str
    name: str
    old_version: str
    new_version: str


class SyncOptions(BaseModel):
    """Optional knobs accepted by :func:`clonesync.orchestrator.sync`."""

    model_config = ConfigDict(frozen=True)

    recursive: bool = True
    force_install: bool = False
    extra_files: tuple[Path, ...] = ()
    package_folders: tuple[PackageFolderConfig, ...] = ()

    @field_validator("package_folders", mode="before")
    @classmethod
    def _coerce_folders(cls, value: object) -> tuple[PackageFolderConfig, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, PathLike, PackageFolderConfig)):
            return (PackageFolderConfig.coerce(value),)
        if isinstance(value, Iterable):
            folders: list[PackageFolderConfig] = []
            for entry in value:
                if isinstance(entry, dict):
                    folders.append(PackageFolderConfig.model_validate(entry))
                else:
                    folders.append(PackageFolderConfig.coerce(entry))
            return tuple(folders)
        raise TypeError("package_folders must be a sequence of paths or folder configs")

    @field_validator("extra_files", mode="before")
    @classmethod
    def _coerce_extra_files(cls, value: object) -> tuple[Path, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, PathLike)):
            return (Path(value),)
        if isinstance(value, Iterable):
            return tuple(Path(entry) for entry in value)
        raise TypeError("extra_files must be a sequence of paths")


class SyncResult(BaseModel):
    """Outcome of a synchronisation run."""

    model_config = ConfigDict(validate_assignment=True)

    exit_code: int = EXIT_SUCCESS
    edits: list[DependencyEdit] = Field(default_factory=list)
    processed: list[Path] = Field(default_factory=list)
    installed: list[Path] = Field(default_factory=list)
    updated_files: list[Path] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == EXIT_SUCCESS

    def register_processed(self, folder: Path, edits: list[DependencyEdit]) -> None:
        self.processed = [*self.processed, folder]
        self.edits = [*self.edits, *edits]

    def register_install(self, folder: Path) -> None:
        self.installed = [*self.installed, folder]

    def register_updated_file(self, path: Path) -> None:
        self.updated_files = [*self.updated_files, path]

    def edits_for(self, folder: Path) -> list[DependencyEdit]:
        return [edit for edit in self.edits if edit.folder == folder]


__all__ = [
    "ClonedPackage",
    "DependencyEdit",
    "DependencyType",
    "PackageFolderConfig",
    "SyncOptions",
    "SyncResult",
]
