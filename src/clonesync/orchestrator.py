# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Synchronise cloned dependency versions across a workspace of packages."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path

from .constants import (
    DEPENDENCY_SECTIONS,
    EXIT_EXTRA_FILE_MISSING,
    EXIT_MANIFEST_NOT_FOUND,
    EXIT_SUCCESS,
    LOCK_FILE_NAME,
    MANIFEST_FILE_NAME,
)
from .context import SyncContext
from .errors import ManifestError
from .extra_files import update_extra_file
from .filesystem import best_effort_resolve, path_key
from .manifest import (
    PackageManifest,
    find_manifest_file,
    read_lock,
    read_manifest,
    remove_resolved_entries,
    write_lock,
    write_manifest,
)
from .models import ClonedPackage, DependencyEdit, DependencyType, PackageFolderConfig, SyncOptions, SyncResult
from .resolver import resolve_target_version

PackageRequest = PackageFolderConfig | str | PathLike[str]


class SyncOrchestrator:
    """Rewrite cloned dependencies of the requested packages and everything they reach."""

    def __init__(self, context: SyncContext | None = None) -> None:
        self._context = context or SyncContext()

    @property
    def context(self) -> SyncContext:
        return self._context

    def run(
        self,
        package_paths: Sequence[PackageRequest],
        dependency_type: DependencyType,
        options: SyncOptions | None = None,
    ) -> SyncResult:
        """Synchronise dependency versions starting from ``package_paths``.

        Args:
            package_paths: Package folders (or paths inside them) to start from.
            dependency_type: Policy used to compute target versions.
            options: Recursion, install, and extra file settings.

        Returns:
            SyncResult: Exit code plus the edits, installs, and file updates made.

        """

        opts = options or SyncOptions()
        result = SyncResult()

        roots = self._register_requested_packages(_merge_requests(package_paths, opts.package_folders))
        if roots is None:
            result.exit_code = EXIT_MANIFEST_NOT_FOUND
            return result

        install_folders = self._visit(roots, dependency_type, opts, result)

        if not self._run_installs(install_folders, result):
            return result

        self._update_extra_files(opts.extra_files, result)
        return result

    def _register_requested_packages(self, requests: Iterable[PackageFolderConfig]) -> list[Path] | None:
        context = self._context
        roots: list[Path] = []
        registered: list[tuple[str, ClonedPackage]] = []
        for request in requests:
            manifest_path = find_manifest_file(best_effort_resolve(request.path), context.filesystem)
            if manifest_path is None:
                context.logger.error(
                    f"Could not find a {MANIFEST_FILE_NAME} at or above the provided package path ({request.path}).",
                )
                return None
            folder = manifest_path.parent
            name = _require_name(read_manifest(manifest_path, context.filesystem), manifest_path)
            registered.append((name, ClonedPackage.from_folder_config(folder, request)))
            if folder not in roots:
                roots.append(folder)
        for name, package in registered:
            context.remember(name, package)
        return roots

    def _visit(
        self,
        roots: list[Path],
        dependency_type: DependencyType,
        options: SyncOptions,
        result: SyncResult,
    ) -> list[Path]:
        to_visit: deque[Path] = deque()
        seen: set[str] = set()
        for folder in roots:
            key = path_key(folder)
            if key not in seen:
                seen.add(key)
                to_visit.append(folder)

        install_folders: list[Path] = []
        while to_visit:
            folder = to_visit.popleft()
            manifest, package, edits = self._update_package_folder(folder, dependency_type)
            result.register_processed(folder, edits)

            if self._persist_changes(folder, manifest, edits) or options.force_install:
                if package.run_install:
                    install_folders.append(folder)

            if options.recursive:
                for dependency_name in manifest.dependency_names():
                    dependency = self._context.lookup(dependency_name)
                    if dependency is None or dependency.updated:
                        continue
                    key = path_key(dependency.path)
                    if key not in seen:
                        seen.add(key)
                        to_visit.append(dependency.path)
        return install_folders

    def _update_package_folder(
        self,
        folder: Path,
        dependency_type: DependencyType,
    ) -> tuple[PackageManifest, ClonedPackage, list[DependencyEdit]]:
        context = self._context
        context.logger.section(f'Updating package folder "{folder}"...')

        manifest_path = folder / MANIFEST_FILE_NAME
        manifest = read_manifest(manifest_path, context.filesystem)
        name = _require_name(manifest, manifest_path)
        package = context.lookup(name)
        if package is None:
            package = ClonedPackage(path=folder)
            context.remember(name, package)
        package.updated = True

        edits: list[DependencyEdit] = []
        for section_key in DEPENDENCY_SECTIONS:
            dependencies = manifest.section(section_key)
            if dependencies is None:
                continue
            for dependency_name, current_version in list(dependencies.items()):
                if package.ignores(dependency_name):
                    continue
                target_version = resolve_target_version(package, dependency_name, dependency_type, context)
                if target_version and target_version != current_version:
                    context.logger.info(
                        f'  Changing "{dependency_name}" from "{current_version}" to "{target_version}"...',
                    )
                    dependencies[dependency_name] = target_version
                    edits.append(
                        DependencyEdit(
                            folder=folder,
                            section=section_key,
                            name=dependency_name,
                            old_version=str(current_version),
                            new_version=target_version,
                        ),
                    )
        return manifest, package, edits

    def _persist_changes(self, folder: Path, manifest: PackageManifest, edits: list[DependencyEdit]) -> bool:
        context = self._context
        if not edits:
            context.logger.info("  No changes made.")
            return False

        write_manifest(manifest, folder / MANIFEST_FILE_NAME, context.filesystem)
        lock_path = folder / LOCK_FILE_NAME
        if context.filesystem.file_exists(lock_path):
            lock = read_lock(lock_path, context.filesystem)
            remove_resolved_entries(lock, *(edit.name for edit in edits))
            write_lock(lock, lock_path, context.filesystem)
        return True

    def _run_installs(self, folders: list[Path], result: SyncResult) -> bool:
        context = self._context
        for folder in folders:
            context.logger.section(f'Installing dependencies in "{folder}"...')
            exit_code = context.installer.run_install(folder)
            if exit_code != EXIT_SUCCESS:
                context.logger.error(f'Install in "{folder}" failed with exit code {exit_code}.')
                result.exit_code = exit_code
                return False
            result.register_install(folder)
        return True

    def _update_extra_files(self, extra_files: Sequence[Path], result: SyncResult) -> None:
        context = self._context
        for extra_file in extra_files:
            if not context.filesystem.file_exists(extra_file):
                context.logger.error(f'The extra file to update "{extra_file}" doesn\'t exist.')
                result.exit_code = EXIT_EXTRA_FILE_MISSING
                return
            if update_extra_file(extra_file, context):
                result.register_updated_file(extra_file)


def sync(
    package_paths: Sequence[PackageRequest],
    dependency_type: DependencyType,
    options: SyncOptions | None = None,
    *,
    context: SyncContext | None = None,
) -> int:
    """Run a synchronisation and return its exit code.

    Args:
        package_paths: Package folders (or paths inside them) to start from.
        dependency_type: Policy used to compute target versions.
        options: Recursion, install, and extra file settings.
        context: Run context; a fresh one is created when omitted.

    Returns:
        int: ``0`` on success, ``1`` when a requested manifest is missing, ``2``
        when an extra file is missing, or the failing install's exit code.

    """

    return SyncOrchestrator(context).run(package_paths, dependency_type, options).exit_code


def _merge_requests(
    package_paths: Sequence[PackageRequest],
    package_folders: Sequence[PackageFolderConfig],
) -> list[PackageFolderConfig]:
    """Combine positional paths with configured folders, one entry per path.

    A bare path that also appears in ``package_folders`` picks up that folder's
    settings.
    """

    merged: dict[str, PackageFolderConfig] = {}
    explicit: set[str] = set()
    for entry in [*package_paths, *package_folders]:
        config = PackageFolderConfig.coerce(entry)
        key = path_key(config.path)
        if key in merged and (key in explicit or not isinstance(entry, PackageFolderConfig)):
            continue
        merged[key] = config
        if isinstance(entry, PackageFolderConfig):
            explicit.add(key)
    return list(merged.values())


def _require_name(manifest: PackageManifest, manifest_path: Path) -> str:
    if not manifest.name:
        raise ManifestError(manifest_path, "package name is missing")
    return manifest.name


__all__ = ["PackageRequest", "SyncOrchestrator", "sync"]
