# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command reporting whether a package version has been published."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ....constants import MANIFEST_FILE_NAME
from ....logging import fail, ok, warn
from ....manifest import find_manifest_file, is_manifest_published, read_manifest
from ....npm import NpmRegistry
from ...shared import EMOJI_OPTION, RUN_FAILURES

PATH_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Package folder (or a path inside it) to check.", show_default=False),
]


def published_command(
    path: PATH_ARGUMENT = Path("."),
    emoji: EMOJI_OPTION = True,
) -> None:
    """Exit 0 when the package's name@version exists in the registry, 1 otherwise."""

    manifest_path = find_manifest_file(path.resolve())
    if manifest_path is None:
        fail(f"Could not find a {MANIFEST_FILE_NAME} at or above {path}.", use_emoji=emoji)
        raise typer.Exit(code=1)
    try:
        manifest = read_manifest(manifest_path)
        published = is_manifest_published(manifest, NpmRegistry())
    except RUN_FAILURES as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc

    label = f"{manifest.name or '<unnamed>'}@{manifest.version or '<unversioned>'}"
    if published:
        ok(f"{label} is published.", use_emoji=emoji)
        raise typer.Exit(code=0)
    warn(f"{label} is not published.", use_emoji=emoji)
    raise typer.Exit(code=1)


__all__ = ["published_command"]
