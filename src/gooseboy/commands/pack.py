"""Pack command -- compile a plugin crate and install it for the game.

Implements ``gooseboy pack``: build, find the compiled library in the
output directory, and copy it into the mod directory (``~/.gooseboy`` by
default) under its canonical crate name. The run is all-or-nothing; any
stage failing exits non-zero with a stage-specific code.

The installed path is printed to stdout so scripts can capture it::

    $ gooseboy pack --release
    /home/me/.gooseboy/my_plugin
"""

from __future__ import annotations

from typing import Optional

import typer

from gooseboy.commands import fail
from gooseboy.commands.build import prepare_request
from gooseboy.exceptions import ArtifactNotFound, GooseboyError
from gooseboy.output import (
    OutputFormat,
    format_response,
    get_output,
    info,
    print_data,
    success,
    suggest,
)


def pack_command(
    ctx: typer.Context,
    package: Optional[str] = typer.Argument(
        None, help="Crate directory or workspace package name. [default: .]"
    ),
    destination: Optional[str] = typer.Argument(
        None, help="Install directory. [default: ~/.gooseboy]"
    ),
    release: bool = typer.Option(
        False, "--release", "-r", help="Build with the release profile."
    ),
    target: Optional[str] = typer.Option(
        None, "--target", help="Target triple, e.g. wasm32-unknown-unknown."
    ),
    no_copy: bool = typer.Option(
        False, "--no-copy", help="Build and locate the library but do not install it."
    ),
) -> None:
    """Build a plugin crate and install it into the mod directory.

    Example::

        gooseboy pack
        gooseboy pack --release
        gooseboy pack my-plugin ./mods --target wasm32-unknown-unknown
    """
    from gooseboy.config import config_from_context, resolve_destination
    from gooseboy.pipeline import build, install, locate
    from gooseboy.pipeline.installer import install_target
    from gooseboy.pipeline.locator import convention_for_target

    config = config_from_context(ctx.obj)
    try:
        meta, request = prepare_request(config, package, release, target)
        result = build(request, config.toolchain)
        try:
            artifact = locate(result.output_dir, meta.artifact_name)
        except ArtifactNotFound:
            expected = convention_for_target(target).file_name(meta.artifact_name)
            if meta.crate_types and not meta.is_dynamic_library:
                suggest('Add crate-type = ["cdylib"] under [lib] in Cargo.toml')
            suggest(f"Expected {expected} in {result.output_dir}")
            raise
        destination_dir = resolve_destination(config, destination)
        if no_copy:
            planned = install_target(artifact, destination_dir)
            info(f"Skipping install (--no-copy); would write {planned.path}")
            installed = None
        else:
            installed = install(artifact, destination_dir).path
    except GooseboyError as exc:
        fail(exc)

    if installed is not None:
        success(f"Installed {meta.name} -> {installed}")

    if get_output().format == OutputFormat.JSON:
        format_response(
            {
                "crate": meta.name,
                "artifact": str(artifact.source_path),
                "installed": str(installed) if installed is not None else None,
            }
        )
    else:
        print_data(str(installed if installed is not None else artifact.source_path))
