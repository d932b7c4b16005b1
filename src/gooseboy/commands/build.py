"""Build command -- compile a plugin crate without installing it.

Implements ``gooseboy build``. The crate is resolved from the optional
``PACKAGE`` argument (a path, or the name of a workspace member), its
metadata is read from cargo, and ``cargo build`` runs with the requested
profile and target. Cargo's output goes straight to the terminal.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gooseboy.commands import fail
from gooseboy.exceptions import GooseboyError
from gooseboy.models import BuildProfile, BuildRequest, CrateMetadata, GooseboyConfig
from gooseboy.output import debug, success


def prepare_request(
    config: GooseboyConfig,
    package: Optional[str],
    release: bool,
    target: Optional[str],
) -> tuple[CrateMetadata, BuildRequest]:
    """Resolve the crate and describe the build to run.

    Shared by ``build`` and ``pack``.

    Raises:
        InvalidCrate: If the crate cannot be resolved or has no manifest.
        ToolchainMissing: If cargo is not on ``PATH``.
    """
    from gooseboy.pipeline import crate_metadata, resolve_crate_root

    crate_root = resolve_crate_root(package, Path.cwd(), config.toolchain)
    meta = crate_metadata(crate_root, config.toolchain)
    debug(f"crate '{meta.name}' at {meta.crate_root}, target dir {meta.target_directory}")

    request = BuildRequest(
        crate_root=crate_root,
        profile=BuildProfile.RELEASE if release else BuildProfile.DEBUG,
        target_triple=target,
        target_dir=meta.target_directory,
    )
    return meta, request


def build_command(
    ctx: typer.Context,
    package: Optional[str] = typer.Argument(
        None, help="Crate directory or workspace package name. [default: .]"
    ),
    release: bool = typer.Option(
        False, "--release", "-r", help="Build with the release profile."
    ),
    target: Optional[str] = typer.Option(
        None, "--target", help="Target triple, e.g. wasm32-unknown-unknown."
    ),
) -> None:
    """Compile a plugin crate.

    Example::

        gooseboy build
        gooseboy build --release my-plugin
    """
    from gooseboy.config import config_from_context
    from gooseboy.pipeline import build

    config = config_from_context(ctx.obj)
    try:
        meta, request = prepare_request(config, package, release, target)
        result = build(request, config.toolchain)
    except GooseboyError as exc:
        fail(exc)

    success(f"Built {meta.name} ({request.profile.value})")
    debug(f"output directory: {result.output_dir}")
