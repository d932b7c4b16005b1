"""Run the compiler toolchain for a :class:`~gooseboy.models.BuildRequest`.

The toolchain is invoked as a single blocking subprocess with stdout and
stderr inherited from gooseboy, so the user sees cargo's own progress and
diagnostics exactly as cargo prints them. gooseboy never reads or rewrites
that output; only the exit status is interpreted.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from gooseboy.exceptions import CompileFailed, InvalidCrate, ToolchainMissing
from gooseboy.models import BuildProfile, BuildRequest, BuildResult
from gooseboy.output import debug, info
from gooseboy.pipeline.manifest import MANIFEST_NAME


def toolchain_args(request: BuildRequest, toolchain: str = "cargo") -> list[str]:
    """Return the argv for building *request*.

    Example::

        >>> toolchain_args(BuildRequest(crate_root=Path("."), profile="release"))
        ['cargo', 'build', '--release']
    """
    args = [toolchain, "build"]
    if request.profile == BuildProfile.RELEASE:
        args.append("--release")
    if request.target_triple:
        args.extend(["--target", request.target_triple])
    return args


def _check_crate_root(crate_root: Path) -> None:
    if not crate_root.is_dir():
        raise InvalidCrate(f"{crate_root} is not a directory")
    if not (crate_root / MANIFEST_NAME).is_file():
        raise InvalidCrate(f"no {MANIFEST_NAME} in {crate_root}")


def build(request: BuildRequest, toolchain: str = "cargo") -> BuildResult:
    """Compile the crate described by *request*.

    Args:
        request: Crate root, profile and optional target triple.
        toolchain: Toolchain executable name or path.

    Returns:
        A successful :class:`~gooseboy.models.BuildResult` whose
        ``output_dir`` is where cargo placed the final artifacts.

    Raises:
        InvalidCrate: If the crate root is not a directory with a manifest.
            Checked before anything is spawned.
        ToolchainMissing: If *toolchain* is not on ``PATH``.
        CompileFailed: If the toolchain exits non-zero. Not retried.
    """
    _check_crate_root(request.crate_root)
    if shutil.which(toolchain) is None:
        raise ToolchainMissing(toolchain)

    args = toolchain_args(request, toolchain)
    info(f"Building {request.crate_root.name} ({request.profile.value})...")
    debug(f"running `{' '.join(args)}` at {request.crate_root}")

    try:
        completed = subprocess.run(args, cwd=request.crate_root)
    except FileNotFoundError:
        raise ToolchainMissing(toolchain) from None

    if completed.returncode != 0:
        raise CompileFailed(completed.returncode)

    return BuildResult(
        success=True,
        exit_code=completed.returncode,
        output_dir=request.output_dir,
    )
