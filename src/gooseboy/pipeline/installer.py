"""Install a located artifact into the mod directory.

The installed file is named after the crate alone (``my_plugin``, not
``libmy_plugin.so``) so the game's plugin loader sees the same name on
every host OS.

Copies go through a temporary file in the destination directory that is
renamed over the final path with :func:`os.replace`. A reader of the mod
directory therefore sees either the previous file or the complete new
one, never a truncated copy.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from gooseboy.exceptions import CopyFailed, DestinationUnavailable
from gooseboy.models import ArtifactDescriptor, InstallTarget
from gooseboy.output import debug


def install_target(artifact: ArtifactDescriptor, destination_dir: Path) -> InstallTarget:
    """Compute where *artifact* will be installed. No filesystem access."""
    return InstallTarget(destination_dir=destination_dir, final_name=artifact.logical_name)


def _ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationUnavailable(f"cannot create {path}: {exc}") from exc
    if not path.is_dir():
        raise DestinationUnavailable(f"{path} is not a directory")


def _atomic_copy(source: Path, dest: Path) -> None:
    """Copy *source* to *dest* via a temp file + rename.

    The temp file is created next to *dest* so ``os.replace`` is a rename
    within one filesystem. On any failure the temp file is removed and
    *dest* is left as it was.
    """
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="wb",
            dir=dest.parent,
            prefix=f".{dest.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = fd.name
        with open(source, "rb") as src:
            shutil.copyfileobj(src, fd)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in the handler
        shutil.copymode(source, tmp_path)
        os.replace(tmp_path, dest)
    except BaseException as exc:
        # Clean up on any error, including KeyboardInterrupt.
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        if isinstance(exc, OSError):
            raise CopyFailed(f"copying {source.name} to {dest} failed: {exc}") from exc
        raise


def install(artifact: ArtifactDescriptor, destination_dir: Path) -> InstallTarget:
    """Copy *artifact* into *destination_dir* under its canonical name.

    Creates *destination_dir* (with parents) if needed and overwrites any
    existing file of the same name. Running it twice with the same artifact
    leaves a byte-identical file and no temporary files behind.

    Args:
        artifact: The library found by :func:`~gooseboy.pipeline.locator.locate`.
        destination_dir: Directory to install into.

    Returns:
        The :class:`~gooseboy.models.InstallTarget` that was written.

    Raises:
        DestinationUnavailable: If *destination_dir* cannot be created.
        CopyFailed: If reading the artifact or writing the copy fails.
    """
    target = install_target(artifact, destination_dir)
    _ensure_directory(destination_dir)

    debug(f"copying {artifact.source_path} to {target.path}")
    _atomic_copy(artifact.source_path, target.path)
    return target
