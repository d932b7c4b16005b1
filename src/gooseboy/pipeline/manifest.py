"""Read crate metadata from the toolchain.

Rather than parsing ``Cargo.toml`` directly, gooseboy asks cargo itself::

    cargo metadata --format-version 1 --no-deps

This respects workspaces, ``[lib] name = ...`` overrides and
``CARGO_TARGET_DIR`` without gooseboy having to know about any of them.

The public functions are:

* :func:`read_metadata` -- run the command and return the parsed JSON.
* :func:`crate_metadata` -- pick the package owning a given crate root.
* :func:`resolve_crate_root` -- turn the CLI's ``PACKAGE`` argument (a
  path or a workspace package name) into a crate root.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any, Optional

from gooseboy.exceptions import InvalidCrate, ToolchainMissing
from gooseboy.models import CrateMetadata
from gooseboy.output import debug

MANIFEST_NAME = "Cargo.toml"

_LIBRARY_KINDS = ("cdylib", "dylib", "lib", "rlib", "staticlib")


def read_metadata(crate_root: Path, toolchain: str = "cargo") -> dict[str, Any]:
    """Run ``cargo metadata`` in *crate_root* and return the decoded document.

    Args:
        crate_root: Directory to run the command in.
        toolchain: Toolchain executable name or path.

    Returns:
        The metadata document as a dict.

    Raises:
        ToolchainMissing: If *toolchain* cannot be executed.
        InvalidCrate: If the command fails or prints something other than
            a JSON object.
    """
    if shutil.which(toolchain) is None:
        raise ToolchainMissing(toolchain)

    args = [toolchain, "metadata", "--format-version", "1", "--no-deps"]
    debug(f"running `{' '.join(args)}` at {crate_root}")
    try:
        result = subprocess.run(
            args,
            cwd=crate_root,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise ToolchainMissing(toolchain) from None

    if result.returncode != 0:
        tail = "\n".join(result.stderr.strip().splitlines()[-5:])
        raise InvalidCrate(f"could not read crate metadata at {crate_root}: {tail}")

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise InvalidCrate(f"unreadable metadata from {toolchain}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidCrate(f"unexpected metadata from {toolchain}")
    return data


def _same_path(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return a == b


def _find_package(
    metadata: dict[str, Any], manifest: Path
) -> Optional[dict[str, Any]]:
    for pkg in metadata.get("packages") or []:
        path = pkg.get("manifest_path")
        if path and _same_path(Path(path), manifest):
            return pkg
    return None


def _library_target(package: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Return the package's library target, if it declares one."""
    for target in package.get("targets") or []:
        kinds = target.get("kind") or []
        if any(kind in _LIBRARY_KINDS for kind in kinds):
            return target
    return None


def crate_metadata(crate_root: Path, toolchain: str = "cargo") -> CrateMetadata:
    """Describe the crate whose manifest lives directly in *crate_root*.

    Raises:
        InvalidCrate: If *crate_root* has no manifest or metadata does not
            list a package for it.
        ToolchainMissing: If *toolchain* cannot be executed.
    """
    manifest = crate_root / MANIFEST_NAME
    if not manifest.is_file():
        raise InvalidCrate(f"no {MANIFEST_NAME} in {crate_root}")

    metadata = read_metadata(crate_root, toolchain)
    package = _find_package(metadata, manifest)
    if package is None:
        raise InvalidCrate(f"{manifest} is not a package (virtual workspace manifest?)")

    target_directory = metadata.get("target_directory")
    lib = _library_target(package)
    return CrateMetadata(
        name=package["name"],
        manifest_path=Path(package["manifest_path"]),
        target_directory=Path(target_directory) if target_directory else crate_root / "target",
        lib_name=lib.get("name") if lib else None,
        crate_types=list(lib.get("crate_types") or []) if lib else [],
    )


def resolve_crate_root(
    arg: Optional[str], cwd: Path, toolchain: str = "cargo"
) -> Path:
    """Resolve the CLI ``PACKAGE`` argument to a crate root directory.

    * ``None`` -- the current directory.
    * An existing path -- that directory, or the parent of a manifest file.
    * Anything else -- a package name looked up among the workspace
      members reported by metadata at *cwd*.

    Raises:
        InvalidCrate: If a package name does not match any workspace member.
    """
    if arg is None:
        return cwd.resolve()

    candidate = Path(arg).expanduser()
    if not candidate.is_absolute():
        candidate = cwd / candidate
    if candidate.exists():
        candidate = candidate.resolve()
        return candidate.parent if candidate.is_file() else candidate

    metadata = read_metadata(cwd, toolchain)
    for pkg in metadata.get("packages") or []:
        if pkg.get("name") == arg and pkg.get("manifest_path"):
            root = Path(pkg["manifest_path"]).parent
            debug(f"package '{arg}' resolved to {root}")
            return root
    raise InvalidCrate(f"no path or workspace package named '{arg}'")
