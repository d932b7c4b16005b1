"""Find the compiled plugin library in a build output directory.

Cargo names a ``cdylib`` differently on each platform:

=========  ========================
Platform   File for ``my-plugin``
=========  ========================
Linux/BSD  ``libmy_plugin.so``
macOS      ``libmy_plugin.dylib``
Windows    ``my_plugin.dll``
wasm32     ``my_plugin.wasm``
=========  ========================

:func:`locate` checks every convention, not just the host's, and insists
on exactly one match. Only the top level of the output directory is
searched: ``deps/``, ``build/`` and ``incremental/`` hold intermediate
copies that must never be picked up.
"""

from __future__ import annotations

import platform
from pathlib import Path
from typing import NamedTuple, Optional

from gooseboy.exceptions import AmbiguousArtifact, ArtifactNotFound
from gooseboy.models import ArtifactDescriptor, normalize_crate_name
from gooseboy.output import debug


class DylibConvention(NamedTuple):
    """File-name prefix and extension of a dynamic library on one platform."""

    prefix: str
    extension: str

    def file_name(self, crate_name: str) -> str:
        return f"{self.prefix}{crate_name}{self.extension}"


LINUX = DylibConvention("lib", ".so")
MACOS = DylibConvention("lib", ".dylib")
WINDOWS = DylibConvention("", ".dll")
WASM = DylibConvention("", ".wasm")

CONVENTIONS: tuple[DylibConvention, ...] = (LINUX, MACOS, WINDOWS, WASM)


def host_convention(system: Optional[str] = None) -> DylibConvention:
    """Return the convention of the running OS (or of *system*, if given)."""
    system = system or platform.system()
    if system == "Darwin":
        return MACOS
    if system == "Windows":
        return WINDOWS
    return LINUX


def convention_for_target(target_triple: Optional[str]) -> DylibConvention:
    """Return the convention cargo uses when building for *target_triple*."""
    if not target_triple:
        return host_convention()
    if target_triple.startswith("wasm32") or target_triple.startswith("wasm64"):
        return WASM
    if "windows" in target_triple:
        return WINDOWS
    if "apple" in target_triple:
        return MACOS
    return LINUX


def locate(output_dir: Path, crate_name: str) -> ArtifactDescriptor:
    """Find the single dynamic library for *crate_name* in *output_dir*.

    Args:
        output_dir: Cargo's per-profile output directory.
        crate_name: Declared crate name; hyphens are normalised to
            underscores.

    Returns:
        The descriptor of the one matching file.

    Raises:
        ArtifactNotFound: If no file matches (or *output_dir* is missing).
        AmbiguousArtifact: If more than one file matches.
    """
    name = normalize_crate_name(crate_name)
    if not output_dir.is_dir():
        raise ArtifactNotFound(output_dir, name)

    wanted = {conv.file_name(name): conv for conv in CONVENTIONS}
    matches: list[tuple[Path, DylibConvention]] = []
    for entry in sorted(output_dir.iterdir()):
        conv = wanted.get(entry.name)
        if conv is not None and entry.is_file():
            matches.append((entry, conv))

    debug(f"artifact candidates in {output_dir}: {[p.name for p, _ in matches]}")

    if not matches:
        raise ArtifactNotFound(output_dir, name)
    if len(matches) > 1:
        raise AmbiguousArtifact(name, [p for p, _ in matches])

    path, conv = matches[0]
    return ArtifactDescriptor(
        source_path=path,
        logical_name=name,
        platform_prefix=conv.prefix,
        platform_extension=conv.extension,
    )
