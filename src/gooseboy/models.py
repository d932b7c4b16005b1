"""Canonical Pydantic models shared across gooseboy modules.

The models fall into two groups:

**Configuration** -- :class:`GooseboyConfig`, resolved once per invocation
and passed down through the Typer context.

**Pipeline values** -- :class:`BuildRequest`, :class:`BuildResult`,
:class:`CrateMetadata`, :class:`ArtifactDescriptor` and
:class:`InstallTarget`. Each is created by one pipeline stage and consumed
by the next. They are frozen; nothing is persisted between runs.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def normalize_crate_name(name: str) -> str:
    """Return *name* the way the toolchain spells it in output file names.

    Cargo replaces hyphens in package names with underscores when naming
    compiled artifacts, so ``my-plugin`` becomes ``my_plugin``.
    """
    return name.replace("-", "_")


# --- Configuration ---


class GooseboyConfig(BaseModel):
    """Per-invocation configuration.

    ``home_dir`` is injected rather than read from the environment at use
    sites, so tests can point the mod directory at a temporary path.

    Example::

        GooseboyConfig(home_dir=Path("/home/me"))
        # mod_dir == /home/me/.gooseboy
    """

    model_config = ConfigDict(frozen=True)

    home_dir: Path
    toolchain: str = Field(default="cargo", description="Toolchain executable")
    mod_dir_name: str = Field(
        default=".gooseboy", description="Mod directory name under home_dir"
    )

    @property
    def mod_dir(self) -> Path:
        """Directory the host game's plugin loader reads crates from."""
        return self.home_dir / self.mod_dir_name


# --- Build ---


class BuildProfile(str, enum.Enum):
    """Cargo build profile."""

    DEBUG = "debug"
    RELEASE = "release"


class BuildRequest(BaseModel):
    """Everything the orchestrator needs to run one build.

    ``target_dir`` defaults to ``<crate_root>/target``; the manifest reader
    fills it from ``cargo metadata`` so workspace members build into the
    workspace's shared target directory.
    """

    model_config = ConfigDict(frozen=True)

    crate_root: Path
    profile: BuildProfile = BuildProfile.DEBUG
    target_triple: Optional[str] = None
    target_dir: Optional[Path] = None

    @property
    def resolved_target_dir(self) -> Path:
        return self.target_dir if self.target_dir is not None else self.crate_root / "target"

    @property
    def output_dir(self) -> Path:
        """Where cargo places final artifacts for this profile and target.

        ``target/<profile>`` for host builds and
        ``target/<triple>/<profile>`` when a target triple is given.
        """
        base = self.resolved_target_dir
        if self.target_triple:
            base = base / self.target_triple
        return base / self.profile.value


class BuildResult(BaseModel):
    """Outcome of a finished toolchain run."""

    model_config = ConfigDict(frozen=True)

    success: bool
    exit_code: int
    output_dir: Path


# --- Crate metadata ---


class CrateMetadata(BaseModel):
    """The subset of ``cargo metadata`` output gooseboy relies on."""

    model_config = ConfigDict(frozen=True)

    name: str
    manifest_path: Path
    target_directory: Path
    lib_name: Optional[str] = None
    crate_types: list[str] = Field(default_factory=list)

    @property
    def crate_root(self) -> Path:
        return self.manifest_path.parent

    @property
    def artifact_name(self) -> str:
        """Normalised stem of the compiled library file."""
        return normalize_crate_name(self.lib_name or self.name)

    @property
    def is_dynamic_library(self) -> bool:
        return "cdylib" in self.crate_types or "dylib" in self.crate_types


# --- Artifacts ---


class ArtifactDescriptor(BaseModel):
    """One compiled artifact found in the build output.

    ``logical_name`` is the file name with the platform prefix and
    extension stripped, e.g. ``my_plugin`` for ``libmy_plugin.so``.
    """

    model_config = ConfigDict(frozen=True)

    source_path: Path
    logical_name: str
    platform_prefix: str = ""
    platform_extension: str


class InstallTarget(BaseModel):
    """Where an artifact was (or will be) installed."""

    model_config = ConfigDict(frozen=True)

    destination_dir: Path
    final_name: str

    @property
    def path(self) -> Path:
        return self.destination_dir / self.final_name
