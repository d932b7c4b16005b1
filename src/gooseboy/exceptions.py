"""Exception hierarchy for gooseboy.

All exceptions inherit from :class:`GooseboyError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`gooseboy.exit_codes`.
The top-level error handler in :func:`gooseboy.app.main` catches
``GooseboyError`` and exits with the appropriate code. Every error also
names the pipeline ``stage`` it came from so the rendered message says
which step failed.

Subclass hierarchy::

    GooseboyError (exit 1)
    +-- BuildError
    |   +-- ToolchainMissing        (exit 3)
    |   +-- InvalidCrate            (exit 4)
    |   +-- CompileFailed           (exit 5)
    +-- LocateError
    |   +-- ArtifactNotFound        (exit 6)
    |   +-- AmbiguousArtifact       (exit 6)
    +-- InstallError
        +-- DestinationUnavailable  (exit 7)
        +-- CopyFailed              (exit 7)
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from gooseboy.exit_codes import (
    EXIT_ARTIFACT_ERROR,
    EXIT_COMPILE_FAILED,
    EXIT_GENERIC_FAILURE,
    EXIT_INSTALL_FAILED,
    EXIT_INVALID_CRATE,
    EXIT_TOOLCHAIN_MISSING,
)


class GooseboyError(Exception):
    """Base exception for all gooseboy errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE
    stage: str = "gooseboy"

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


# --- Build stage ---


class BuildError(GooseboyError):
    """Raised by the build orchestrator and the manifest reader."""

    stage = "build"


class ToolchainMissing(BuildError):
    """Raised when the toolchain binary is not on ``PATH``."""

    exit_code = EXIT_TOOLCHAIN_MISSING

    def __init__(self, toolchain: str):
        super().__init__(f"'{toolchain}' was not found on PATH")
        self.toolchain = toolchain


class InvalidCrate(BuildError):
    """Raised when the crate root is missing or has no usable manifest."""

    exit_code = EXIT_INVALID_CRATE


class CompileFailed(BuildError):
    """Raised when the toolchain exits non-zero.

    ``toolchain_exit_code`` keeps the compiler's own status; the process
    exit code stays :data:`~gooseboy.exit_codes.EXIT_COMPILE_FAILED`.
    """

    exit_code = EXIT_COMPILE_FAILED

    def __init__(self, toolchain_exit_code: int):
        super().__init__(f"compiler exited with code {toolchain_exit_code}")
        self.toolchain_exit_code = toolchain_exit_code


# --- Locate stage ---


class LocateError(GooseboyError):
    """Raised when the compiled artifact cannot be identified."""

    stage = "locate"
    exit_code = EXIT_ARTIFACT_ERROR


class ArtifactNotFound(LocateError):
    """No file in the output directory matches the crate name."""

    def __init__(self, output_dir: Path, crate_name: str):
        super().__init__(
            f"no dynamic library for '{crate_name}' in {output_dir} "
            "(is crate-type = [\"cdylib\"] set?)"
        )
        self.output_dir = output_dir
        self.crate_name = crate_name


class AmbiguousArtifact(LocateError):
    """More than one file matches the crate name."""

    def __init__(self, crate_name: str, candidates: Sequence[Path]):
        names = ", ".join(p.name for p in candidates)
        super().__init__(f"multiple artifacts match '{crate_name}': {names}")
        self.crate_name = crate_name
        self.candidates = list(candidates)


# --- Install stage ---


class InstallError(GooseboyError):
    """Raised when the artifact cannot be installed."""

    stage = "install"
    exit_code = EXIT_INSTALL_FAILED


class DestinationUnavailable(InstallError):
    """The destination directory could not be created or is not a directory."""


class CopyFailed(InstallError):
    """Copying the artifact failed part-way; nothing was replaced."""
