"""Shared test fixtures for gooseboy.

Provides an isolated home directory, a crate on disk, and a fake cargo
that answers ``cargo metadata`` and simulates ``cargo build`` by writing
artifact files into the expected output directory. No test runs the real
toolchain.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Optional, Sequence

import pytest

from gooseboy.models import GooseboyConfig, normalize_crate_name
from gooseboy.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config / filesystem fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """A fake home directory. The mod directory is NOT created."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config(home_dir: Path) -> GooseboyConfig:
    """Config rooted at the fake home directory."""
    return GooseboyConfig(home_dir=home_dir)


def make_crate(root: Path, name: str = "my-plugin") -> Path:
    """Create a minimal crate directory with a Cargo.toml and lib.rs."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "Cargo.toml").write_text(
        f'[package]\nname = "{name}"\nversion = "0.1.0"\nedition = "2021"\n\n'
        '[lib]\ncrate-type = ["cdylib"]\n'
    )
    (root / "src").mkdir(exist_ok=True)
    (root / "src" / "lib.rs").write_text("")
    return root


@pytest.fixture
def crate_factory():
    """Return :func:`make_crate` for tests that need several crates."""
    return make_crate


@pytest.fixture
def crate_root(tmp_path: Path) -> Path:
    """A crate named ``my-plugin`` on disk."""
    return make_crate(tmp_path / "my-plugin")


# ---------------------------------------------------------------------------
# Fake toolchain
# ---------------------------------------------------------------------------


class FakeCargo:
    """Stand-in for ``subprocess.run`` that understands two cargo commands.

    * ``cargo metadata`` returns a metadata document describing the
      configured packages.
    * ``cargo build`` records the call and, when ``build_returncode`` is 0,
      writes ``artifacts`` (file names) into the output directory implied
      by ``--release`` / ``--target``, plus the usual intermediate clutter.
    """

    def __init__(
        self,
        crate_root: Path,
        name: str = "my-plugin",
        *,
        lib_name: Optional[str] = None,
        crate_types: Sequence[str] = ("cdylib",),
        artifacts: Optional[Sequence[str]] = None,
        build_returncode: int = 0,
        metadata_returncode: int = 0,
        extra_packages: Sequence[dict[str, Any]] = (),
    ) -> None:
        self.crate_root = crate_root
        self.name = name
        self.lib_name = lib_name or normalize_crate_name(name)
        self.crate_types = list(crate_types)
        self.artifacts = (
            list(artifacts) if artifacts is not None else [f"lib{self.lib_name}.so"]
        )
        self.build_returncode = build_returncode
        self.metadata_returncode = metadata_returncode
        self.extra_packages = list(extra_packages)
        self.target_dir = crate_root / "target"
        self.calls: list[tuple[list[str], Optional[Path], dict[str, Any]]] = []

    def metadata(self) -> dict[str, Any]:
        package = {
            "name": self.name,
            "version": "0.1.0",
            "manifest_path": str(self.crate_root / "Cargo.toml"),
            "targets": [
                {
                    "name": self.lib_name,
                    "kind": list(self.crate_types),
                    "crate_types": list(self.crate_types),
                    "src_path": str(self.crate_root / "src" / "lib.rs"),
                }
            ],
        }
        return {
            "packages": [package, *self.extra_packages],
            "workspace_members": [],
            "target_directory": str(self.target_dir),
            "version": 1,
        }

    def output_dir(self, args: Sequence[str]) -> Path:
        base = self.target_dir
        if "--target" in args:
            base = base / args[list(args).index("--target") + 1]
        return base / ("release" if "--release" in args else "debug")

    @property
    def build_calls(self) -> list[list[str]]:
        return [args for args, _, _ in self.calls if args[1] == "build"]

    def __call__(self, args, cwd=None, **kwargs):  # noqa: ANN001
        args = list(args)
        self.calls.append((args, Path(cwd) if cwd is not None else None, kwargs))

        if args[1] == "metadata":
            if self.metadata_returncode != 0:
                return subprocess.CompletedProcess(
                    args, self.metadata_returncode, stdout="",
                    stderr="error: could not find `Cargo.toml`\n",
                )
            return subprocess.CompletedProcess(
                args, 0, stdout=json.dumps(self.metadata()), stderr=""
            )

        if args[1] == "build":
            if self.build_returncode == 0:
                out = self.output_dir(args)
                (out / "deps").mkdir(parents=True, exist_ok=True)
                (out / "build").mkdir(exist_ok=True)
                for artifact in self.artifacts:
                    (out / artifact).write_bytes(b"\x7fELF" + artifact.encode())
                    (out / "deps" / artifact).write_bytes(b"stale copy")
                (out / f"lib{self.lib_name}.d").write_text("deps")
            return subprocess.CompletedProcess(args, self.build_returncode)

        raise AssertionError(f"unexpected cargo invocation: {args}")


@pytest.fixture
def toolchain_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make ``shutil.which`` find any toolchain."""
    monkeypatch.setattr(
        "gooseboy.pipeline.orchestrator.shutil.which", lambda name: f"/usr/bin/{name}"
    )


@pytest.fixture
def fake_cargo(
    crate_root: Path, monkeypatch: pytest.MonkeyPatch, toolchain_on_path: None
) -> FakeCargo:
    """Install a :class:`FakeCargo` for ``crate_root`` as ``subprocess.run``."""
    cargo = FakeCargo(crate_root)
    monkeypatch.setattr("gooseboy.pipeline.orchestrator.subprocess.run", cargo)
    return cargo


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
