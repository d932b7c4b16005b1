"""Tests for the ``gooseboy build`` command."""

from __future__ import annotations

from pathlib import Path

from gooseboy.app import app
from gooseboy.exit_codes import (
    EXIT_COMPILE_FAILED,
    EXIT_INVALID_CRATE,
    EXIT_TOOLCHAIN_MISSING,
)


class TestBuildHelp:
    def test_root_help_lists_commands(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "build" in result.output
        assert "pack" in result.output

    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "gooseboy" in result.output


class TestBuildCommand:
    def test_debug_build(self, cli_runner, fake_cargo, crate_root: Path, config) -> None:
        result = cli_runner.invoke(
            app, ["--no-color", "build", str(crate_root)], obj={"config": config}
        )
        assert result.exit_code == 0, result.output
        assert fake_cargo.build_calls == [["cargo", "build"]]
        assert "Built my-plugin (debug)" in result.output

    def test_release_build(self, cli_runner, fake_cargo, crate_root: Path, config) -> None:
        result = cli_runner.invoke(
            app, ["build", "--release", str(crate_root)], obj={"config": config}
        )
        assert result.exit_code == 0, result.output
        assert fake_cargo.build_calls == [["cargo", "build", "--release"]]

    def test_target_flag(self, cli_runner, fake_cargo, crate_root: Path, config) -> None:
        result = cli_runner.invoke(
            app,
            ["build", "-r", "--target", "wasm32-unknown-unknown", str(crate_root)],
            obj={"config": config},
        )
        assert result.exit_code == 0, result.output
        assert fake_cargo.build_calls == [
            ["cargo", "build", "--release", "--target", "wasm32-unknown-unknown"]
        ]

    def test_build_does_not_install(
        self, cli_runner, fake_cargo, crate_root: Path, config
    ) -> None:
        result = cli_runner.invoke(app, ["build", str(crate_root)], obj={"config": config})
        assert result.exit_code == 0
        assert not config.mod_dir.exists()

    def test_defaults_to_current_directory(
        self, cli_runner, fake_cargo, crate_root: Path, config, monkeypatch
    ) -> None:
        monkeypatch.chdir(crate_root)
        result = cli_runner.invoke(app, ["build"], obj={"config": config})
        assert result.exit_code == 0, result.output
        _, cwd, _ = fake_cargo.calls[-1]
        assert cwd == crate_root.resolve()

    def test_compile_failure(self, cli_runner, fake_cargo, crate_root: Path, config) -> None:
        fake_cargo.build_returncode = 101
        result = cli_runner.invoke(
            app, ["--no-color", "build", str(crate_root)], obj={"config": config}
        )
        assert result.exit_code == EXIT_COMPILE_FAILED
        assert "build: compiler exited with code 101" in result.output

    def test_missing_manifest(
        self, cli_runner, fake_cargo, tmp_path: Path, config, home_dir: Path
    ) -> None:
        not_a_crate = tmp_path / "not-a-crate"
        not_a_crate.mkdir()
        before = sorted(str(p) for p in tmp_path.rglob("*"))

        result = cli_runner.invoke(
            app, ["--no-color", "build", str(not_a_crate)], obj={"config": config}
        )

        assert result.exit_code == EXIT_INVALID_CRATE
        assert "Cargo.toml" in result.output
        assert fake_cargo.calls == []
        assert sorted(str(p) for p in tmp_path.rglob("*")) == before

    def test_toolchain_missing(
        self, cli_runner, crate_root: Path, config, monkeypatch
    ) -> None:
        monkeypatch.setattr("gooseboy.pipeline.manifest.shutil.which", lambda name: None)
        result = cli_runner.invoke(
            app, ["--no-color", "build", str(crate_root)], obj={"config": config}
        )
        assert result.exit_code == EXIT_TOOLCHAIN_MISSING
        assert "'cargo' was not found" in result.output
