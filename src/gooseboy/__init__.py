"""gooseboy -- build plugin crates and install them for the game.

Compiles a crate with cargo, finds the resulting dynamic library in the
build output, and installs it into the mod directory (``~/.gooseboy``)
under its canonical crate name.

Typical workflow::

    gooseboy build             # compile only
    gooseboy pack --release    # compile and install

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: Home/mod directory resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    pipeline: build orchestrator, artifact locator and installer.
"""

__version__ = "1.0.0"
