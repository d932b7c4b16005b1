"""Typer application and CLI entry point for gooseboy.

This module wires together the top-level Typer application and registers
the ``build`` and ``pack`` commands. The root callback installs the global
:class:`~gooseboy.output.OutputManager` and the per-invocation
:class:`~gooseboy.models.GooseboyConfig`.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import sys
import traceback

import typer

from gooseboy import __version__
from gooseboy.commands.build import build_command
from gooseboy.commands.pack import pack_command
from gooseboy.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="gooseboy",
    help="Build plugin crates and install them into the gooseboy mod directory.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("build")(build_command)
app.command("pack")(pack_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"gooseboy {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every command.

    Initialises the global :class:`~gooseboy.output.OutputManager` from
    CLI flags and stores the configuration in ``ctx.obj["config"]``. A
    config already present on the context object (as passed by tests) is
    kept.
    """
    from gooseboy.config import default_config
    from gooseboy.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.JSON if json_output else OutputFormat.AUTO
    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = default_config()
    ctx.obj["verbose"] = verbose


def main() -> None:
    """CLI entry point invoked by the ``gooseboy`` console script.

    :class:`~gooseboy.exceptions.GooseboyError` instances that escape a
    command cause a clean exit with the error's ``exit_code``. Any other
    exception is reported as an unexpected error (with a traceback under
    ``--verbose``) and exits with :data:`EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from gooseboy.exceptions import GooseboyError
        from gooseboy.output import error, get_output

        if isinstance(exc, GooseboyError):
            error(f"{exc.stage}: {exc}")
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        if get_output().is_verbose:
            sys.stderr.write(traceback.format_exc())
        sys.exit(EXIT_GENERIC_FAILURE)
