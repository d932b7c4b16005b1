"""Built-in CLI commands for gooseboy.

* :mod:`~gooseboy.commands.build` -- ``gooseboy build``: compile only.
* :mod:`~gooseboy.commands.pack` -- ``gooseboy pack``: compile, locate the
  library and install it into the mod directory.

Both are plain callback functions registered directly on the root app.
Pipeline failures are reported through :func:`fail`, which prints the
failing stage and exits with the error's own exit code.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from gooseboy.exceptions import GooseboyError
from gooseboy.output import error


def fail(exc: GooseboyError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(f"{exc.stage}: {exc}")
    raise typer.Exit(code=exc.exit_code)
