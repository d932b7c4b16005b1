"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a pipeline stage and is referenced by the
corresponding :class:`~gooseboy.exceptions.GooseboyError` subclass.
Shell wrappers can tell a compile failure apart from an install failure
without parsing stderr.

Example::

    $ gooseboy pack
    $ echo $?
    5   # EXIT_COMPILE_FAILED -- cargo rejected the crate
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_TOOLCHAIN_MISSING = 3
"""The compiler toolchain binary could not be found."""

EXIT_INVALID_CRATE = 4
"""The crate root has no usable manifest."""

EXIT_COMPILE_FAILED = 5
"""The toolchain ran and reported a build failure."""

EXIT_ARTIFACT_ERROR = 6
"""The compiled artifact was missing or ambiguous in the build output."""

EXIT_INSTALL_FAILED = 7
"""The artifact could not be copied into the mod directory."""

EXIT_CANCELLED = 130
"""The user interrupted the command (SIGINT)."""
