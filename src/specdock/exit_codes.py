"""Numeric process exit codes for the ``specdock`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specdock.exceptions.SpecdockError` subclass.
Scripts wrapping the CLI can inspect the exit code to determine the
failure class without parsing stderr.

Example::

    $ specdock register --namespace docs --name pets --spec ./missing.yaml
    $ echo $?
    8   # EXIT_IO_ERROR -- the local spec file could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or no spec source."""

EXIT_FETCH_ERROR = 6
"""A remote spec could not be downloaded (network failure or non-2xx status)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The document is neither valid JSON nor YAML, or has a malformed node."""

EXIT_IO_ERROR = 8
"""A local file could not be opened, read, created or written."""

EXIT_CYCLE_ERROR = 9
"""A ``$ref`` chain nested deeper than the configured limit."""
