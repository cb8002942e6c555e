"""Exception hierarchy for specdock.

All exceptions inherit from :class:`SpecdockError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specdock.exit_codes`.
The CLI entry point in :func:`specdock.app.main` catches ``SpecdockError``
and exits with the appropriate code.

Subclass hierarchy::

    SpecdockError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- MissingSourceError    (exit 2)
    +-- FetchError            (exit 6)
    +-- SpecParseError        (exit 7)
    |   +-- DocumentShapeError
    +-- IOError_              (exit 8)
    +-- CycleError            (exit 9)
    +-- ValidationWarning     (exit 1)
    +-- ConfigError           (exit 1)

Acquisition and persistence failures (:class:`FetchError`,
:class:`IOError_`, :class:`MissingSourceError`) abort a registration.
Mock-pipeline failures (:class:`SpecParseError`, :class:`CycleError`) are
recovered by the registry, and :class:`ValidationWarning` is recorded on
the published record rather than propagated.
"""

from specdock.exit_codes import (
    EXIT_CYCLE_ERROR,
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_IO_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecdockError(Exception):
    """Base exception for all specdock errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecdockError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class MissingSourceError(SpecdockError):
    """Raised when a request carries neither inline content nor a spec path."""

    exit_code = EXIT_INVALID_USAGE


class FetchError(SpecdockError):
    """Raised on network failure or a non-2xx status while downloading a spec."""

    exit_code = EXIT_FETCH_ERROR


class SpecParseError(SpecdockError):
    """Raised when text is neither valid JSON nor valid YAML."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class DocumentShapeError(SpecParseError):
    """Raised when a parsed node has the wrong shape for its position.

    For example an operation, response or schema property that is a list
    or a scalar where a mapping is required.
    """


class IOError_(SpecdockError):
    """Raised when a local file cannot be opened, read, created or written.

    Named with a trailing underscore to avoid shadowing the built-in
    ``IOError``.
    """

    exit_code = EXIT_IO_ERROR


class CycleError(SpecdockError):
    """Raised when ``$ref`` resolution nests deeper than the configured limit."""

    exit_code = EXIT_CYCLE_ERROR


class ValidationWarning(SpecdockError):
    """Raised by the structural validator for a document that looks invalid.

    The registry never lets this escape a registration: it is caught and
    recorded on the published :class:`~specdock.models.RegistrationRecord`.
    """


class ConfigError(SpecdockError):
    """Raised for invalid configuration values (bad port, unparsable timeout)."""
