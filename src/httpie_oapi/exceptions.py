"""Exception hierarchy for httpie-oapi.

All exceptions inherit from :class:`HttpieOapiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`httpie_oapi.exit_codes`.
The top-level error handler in :func:`httpie_oapi.app.main` catches
``HttpieOapiError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    HttpieOapiError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- NotFoundError       (exit 4)
    +-- ConnectionError_    (exit 6)
    +-- SpecParseError      (exit 7)
    +-- ConfigError         (exit 1)

Per-element resolution problems (a dangling ``$ref``, a cookie parameter)
are never raised; the resolver logs them and drops the element.
"""

from httpie_oapi.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class HttpieOapiError(Exception):
    """Base exception for all httpie-oapi errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`httpie_oapi.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HttpieOapiError):
    """Raised for invalid CLI arguments (unknown shell, duplicate API name without ``--force``)."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(HttpieOapiError):
    """Raised when a named API or an exact endpoint path is not registered."""

    exit_code = EXIT_NOT_FOUND


class ConnectionError_(HttpieOapiError):
    """Raised when a spec document cannot be fetched.

    Covers network-level failures (timeout, DNS resolution, connection
    refused) and non-success HTTP status codes. Named with a trailing
    underscore to avoid shadowing the built-in ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class SpecParseError(HttpieOapiError):
    """Raised when the spec document is not parseable JSON/YAML or not OpenAPI 3.x."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(HttpieOapiError):
    """Raised for configuration problems (unreadable registry, unwritable directories, no home)."""

    exit_code = EXIT_GENERIC_FAILURE
