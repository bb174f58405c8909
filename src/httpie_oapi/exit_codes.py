"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~httpie_oapi.exceptions.HttpieOapiError` subclass.
Shell wrappers can inspect the exit code to tell a missing API apart from a
broken spec without parsing stderr.

Example::

    $ httpie-oapi path --name unknown
    $ echo $?
    4   # EXIT_NOT_FOUND -- no API registered under that name
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The requested API or endpoint is not registered."""

EXIT_CONNECTION_ERROR = 6
"""The spec document could not be fetched (network failure or HTTP error)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be parsed or is not OpenAPI 3.x."""
