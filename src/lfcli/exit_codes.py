"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~lfcli.exceptions.LfcliError` subclass.
Shell scripts can inspect the exit code to tell a throttled request from
rejected credentials without parsing stderr.

Example::

    $ lf traces list
    $ echo $?
    7   # EXIT_RATE_LIMITED -- retry later
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, or the configuration is incomplete."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or option values."""

EXIT_AUTH_FAILURE = 3
"""The server rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_API_ERROR = 5
"""The API returned any other non-success status."""

EXIT_NETWORK_ERROR = 6
"""A transport-level failure occurred (DNS, connection refused, TLS)."""

EXIT_RATE_LIMITED = 7
"""The server throttled the request (HTTP 429)."""

EXIT_TIMEOUT = 8
"""The connect or overall request timeout was exceeded."""

EXIT_RESPONSE_PARSE_ERROR = 9
"""A success response body was not JSON of the expected shape."""
