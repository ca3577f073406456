"""Exception hierarchy for lfcli.

All exceptions inherit from :class:`LfcliError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`lfcli.exit_codes`.
The top-level error handler in :func:`lfcli.app.main` catches
``LfcliError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The transport layer never recovers from any of these: each one travels
unmodified from :class:`~lfcli.client.transport.Transport` through the
pagination driver up to the command layer, keeping its diagnostic payload
(status code, body text or transport message) intact.

Subclass hierarchy::

    LfcliError (exit 1)
    +-- ConfigurationError   (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- AuthenticationError  (exit 3)
    +-- NotFoundError        (exit 4)
    +-- ApiError             (exit 5)
    +-- NetworkError         (exit 6)
    +-- RateLimitError       (exit 7)
    +-- TimeoutError_        (exit 8)
    +-- ResponseParseError   (exit 9)
"""

from __future__ import annotations

from lfcli.exit_codes import (
    EXIT_API_ERROR,
    EXIT_AUTH_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_RESPONSE_PARSE_ERROR,
    EXIT_TIMEOUT,
)


class LfcliError(Exception):
    """Base exception for all lfcli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`lfcli.exit_codes`. The entry point catches
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


class ConfigurationError(LfcliError):
    """Raised for missing credentials or an unusable profile file.

    Always raised before any network activity.
    """

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(LfcliError):
    """Raised for invalid option values (unknown output format, malformed JSON arguments)."""

    exit_code = EXIT_INVALID_USAGE


class AuthenticationError(LfcliError):
    """Raised when the API rejects the credentials (HTTP 401 or 403)."""

    exit_code = EXIT_AUTH_FAILURE

    def __init__(self, status: int | None = None):
        super().__init__("Authentication failed. Check your public and secret keys.")
        self.status = status


class NotFoundError(LfcliError):
    """Raised when the API returns HTTP 404.

    Attributes:
        detail: The raw response body text.
    """

    exit_code = EXIT_NOT_FOUND

    def __init__(self, detail: str):
        super().__init__(f"Resource not found: {detail}")
        self.detail = detail


class RateLimitError(LfcliError):
    """Raised when the API throttles the request (HTTP 429).

    No backoff is attempted; the operator decides when to retry.
    """

    exit_code = EXIT_RATE_LIMITED

    def __init__(self) -> None:
        super().__init__("Rate limit exceeded. Please try again later.")


class TimeoutError_(LfcliError):
    """Raised when the connect or overall request timeout is exceeded.

    Named with a trailing underscore to avoid shadowing the built-in
    ``TimeoutError``.
    """

    exit_code = EXIT_TIMEOUT

    def __init__(self) -> None:
        super().__init__("Request timeout")


class NetworkError(LfcliError):
    """Raised on transport failures other than timeouts (DNS, refused, TLS).

    Attributes:
        detail: The underlying transport error message.
    """

    exit_code = EXIT_NETWORK_ERROR

    def __init__(self, detail: str):
        super().__init__(f"Network error: {detail}")
        self.detail = detail


class ApiError(LfcliError):
    """Catch-all for non-success statuses without a dedicated error type.

    Attributes:
        status: The numeric HTTP status code.
        detail: The raw response body text.
    """

    exit_code = EXIT_API_ERROR

    def __init__(self, status: int, detail: str):
        super().__init__(f"API error: {status} - {detail}")
        self.status = status
        self.detail = detail


class ResponseParseError(LfcliError):
    """Raised when a success response body is not JSON of the expected shape."""

    exit_code = EXIT_RESPONSE_PARSE_ERROR

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse response: {detail}")
        self.detail = detail
