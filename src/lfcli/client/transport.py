"""Authenticated HTTP transport for the Langfuse public API.

This module provides :class:`Transport`, the single funnel every resource
operation goes through. It wraps :class:`httpx.Client` and layers on:

- **Basic auth** -- the public/secret key pair is applied to every request.
- **Version routing** -- :class:`ApiVersion` maps a relative path to
  ``/api/public`` or ``/api/public/v2`` under the configured host.
- **Error classification** -- transport failures and HTTP statuses are
  mapped to the typed errors of :mod:`lfcli.exceptions`.

There is no retry: a timeout, a throttled request or a server
error is reported to the caller on the first occurrence.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

import httpx
from pydantic import ValidationError

from lfcli import __version__
from lfcli.exceptions import (
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ResponseParseError,
    TimeoutError_,
)
from lfcli.models import Config, PageEnvelope
from lfcli.output import get_output

REQUEST_TIMEOUT = 30.0
CONNECT_TIMEOUT = 10.0

QueryParams = list[tuple[str, str]]
Expect = Optional[Literal["envelope", "object"]]


class ApiVersion(str, enum.Enum):
    """Route prefix for each API generation."""

    V1 = "/api/public"
    V2 = "/api/public/v2"


class Transport:
    """Authenticated HTTP transport.

    Must be used as a context manager so the underlying connection pool is
    opened and closed exactly once per command.

    Args:
        config: Resolved configuration. Both keys and the host must be set.
        transport: Optional :mod:`httpx` transport, used by tests to swap
            in an :class:`httpx.MockTransport`.

    Raises:
        ConfigurationError: If a key or the host is missing. Nothing is sent
            over the network in that case.

    Example::

        with Transport(config) as t:
            envelope = t.get("/traces", params=[("limit", "1")], expect="envelope")
    """

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._credentials = config.credentials()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def host(self) -> str:
        return self._credentials.host

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Transport:
        self._client = self._build_http_client()
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _build_http_client(self) -> httpx.Client:
        return httpx.Client(
            auth=(self._credentials.public_key, self._credentials.secret_key),
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
            headers={
                "Accept": "application/json",
                "User-Agent": f"lfcli/{__version__}",
            },
            transport=self._transport,
        )

    # ------------------------------------------------------------------ #
    # Verb primitives
    # ------------------------------------------------------------------ #

    def get(self, path: str, params: Optional[QueryParams] = None, expect: Expect = None) -> Any:
        """GET a v1 resource."""
        return self.request("GET", path, params=params, expect=expect)

    def get_v2(self, path: str, params: Optional[QueryParams] = None, expect: Expect = None) -> Any:
        """GET a v2 resource."""
        return self.request("GET", path, version=ApiVersion.V2, params=params, expect=expect)

    def post(self, path: str, body: Any, expect: Expect = None) -> Any:
        """POST a JSON body to a v1 resource."""
        return self.request("POST", path, json_body=body, expect=expect)

    def post_v2(self, path: str, body: Any, expect: Expect = None) -> Any:
        """POST a JSON body to a v2 resource."""
        return self.request("POST", path, version=ApiVersion.V2, json_body=body, expect=expect)

    def patch_v2(self, path: str, body: Any, expect: Expect = None) -> Any:
        """PATCH a v2 resource with a JSON body."""
        return self.request("PATCH", path, version=ApiVersion.V2, json_body=body, expect=expect)

    def delete_v2(self, path: str, params: Optional[QueryParams] = None) -> None:
        """DELETE a v2 resource. Returns ``None`` on success."""
        return self.request("DELETE", path, version=ApiVersion.V2, params=params)

    def url_for(self, path: str, version: ApiVersion = ApiVersion.V1) -> str:
        """Return the absolute URL of *path* under *version*."""
        return f"{self._credentials.host}{version.value}{path}"

    def request(
        self,
        method: str,
        path: str,
        version: ApiVersion = ApiVersion.V1,
        params: Optional[QueryParams] = None,
        json_body: Any = None,
        expect: Expect = None,
    ) -> Union[Any, PageEnvelope, None]:
        """Send one request and classify the outcome.

        Args:
            method: HTTP verb.
            path: Path relative to the version prefix, starting with ``/``.
            version: Which API generation to route to.
            params: Ordered query parameters; repeated names are allowed.
            json_body: JSON-serialisable request body.
            expect: ``"envelope"`` to validate a paginated list response,
                ``"object"`` to require a JSON object, ``None`` for any JSON.

        Returns:
            The decoded body (a :class:`~lfcli.models.PageEnvelope` when
            ``expect="envelope"``), or ``None`` for a successful DELETE.

        Raises:
            TimeoutError_: The connect or overall timeout elapsed.
            NetworkError: Any other transport failure.
            ResponseParseError: A success body did not match *expect*.
            AuthenticationError: On 401 / 403.
            NotFoundError: On 404.
            RateLimitError: On 429.
            ApiError: On any other status.
        """
        assert self._client is not None, "Transport not initialised -- use as context manager"

        method = method.upper()
        url = self.url_for(path, version)
        kwargs: dict[str, Any] = {"params": params or []}
        if json_body is not None:
            kwargs["json"] = json_body

        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise TimeoutError_() from exc
        except httpx.TransportError as exc:
            raise NetworkError(str(exc)) from exc
        except httpx.InvalidURL as exc:
            raise NetworkError(str(exc)) from exc

        get_output().debug(f"{method} {response.request.url} -> {response.status_code}")
        return self._classify(method, response, expect)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _classify(self, method: str, response: httpx.Response, expect: Expect) -> Any:
        """Map *response* to a decoded value or a typed error."""
        status = response.status_code

        if method == "DELETE" and status in (200, 204):
            return None
        if status == 200 or (status == 201 and method in ("POST", "PATCH")):
            return self._decode(response, expect)
        if status in (401, 403):
            raise AuthenticationError(status)
        if status == 404:
            raise NotFoundError(response.text)
        if status == 429:
            raise RateLimitError()
        raise ApiError(status, response.text)

    @staticmethod
    def _decode(response: httpx.Response, expect: Expect) -> Any:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ResponseParseError(f"invalid JSON: {exc}") from exc

        if expect == "envelope":
            try:
                return PageEnvelope.model_validate(payload)
            except ValidationError as exc:
                raise ResponseParseError(f"expected a paginated list: {exc}") from exc
        if expect == "object" and not isinstance(payload, dict):
            raise ResponseParseError(
                f"expected a JSON object, got {type(payload).__name__}"
            )
        return payload
