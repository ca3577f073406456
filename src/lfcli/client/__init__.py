"""HTTP client package for lfcli.

Layers, bottom to top:

:class:`Transport`
    Basic-auth :class:`httpx.Client` wrapper with version routing and typed
    error classification.
:func:`paginate`
    Sequential page walker for list endpoints.
:class:`LangfuseClient`
    One method per API operation.

Example::

    from lfcli.client import LangfuseClient

    with LangfuseClient(config) as client:
        rows = client.list_scores(name="accuracy", limit=200)
"""

from lfcli.client.api import LangfuseClient
from lfcli.client.pagination import MAX_PAGE_SIZE, build_query, paginate
from lfcli.client.transport import ApiVersion, Transport

__all__ = [
    "ApiVersion",
    "LangfuseClient",
    "MAX_PAGE_SIZE",
    "Transport",
    "build_query",
    "paginate",
]
