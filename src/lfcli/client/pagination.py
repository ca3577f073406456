"""Page-by-page fetching of list endpoints.

The API caps page sizes at 100 records, so a caller asking for more has to
walk pages. :func:`paginate` does that walk sequentially and stops on the
first of:

1. enough records accumulated (the result is truncated to the exact limit),
2. the last page reported by ``meta.totalPages`` was reached,
3. ``totalPages`` is unknown and a page came back short (or empty).

Any error raised by the transport aborts the walk; records gathered from
earlier pages are discarded with it.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Iterable, Optional

from lfcli.client.transport import ApiVersion, QueryParams
from lfcli.exceptions import InvalidUsageError
from lfcli.models import PageEnvelope

if TYPE_CHECKING:
    from lfcli.client.transport import Transport

MAX_PAGE_SIZE = 100

Filters = Iterable[tuple[str, Any]]


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def build_query(filters: Optional[Filters]) -> QueryParams:
    """Flatten ``(name, value)`` filters into wire query pairs.

    ``None`` values are skipped. Lists and tuples emit one pair per element,
    in order, which is how repeated parameters such as ``tags`` are sent.

    >>> build_query([("name", "chat"), ("tags", ["a", "b"]), ("userId", None)])
    [('name', 'chat'), ('tags', 'a'), ('tags', 'b')]
    """
    params: QueryParams = []
    for name, value in filters or ():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            params.extend((name, _encode(item)) for item in value if item is not None)
        else:
            params.append((name, _encode(value)))
    return params


def paginate(
    client: Transport,
    path: str,
    filters: Optional[Filters],
    limit: int,
    start_page: int = 1,
    version: ApiVersion = ApiVersion.V1,
) -> list[Any]:
    """Fetch up to *limit* records from a paginated list endpoint.

    Args:
        client: An open transport.
        path: Endpoint path relative to the version prefix.
        filters: Caller filters, appended after ``limit`` and ``page``.
        limit: Maximum number of records to return; must be at least 1.
        start_page: First page to request (1-based).
        version: API generation the endpoint belongs to.

    Returns:
        At most *limit* records in server order.

    Raises:
        InvalidUsageError: If *limit* or *start_page* is below 1.
    """
    if limit < 1:
        raise InvalidUsageError(f"Limit must be at least 1, got {limit}")
    if start_page < 1:
        raise InvalidUsageError(f"Page must be at least 1, got {start_page}")

    page_size = min(limit, MAX_PAGE_SIZE)
    extra = build_query(filters)
    records: list[Any] = []
    current_page = start_page

    while True:
        params = [("limit", str(page_size)), ("page", str(current_page))] + extra
        envelope: PageEnvelope = client.request(
            "GET", path, version=version, params=params, expect="envelope",
        )
        records.extend(envelope.data)

        if len(records) >= limit:
            return records[:limit]

        total_pages = envelope.meta.total_pages if envelope.meta else None
        if total_pages is not None:
            if current_page >= total_pages:
                return records
        elif len(envelope.data) < page_size:
            return records

        current_page += 1
