"""Shared preprocessing for the tabular formatters.

Records are schema-less JSON values, so table, CSV and Markdown output all
derive their columns the same way: the sorted union of keys across every
object in the result. Cell values go through :func:`format_cell`.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional, Union

from pydantic import BaseModel

NO_DATA = "No data to display"
TRUNCATE_AT = 50


def to_json_value(data: Any) -> Any:
    """Convert *data* into plain JSON values (dict, list, str, int, float, bool, None)."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, enum.Enum):
        return data.value
    if isinstance(data, dict):
        return {str(k): to_json_value(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_json_value(item) for item in data]
    return data


def prepare_rows(value: Any) -> Optional[list[Any]]:
    """Normalise a top-level value into rows.

    Returns ``None`` when there is nothing to tabulate (``None`` or an empty
    list). A single object becomes a one-element list.
    """
    if value is None:
        return None
    if isinstance(value, list):
        return value or None
    return [value]


def infer_columns(rows: list[Any]) -> list[str]:
    """Return the lexically sorted union of keys of every object in *rows*.

    Non-object elements contribute nothing.
    """
    keys: set[str] = set()
    for row in rows:
        if isinstance(row, dict):
            keys.update(row)
    return sorted(keys)


def compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_number(value: Union[int, float]) -> str:
    """Shortest decimal form of a JSON number.

    Exponents carry no ``+`` sign or leading zeros.

    >>> format_number(1e16), format_number(2.5e-07), format_number(0.1)
    ('1e16', '2.5e-7', '0.1')
    """
    if isinstance(value, int):
        return str(value)
    text = repr(value)
    mantissa, marker, exponent = text.partition("e")
    if not marker:
        return text
    return f"{mantissa}e{int(exponent)}"


def format_cell(value: Any, truncate: Optional[int] = None) -> str:
    """Render one cell.

    Args:
        value: The raw JSON value, or ``None`` for an absent key.
        truncate: When set, nested arrays and objects longer than this many
            characters are cut and suffixed with ``...``. Scalars are never
            truncated.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    text = compact_json(value)
    if truncate is not None and len(text) > truncate:
        return text[:truncate] + "..."
    return text


def cell_for(row: Any, column: str, truncate: Optional[int] = None) -> str:
    """Format the *column* cell of *row*; non-object rows yield empty cells."""
    if not isinstance(row, dict):
        return ""
    return format_cell(row.get(column), truncate)


def tabulate(value: Any) -> tuple[Optional[str], list[str], list[Any]]:
    """Run the shared preprocessing.

    Returns:
        ``(text, columns, rows)``. When *text* is not ``None`` it is the
        complete output (the no-data message or a scalar) and the formatter
        should return it as is.
    """
    value = to_json_value(value)
    if value is not None and not isinstance(value, (dict, list)):
        return format_cell(value), [], []
    rows = prepare_rows(value)
    if rows is None:
        return NO_DATA, [], []
    columns = infer_columns(rows)
    if not columns:
        return NO_DATA, [], []
    return None, columns, rows
