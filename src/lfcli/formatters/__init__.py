"""Rendering of schema-less API results.

Four output formats share one entry point, :func:`format_output`. Table,
CSV and Markdown derive their columns from the data itself (see
:mod:`lfcli.formatters.base`); JSON passes the value through unchanged.

Example::

    >>> print(format_output([{"b": 1}, {"a": 2}], "markdown"))
    | a | b |
    | --- | --- |
    |  | 1 |
    | 2 |  |
    <BLANKLINE>
"""

from __future__ import annotations

import enum
from typing import Any, Union

from lfcli.exceptions import InvalidUsageError
from lfcli.formatters.base import NO_DATA
from lfcli.formatters.csv_formatter import format_csv
from lfcli.formatters.json_formatter import format_json
from lfcli.formatters.markdown import format_markdown
from lfcli.formatters.table import format_table


class OutputFormat(str, enum.Enum):
    """Output formats accepted by ``--format``."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"
    MARKDOWN = "markdown"

    @classmethod
    def parse(cls, value: Union[str, OutputFormat]) -> OutputFormat:
        """Look up a format by name, case-insensitively.

        Raises:
            InvalidUsageError: If *value* names no known format.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise InvalidUsageError(
                f"Unknown output format '{value}'. Choose one of: {choices}"
            ) from None


_RENDERERS = {
    OutputFormat.TABLE: format_table,
    OutputFormat.JSON: format_json,
    OutputFormat.CSV: format_csv,
    OutputFormat.MARKDOWN: format_markdown,
}


def format_output(data: Any, fmt: Union[str, OutputFormat]) -> str:
    """Render *data* in the requested format."""
    return _RENDERERS[OutputFormat.parse(fmt)](data)


__all__ = [
    "NO_DATA",
    "OutputFormat",
    "format_csv",
    "format_json",
    "format_markdown",
    "format_output",
    "format_table",
]
