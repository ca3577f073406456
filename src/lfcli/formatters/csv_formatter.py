"""CSV rendering. Quoting is left entirely to :mod:`csv`."""

from __future__ import annotations

import csv
import io
from typing import Any

from lfcli.formatters.base import cell_for, tabulate


def format_csv(data: Any) -> str:
    """Render *data* as CSV with a header row.

    Nested values are written as full compact JSON; fields containing a
    comma, quote or newline are quoted by the writer.
    """
    text, columns, rows = tabulate(data)
    if text is not None:
        return text

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([cell_for(row, column) for column in columns])
    return buffer.getvalue()
