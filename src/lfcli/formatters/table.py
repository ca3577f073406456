"""Bordered table rendering via Rich."""

from __future__ import annotations

import io
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.measure import Measurement
from rich.table import Table
from rich.text import Text

from lfcli.formatters.base import TRUNCATE_AT, cell_for, tabulate


def _console(width: int) -> Console:
    return Console(
        file=io.StringIO(),
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
        emoji=False,
    )


def format_table(data: Any) -> str:
    """Render *data* as a rounded-border table.

    Nested arrays and objects are shown as compact JSON cut at 50 characters.
    Strings are never shortened: the table is printed at its natural width,
    however wide that is. Cell text is inserted literally; square brackets
    are never read as Rich markup.
    """
    text, columns, rows = tabulate(data)
    if text is not None:
        return text

    table = Table(box=box.ROUNDED, show_header=True, header_style=None)
    for column in columns:
        table.add_column(Text(column), no_wrap=True, overflow="ignore")
    for row in rows:
        table.add_row(*(Text(cell_for(row, column, TRUNCATE_AT)) for column in columns))

    measuring = _console(80)
    width = Measurement.get(
        measuring, measuring.options.update_width(sys.maxsize), table
    ).maximum

    console = _console(width)
    console.print(table)
    return console.file.getvalue().rstrip("\n")
