"""GitHub-flavoured Markdown table rendering."""

from __future__ import annotations

from typing import Any

from lfcli.formatters.base import cell_for, tabulate


def escape_pipes(value: str) -> str:
    return value.replace("|", "\\|")


def format_markdown(data: Any) -> str:
    """Render *data* as a pipe table.

    Pipes inside data cells are escaped as ``\\|``; header cells are written
    as is. The result ends with a newline.
    """
    text, columns, rows = tabulate(data)
    if text is not None:
        return text

    lines = [
        "|" + "".join(f" {column} |" for column in columns),
        "|" + " --- |" * len(columns),
    ]
    for row in rows:
        lines.append(
            "|" + "".join(f" {escape_pipes(cell_for(row, column))} |" for column in columns)
        )
    return "\n".join(lines) + "\n"
