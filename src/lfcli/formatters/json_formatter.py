"""Pretty-printed JSON rendering."""

from __future__ import annotations

import json
from typing import Any

from lfcli.formatters.base import to_json_value


def format_json(data: Any) -> str:
    """Serialise *data* with two-space indentation. No columns are inferred."""
    return json.dumps(to_json_value(data), indent=2, ensure_ascii=False)
