"""Small helpers shared by the chart and layout modules."""

from __future__ import annotations

import json
import math
from collections.abc import Sequence
from typing import Any


def _json_default(value: Any) -> str:
    """Serialize dates and times as ISO strings, anything else via ``str``."""
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        return isoformat()
    return str(value)


def dput(obj: Any) -> str:
    """Convert an object to a formatted JSON string.

    Dates and datetimes become ISO 8601 strings; other values JSON does not
    know are written with ``str``.

    Example:
        >>> print(dput({"key1": "value1"}))
        {
          "key1": "value1"
        }
    """
    return json.dumps(obj, indent=2, ensure_ascii=False, default=_json_default)


def max_characters(strings: Any) -> int:
    """Return the length of the longest string in a sequence.

    Elements that are not strings are skipped. Anything that is not a
    non-empty list or tuple yields 0.
    """
    if not isinstance(strings, Sequence) or isinstance(strings, str) or not strings:
        return 0
    return max((len(s) for s in strings if isinstance(s, str)), default=0)


def format_number(value: Any) -> str:
    """Format a number the way it reads in a label: no trailing ``.0``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)
