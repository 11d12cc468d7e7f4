"""Field sanitizer — range-checks raw numeric values from untrusted providers.

Both providers return loosely typed data (strings, floats, occasionally
nonsense such as a 3 sqft house). Values are parsed leniently as base-10
integers and discarded when outside a plausible range, so one bad field never
fails a whole lookup.
"""

from __future__ import annotations

import math
import re
from typing import Any

# Inclusive plausible ranges
BEDS_RANGE = (1, 10)
BATHS_RANGE = (1, 10)
SQFT_RANGE = (100, 50000)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_leading_int(raw: Any) -> int | None:
    """Parse the leading base-10 integer of ``raw``.

    ``"3"`` -> 3, ``" 4 beds"`` -> 4, ``"2.5"`` -> 2, ``2.7`` -> 2.
    Returns None for anything without a leading integer.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if math.isnan(raw) or math.isinf(raw):
            return None
        return int(raw)
    match = _LEADING_INT_RE.match(str(raw))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # digit run over the interpreter's int conversion limit
        return None


def sanitize_int(raw: Any, min_value: int, max_value: int) -> int | None:
    """Return ``raw`` as an int within ``[min_value, max_value]``, else None. Never raises."""
    value = parse_leading_int(raw)
    if value is None or value < min_value or value > max_value:
        return None
    return value


def sanitize_beds(raw: Any) -> int | None:
    return sanitize_int(raw, *BEDS_RANGE)


def sanitize_baths(raw: Any) -> int | None:
    return sanitize_int(raw, *BATHS_RANGE)


def sanitize_sqft(raw: Any) -> int | None:
    return sanitize_int(raw, *SQFT_RANGE)
