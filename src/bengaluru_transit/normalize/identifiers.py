"""
Identifier coercion between upstream numeric ids and opaque string ids.

Upstream ids are integers. Callers only ever see strings, which avoids
precision loss on large ids and keeps arithmetic off identifiers. Outbound,
strings are parsed back as base-10 integers; anything that is not a plain
decimal integer is rejected rather than partially parsed.
"""

import re

_DECIMAL_ID = re.compile(r"[+-]?\d+")


def stringify_id(value: int) -> str:
    """Convert an upstream numeric id to its opaque string form."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Upstream id must be an integer, got {type(value).__name__}")
    return str(value)


def parse_id(value: str) -> int:
    """
    Parse a caller-supplied string id back to the upstream integer.

    Raises:
        TypeError: If value is not a string.
        ValueError: If value is not a base-10 integer (e.g. "12abc", "1.5", "").
    """
    if not isinstance(value, str):
        raise TypeError(f"Identifier must be a string, got {type(value).__name__}")

    text = value.strip()
    if not _DECIMAL_ID.fullmatch(text):
        raise ValueError(f"Identifier '{value}' is not a base-10 integer")
    return int(text, 10)
