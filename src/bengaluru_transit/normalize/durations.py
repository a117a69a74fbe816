"""
Duration conversion between upstream "HH:mm:ss" / "HH:mm" strings and seconds.

The formatter zero-pads every field to width 2 (hours may grow wider), so
``parse_duration(format_duration(n)) == n`` for every non-negative ``n``.
"""

import re

DURATION_PATTERN = r"^\d+:\d{2}(:\d{2})?$"
_DURATION = re.compile(DURATION_PATTERN)


def is_duration(value: str) -> bool:
    return bool(_DURATION.fullmatch(value))


def parse_duration(value: str) -> int:
    """
    Parse "HH:mm:ss" or "HH:mm" into total seconds.

    Args:
        value: Duration string, e.g. "00:33:00" or "01:05".

    Returns:
        hours * 3600 + minutes * 60 + seconds

    Raises:
        ValueError: If the string is not in one of the two accepted forms.
    """
    if not isinstance(value, str) or not is_duration(value):
        raise ValueError(f"Invalid duration '{value}': expected HH:mm:ss or HH:mm")

    parts = [int(part) for part in value.split(":")]
    hours, minutes = parts[0], parts[1]
    seconds = parts[2] if len(parts) == 3 else 0
    return hours * 3600 + minutes * 60 + seconds


def format_duration(total_seconds: int) -> str:
    """Format a non-negative number of seconds as "HH:mm:ss"."""
    if isinstance(total_seconds, bool) or not isinstance(total_seconds, int):
        raise TypeError("Duration seconds must be an integer")
    if total_seconds < 0:
        raise ValueError(f"Duration cannot be negative, got {total_seconds}")

    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
