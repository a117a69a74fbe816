"""
Date formatting for upstream request payloads and the default time window.
"""

from datetime import datetime, timezone

from bengaluru_transit.constants import END_OF_DAY


def format_datetime(value: datetime) -> str:
    """Format as "YYYY-MM-DD HH:mm" (fromDateTime, starttime, endtime)."""
    return value.strftime("%Y-%m-%d %H:%M")


def format_date(value: datetime) -> str:
    """Format as "YYYY-MM-DD"."""
    return value.strftime("%Y-%m-%d")


def format_iso_datetime(value: datetime) -> str:
    """
    Format as UTC ISO-8601 with millisecond precision, e.g.
    "2024-01-20T14:30:00.000Z". Naive datetimes are taken as local time.
    """
    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"


def resolve_time_window(
    start: datetime | None,
    end: datetime | None,
    now: datetime,
) -> tuple[str, str]:
    """
    Apply the default time window policy.

    - start defaults to ``now``
    - end defaults to 23:59 on the same date as the (possibly defaulted) start

    Returns:
        (start, end) formatted as "YYYY-MM-DD HH:mm"
    """
    start_value = start if start is not None else now
    start_text = format_datetime(start_value)

    if end is not None:
        end_text = format_datetime(end)
    else:
        end_text = f"{format_date(start_value)} {END_OF_DAY}"

    return start_text, end_text
