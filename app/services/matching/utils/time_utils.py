"""Datetime helpers for feed timestamps."""
from datetime import datetime, timezone
from typing import Optional, Union


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse an ISO-8601 feed timestamp into an aware UTC datetime.

    Naive values are assumed to be UTC. Unparseable input returns None.

    Examples:
        >>> parse_datetime("2025-01-10T19:00:00Z")
        datetime.datetime(2025, 1, 10, 19, 0, tzinfo=datetime.timezone.utc)
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip().replace('Z', '+00:00'))
        except ValueError:
            return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def hours_between(a: datetime, b: datetime) -> float:
    """Absolute difference between two datetimes in hours."""
    return abs((a - b).total_seconds()) / 3600
