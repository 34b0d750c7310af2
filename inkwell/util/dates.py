from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dateparse


def parse_date(value: str) -> Optional[datetime]:
    """ISO8601 first, then dateutil's fuzzier parser. Naive UTC out, None if hopeless."""
    if not value:
        return None
    try:
        dt = dateparse.isoparse(value)
    except (ValueError, OverflowError):
        try:
            dt = dateparse.parse(value)
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def display_date(value: str) -> str:
    dt = parse_date(value)
    if dt is None:
        return value
    return f"{dt:%b} {dt.day}, {dt.year}"
