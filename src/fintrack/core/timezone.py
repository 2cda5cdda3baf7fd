"""UTC clock and timestamp parsing for store-assigned times."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Assume naive datetime is already UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def format_timestamp(dt: datetime) -> str:
    """Serialize a datetime as an ISO-8601 UTC string."""
    return to_utc(dt).isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a stored timestamp string and return it in UTC.

    If no timezone is present in the string, assumes UTC.
    """
    if not value:
        return None
    return to_utc(date_parser.isoparse(value))
