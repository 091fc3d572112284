"""Timezone utilities for US/Eastern market time.

All stored timestamps are Eastern wall-clock time. SQLite has no timezone
type, so the repositories strip tzinfo on write and re-attach it on read.
"""

from datetime import datetime

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern; naive values are taken as Eastern already."""
    if dt.tzinfo is None:
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def to_naive_eastern(dt: datetime) -> datetime:
    """Eastern wall-clock time without tzinfo, for storage."""
    return to_eastern(dt).replace(tzinfo=None)


def parse_datetime_eastern(value: str) -> datetime:
    """
    Parse a user-supplied timestamp into US/Eastern.

    Accepts anything dateutil understands ("2024-03-01", "2024-03-01T09:30",
    "2024-03-01T09:30:00-05:00"). Strings without an offset are read as
    Eastern. Raises ValueError (or OverflowError) on unparseable input.
    """
    return to_eastern(date_parser.parse(value))
