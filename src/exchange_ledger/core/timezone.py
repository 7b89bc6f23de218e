"""Timezone utilities for Asia/Dhaka settlement time."""

from datetime import date, datetime
from typing import Any, Optional

import pytz
from dateutil import parser as date_parser

from exchange_ledger.core.exceptions import ValidationError

LOCAL_TZ = pytz.timezone("Asia/Dhaka")


def now_local() -> datetime:
    """Return current time in Asia/Dhaka."""
    return datetime.now(LOCAL_TZ)


def now_local_naive() -> datetime:
    """Asia/Dhaka wall-clock time without tzinfo, for naive DateTime columns."""
    return now_local().replace(tzinfo=None)


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to Asia/Dhaka."""
    if dt.tzinfo is None:
        # Naive timestamps are recorded in local time
        return LOCAL_TZ.localize(dt)
    return dt.astimezone(LOCAL_TZ)


def _parse_text(value: Any, label: str) -> datetime:
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {label}: {value!r}")
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid {label}: {value!r}") from exc


def parse_datetime_local(value: Any, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in Asia/Dhaka.

    If no timezone is provided in the string, assumes Asia/Dhaka.
    Anything other than a datetime or a string raises ValidationError.
    """
    if isinstance(value, datetime):
        return to_local(value)
    dt = _parse_text(value, "timestamp")
    if dt.tzinfo is None:
        tz = default_tz or LOCAL_TZ
        dt = tz.localize(dt)
    return to_local(dt)


def parse_date(value: Any) -> date:
    """
    Parse a calendar date.

    Accepts a date, a datetime or an ISO-like string such as "2024-06-15"
    or "2024-06-15T00:00:00.000Z". Aware values, parsed or not, land on
    their Asia/Dhaka calendar date; naive ones keep their own.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    else:
        dt = _parse_text(value, "date")
    return to_local(dt).date() if dt.tzinfo else dt.date()
