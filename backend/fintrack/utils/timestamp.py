"""Timestamp parsing and calendar-day utilities."""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional

from dateutil import parser as date_parser


def parse_timestamp(s: str) -> datetime:
    """
    Parse a timestamp string into a datetime object.

    Supports multiple formats:
    - ISO format with "Z" suffix: "2025-01-08T10:00:00Z"
    - ISO format with timezone: "2025-01-08T10:00:00+02:00"
    - ISO format without timezone: "2025-01-08T10:00:00"
    - Date only: "2025-01-08"
    - Space-separated: "2025-01-08 10:00:00"
    - Other strict ISO-8601 forms, e.g. week dates: "2025-W02-3"

    Naive values stay naive: they are read as local wall-clock time.

    Args:
        s: Timestamp string

    Returns:
        datetime object

    Raises:
        ValueError: If timestamp cannot be parsed
    """
    if not s:
        raise ValueError("Empty timestamp string")

    s = s.strip()

    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(s)
    except ValueError:
        pass

    if " " in s and "T" not in s:
        try:
            return datetime.fromisoformat(s.replace(" ", "T"))
        except ValueError:
            pass

    try:
        return date_parser.isoparse(s)
    except (ValueError, OverflowError) as e:
        raise ValueError(
            f"Unable to parse timestamp: {s}. Expected ISO format "
            "(e.g., '2025-01-08T10:00:00Z' or '2025-01-08')"
        ) from e


def coerce_datetime(value: Any) -> Optional[datetime]:
    """Best-effort conversion of a date-like value; None when unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return parse_timestamp(value)
        except ValueError:
            return None
    return None


def calendar_day(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of ``value`` as seen on a local wall clock.

    Aware values are converted to ``tz`` first when one is given; naive values
    are already local and are used as-is.
    """
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.date()


def day_key(day: date) -> str:
    """YYYY-MM-DD key built from the date's own components."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def start_of_next_day(value: datetime) -> datetime:
    """Midnight at the start of the day after ``value``, keeping its tzinfo."""
    midnight = value.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=1)
