from .amount import to_amount
from .timestamp import calendar_day, coerce_datetime, day_key, parse_timestamp, start_of_next_day

__all__ = [
    "to_amount",
    "calendar_day",
    "coerce_datetime",
    "day_key",
    "parse_timestamp",
    "start_of_next_day",
]
