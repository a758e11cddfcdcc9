"""Lenient amount coercion."""
import math
from decimal import Decimal, InvalidOperation
from typing import Any


def to_amount(value: Any) -> float:
    """
    Coerce a money-like value to a float.

    Accepts Decimal, int, float and numeric strings. Strings may carry
    thousands separators ("1,234.50") or accounting-style negatives
    ("(12.34)"). None, booleans, unparseable input, NaN and infinities
    all become 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        v = value.replace(",", "").strip()
        if v.startswith("(") and v.endswith(")"):
            v = "-" + v[1:-1].strip()
        if not v:
            return 0.0
        try:
            number = float(v)
        except (ValueError, OverflowError):
            return 0.0
    elif isinstance(value, Decimal):
        try:
            number = float(value)
        except (InvalidOperation, ValueError, OverflowError):
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0

    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number
