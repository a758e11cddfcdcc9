"""Transaction data models."""
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from fintrack.utils.amount import to_amount
from fintrack.utils.timestamp import coerce_datetime

TRANSACTION_TYPES = ("income", "expense")


def normalize_type(v: Any) -> Optional[str]:
    """Lowercased type tag, or None for anything other than income/expense."""
    if not isinstance(v, str):
        return None
    v = v.strip().lower()
    return v if v in TRANSACTION_TYPES else None


class Transaction(BaseModel):
    """Transaction model."""

    id: Optional[Union[int, str]] = None
    date: Optional[datetime] = Field(None, description="When the transaction happened; missing dates are ignored")
    amount: float = Field(0.0, description="Negative for spending, positive for income")
    type: Optional[str] = Field(None, description="'income' or 'expense'; only used for per-day breakdowns")
    description: Optional[str] = Field(None, description="Merchant/transaction description")
    category: Optional[str] = Field(None, description="Transaction category")

    model_config = {
        "json_schema_extra": {
            "example": {
                "date": "2025-01-08T10:00:00",
                "amount": -45.99,
                "type": "expense",
                "description": "STARBUCKS #1234",
                "category": "Food & Dining",
            }
        }
    }

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, v: Any) -> Optional[datetime]:
        return coerce_datetime(v)

    @field_validator("amount", mode="before")
    @classmethod
    def lenient_amount(cls, v: Any) -> float:
        return to_amount(v)

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v: Any) -> Optional[str]:
        return normalize_type(v)
