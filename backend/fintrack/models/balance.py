"""Balance summary and request models."""
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fintrack.models.transaction import Transaction
from fintrack.utils.amount import to_amount


class CamelModel(BaseModel):
    """Base model serialized with camelCase names, populated by either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BreakdownMode(str, Enum):
    """How per-day income/expense subtotals are derived."""

    NONE = "none"
    SIGN = "sign"
    TYPE = "type"


class DailyBalancePoint(CamelModel):
    """End-of-day running balance for one calendar day."""

    date: str = Field(..., description="Calendar day, YYYY-MM-DD")
    balance: float = Field(..., description="Running balance after the day's transactions")
    income: Optional[float] = Field(None, description="Sum of the day's income (breakdown modes only)")
    expense: Optional[float] = Field(None, description="Sum of the day's expenses, kept negative (breakdown modes only)")


class BalanceSummary(CamelModel):
    """Current, forecast and per-day balances for one transaction stream."""

    current_balance: float = Field(..., description="Starting balance plus transactions dated today or earlier")
    forecast_balance: float = Field(..., description="Starting balance plus every transaction")
    daily_series: List[DailyBalancePoint] = Field(default_factory=list)


class BalanceSummaryRequest(CamelModel):
    """Request to compute a balance summary from a transaction snapshot."""

    starting_balance: float = Field(0.0, description="Opening balance; numeric strings accepted")
    transactions: List[Transaction] = Field(default_factory=list)
    today: Optional[Union[datetime, date]] = Field(
        None,
        description="Reference day for current vs. future. If not provided, uses the server clock.",
    )
    ignore_series: bool = Field(False, description="Skip the daily series, keep both balances")
    breakdown: Optional[BreakdownMode] = Field(None, description="Per-day income/expense mode; server default when unset")

    @field_validator("starting_balance", mode="before")
    @classmethod
    def lenient_starting_balance(cls, v: Any) -> float:
        return to_amount(v)
