"""Account models."""
from datetime import date, datetime
from typing import Any, List, Optional, Union

from pydantic import Field, field_validator

from fintrack.models.balance import CamelModel, DailyBalancePoint
from fintrack.models.transaction import Transaction
from fintrack.utils.amount import to_amount


class Account(CamelModel):
    """Monetary account with an opening balance."""

    id: int
    name: str
    currency: str = Field(default="USD", description="Currency code")
    starting_balance: float = Field(0.0, description="Opening balance; numeric strings accepted")
    description: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("starting_balance", mode="before")
    @classmethod
    def lenient_starting_balance(cls, v: Any) -> float:
        return to_amount(v)


class AccountSnapshot(Account):
    """Account together with its loaded transactions."""

    transactions: List[Transaction] = Field(default_factory=list)


class AccountWithSummary(Account):
    """Account merged with its balance summary."""

    current_balance: float
    forecast_balance: float
    daily_series: List[DailyBalancePoint] = Field(default_factory=list)


class AccountOverviewItem(CamelModel):
    """One bar pair of the accounts overview chart."""

    id: int
    name: str
    current_balance: float
    forecast_balance: float


class AccountsSummaryRequest(CamelModel):
    """Request to summarize several accounts at once."""

    accounts: List[AccountSnapshot] = Field(default_factory=list)
    today: Optional[Union[datetime, date]] = None
    include_series: bool = Field(False, description="Return the daily series for every account")
