from .transaction import Transaction
from .balance import (
    BalanceSummary,
    BalanceSummaryRequest,
    BreakdownMode,
    DailyBalancePoint,
)
from .account import (
    Account,
    AccountOverviewItem,
    AccountSnapshot,
    AccountsSummaryRequest,
    AccountWithSummary,
)

__all__ = [
    "Transaction",
    "BalanceSummary",
    "BalanceSummaryRequest",
    "BreakdownMode",
    "DailyBalancePoint",
    "Account",
    "AccountOverviewItem",
    "AccountSnapshot",
    "AccountsSummaryRequest",
    "AccountWithSummary",
]
