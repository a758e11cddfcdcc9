from .balances import BalanceSummaryEngine, compute_balance_summary
from .accounts import (
    build_accounts_overview,
    make_account_with_summary,
    summarize_account,
    trim_series,
)

__all__ = [
    "BalanceSummaryEngine",
    "compute_balance_summary",
    "build_accounts_overview",
    "make_account_with_summary",
    "summarize_account",
    "trim_series",
]
