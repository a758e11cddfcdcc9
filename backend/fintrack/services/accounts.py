"""Account-level helpers built on the balance engine."""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from fintrack.models.account import Account, AccountOverviewItem, AccountWithSummary
from fintrack.models.balance import BalanceSummary, DailyBalancePoint
from fintrack.models.transaction import Transaction
from fintrack.services.balances import BalanceSummaryEngine


def make_account_with_summary(account: Account, summary: BalanceSummary) -> AccountWithSummary:
    """Merge an account with its computed balances."""
    fields = account.model_dump(exclude={"transactions", "current_balance", "forecast_balance", "daily_series"})
    return AccountWithSummary(
        **fields,
        current_balance=summary.current_balance,
        forecast_balance=summary.forecast_balance,
        daily_series=summary.daily_series,
    )


def _sort_key(tx: Transaction) -> datetime:
    # Undated transactions are skipped by the engine; park them at the end.
    return tx.date.replace(tzinfo=None) if tx.date else datetime.max


def summarize_account(
    account: Account,
    transactions: Iterable[Transaction],
    engine: BalanceSummaryEngine,
    today: Optional[Union[datetime, date]] = None,
    ignore_series: bool = False,
) -> AccountWithSummary:
    """
    Summarize one account from a snapshot of its transactions.

    The snapshot is ordered by date first. The sort is stable, so same-day
    transactions keep the order they were loaded in.
    """
    ordered = sorted(transactions, key=_sort_key)
    summary = engine.summarize(account.starting_balance, ordered, today=today, ignore_series=ignore_series)
    return make_account_with_summary(account, summary)


def build_accounts_overview(accounts: Iterable[AccountWithSummary]) -> List[AccountOverviewItem]:
    """Current vs. forecast balance per account."""
    return [
        AccountOverviewItem(
            id=a.id,
            name=a.name,
            current_balance=a.current_balance,
            forecast_balance=a.forecast_balance,
        )
        for a in accounts
    ]


def trim_series(
    series: List[DailyBalancePoint],
    days: Optional[int],
    today: Union[datetime, date],
) -> List[DailyBalancePoint]:
    """
    Keep the points from the last ``days`` days, plus everything after today.

    A window of 1 keeps today onwards. Points whose date cannot be read are
    kept.
    """
    if not days or days <= 0:
        return list(series)
    if isinstance(today, datetime):
        today = today.date()
    first_day = today - timedelta(days=days - 1)

    kept = []
    for point in series:
        try:
            point_day = date.fromisoformat(point.date)
        except ValueError:
            kept.append(point)
            continue
        if point_day >= first_day:
            kept.append(point)
    return kept
