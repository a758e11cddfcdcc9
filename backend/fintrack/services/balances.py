"""Current, forecast and daily balances from a transaction stream."""
import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Callable, Dict, Iterable, Optional, Union

from fintrack.models.balance import BalanceSummary, BreakdownMode, DailyBalancePoint
from fintrack.models.transaction import normalize_type
from fintrack.utils.amount import to_amount
from fintrack.utils.timestamp import calendar_day, coerce_datetime, day_key, start_of_next_day

logger = logging.getLogger(__name__)

DayLike = Union[datetime, date]


def _read(tx: Any, name: str) -> Any:
    """Read a field from a mapping, model or ORM row."""
    if isinstance(tx, Mapping):
        return tx.get(name)
    return getattr(tx, name, None)


class BalanceSummaryEngine:
    """Folds a starting balance and transactions into a BalanceSummary."""

    def __init__(
        self,
        breakdown: Union[BreakdownMode, str] = BreakdownMode.NONE,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize engine.

        Args:
            breakdown: Whether daily points carry income/expense subtotals,
                split by amount sign or by the transaction's type tag
            tz: Zone that aware timestamps are converted to before their
                calendar day is taken. Naive timestamps are used as-is.
            clock: Returns "now" when no reference day is passed
        """
        self.breakdown = BreakdownMode(breakdown)
        self.tz = tz
        self.clock = clock

    def cutoff_day(self, today: Optional[DayLike] = None) -> date:
        """
        First calendar day that counts as the future.

        Transactions dated strictly before this day (today or earlier, at any
        time of day) affect the current balance.
        """
        if today is None:
            today = self.clock() if self.clock else datetime.now(self.tz)
        if isinstance(today, datetime):
            if self.tz is not None and today.tzinfo is not None:
                today = today.astimezone(self.tz)
            return start_of_next_day(today).date()
        return today + timedelta(days=1)

    def _side(self, amount: float, tag: Any) -> str:
        if self.breakdown is BreakdownMode.TYPE:
            tag = normalize_type(tag)
            if tag is not None:
                return tag
        return "income" if amount > 0 else "expense"

    def summarize(
        self,
        starting_balance: Any,
        transactions: Optional[Iterable[Any]],
        today: Optional[DayLike] = None,
        ignore_series: bool = False,
    ) -> BalanceSummary:
        """
        Compute current balance, forecast balance and the daily series.

        Transactions are expected in ascending date order. Every transaction
        moves the running total (and so the forecast), in input order; only
        those dated on or before ``today`` move the current balance. Each
        calendar day with at least one transaction gets one point holding
        the running total after that day's last transaction.

        Amounts that cannot be parsed count as zero. Transactions without a
        usable date are skipped entirely.

        Args:
            starting_balance: Opening balance (number, Decimal or string)
            transactions: Transactions as models, mappings or ORM rows
            today: Reference day. If None, uses the engine clock.
            ignore_series: Return an empty daily series; balances unchanged

        Returns:
            BalanceSummary
        """
        if transactions is None:
            transactions = ()
        try:
            items = iter(transactions)
        except TypeError:
            raise TypeError("transactions must be an iterable of transactions") from None

        start = to_amount(starting_balance)
        cutoff = self.cutoff_day(today)
        with_breakdown = self.breakdown is not BreakdownMode.NONE

        current_balance = start
        running_balance = start
        days: Dict[str, Dict[str, float]] = {}
        seen = 0
        skipped = 0

        for tx in items:
            seen += 1
            when = coerce_datetime(_read(tx, "date"))
            if when is None:
                skipped += 1
                continue

            amount = to_amount(_read(tx, "amount"))
            day = calendar_day(when, self.tz)

            running_balance += amount
            if day < cutoff:
                current_balance += amount

            if ignore_series:
                continue

            totals = days.setdefault(day_key(day), {"balance": running_balance, "income": 0.0, "expense": 0.0})
            totals["balance"] = running_balance
            if with_breakdown:
                totals[self._side(amount, _read(tx, "type"))] += amount

        daily_series = [
            DailyBalancePoint(
                date=key,
                balance=totals["balance"],
                income=totals["income"] if with_breakdown else None,
                expense=totals["expense"] if with_breakdown else None,
            )
            for key, totals in sorted(days.items())
        ]

        if skipped:
            logger.debug("Skipped transactions without a usable date", extra={"skipped": skipped, "seen": seen})
        logger.debug(
            "Balance summary computed",
            extra={"transactions": seen, "days": len(daily_series), "cutoff": cutoff.isoformat()},
        )

        return BalanceSummary(
            current_balance=current_balance,
            forecast_balance=running_balance,
            daily_series=daily_series,
        )


def compute_balance_summary(
    starting_balance: Any,
    transactions: Optional[Iterable[Any]],
    *,
    today: Optional[DayLike] = None,
    ignore_series: bool = False,
    breakdown: Union[BreakdownMode, str] = BreakdownMode.NONE,
    tz: Optional[tzinfo] = None,
) -> BalanceSummary:
    """Functional shortcut for ``BalanceSummaryEngine(...).summarize(...)``."""
    engine = BalanceSummaryEngine(breakdown=breakdown, tz=tz)
    return engine.summarize(starting_balance, transactions, today=today, ignore_series=ignore_series)
