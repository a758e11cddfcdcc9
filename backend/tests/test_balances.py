"""Tests for the balance summary engine."""
import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace
from fintrack.models.balance import BreakdownMode
from fintrack.models.transaction import Transaction
from fintrack.services.balances import BalanceSummaryEngine, compute_balance_summary

TODAY = datetime(2025, 1, 10)


def tx(when, amount, type=None):
    return Transaction(date=when, amount=amount, type=type)


def series(summary):
    return [p.model_dump(exclude_none=True) for p in summary.daily_series]


@pytest.fixture
def mixed_transactions():
    """Two past and two future transactions, same-day pairs included."""
    return [
        tx(datetime(2025, 1, 8, 9, 0), 100),
        tx(datetime(2025, 1, 8, 18, 0), -30),
        tx(datetime(2025, 1, 10, 23, 59), -5),
        tx(datetime(2025, 1, 11, 0, 0), -40),
        tx(datetime(2025, 1, 15, 12, 0), 250),
    ]


def test_empty_input():
    """No transactions: both balances equal the starting balance."""
    summary = compute_balance_summary(100, [], today=TODAY)

    assert summary.current_balance == 100
    assert summary.forecast_balance == 100
    assert summary.daily_series == []


def test_none_transactions_treated_as_empty():
    summary = compute_balance_summary(None, None, today=TODAY)

    assert summary.current_balance == 0
    assert summary.forecast_balance == 0
    assert summary.daily_series == []


def test_only_past_transactions():
    """Past-only input gives equal current and forecast balances."""
    txs = [
        tx(datetime(2025, 1, 8, 10, 0), Decimal(50)),
        tx(datetime(2025, 1, 9, 15, 0), Decimal(-20)),
    ]

    summary = compute_balance_summary(100, txs, today=TODAY)

    assert summary.current_balance == 130
    assert summary.forecast_balance == 130
    assert series(summary) == [
        {"date": "2025-01-08", "balance": 150},
        {"date": "2025-01-09", "balance": 130},
    ]


def test_future_transactions_split_current_and_forecast():
    txs = [
        tx(datetime(2025, 1, 8, 10, 0), Decimal(100)),
        tx(datetime(2025, 1, 12, 10, 0), Decimal(-50)),
    ]

    summary = compute_balance_summary(200, txs, today=TODAY)

    assert summary.current_balance == 300
    assert summary.forecast_balance == 250
    assert series(summary) == [
        {"date": "2025-01-08", "balance": 300},
        {"date": "2025-01-12", "balance": 250},
    ]


def test_same_day_transactions_fold_into_one_point():
    txs = [
        tx(datetime(2025, 1, 5, 9, 0), 50),
        tx(datetime(2025, 1, 5, 18, 0), 5),
    ]

    summary = compute_balance_summary(10, txs, today=TODAY)

    assert series(summary) == [{"date": "2025-01-05", "balance": 65}]


def test_day_point_matches_last_running_total_of_the_day():
    """End-of-day balance equals the running total after the day's last transaction."""
    txs = [
        tx(datetime(2025, 1, 5, 9, 0), 10),
        tx(datetime(2025, 1, 5, 18, 0), 5),
        tx(datetime(2025, 1, 6, 12, 0), -3),
    ]

    summary = compute_balance_summary(0, txs, today=TODAY)

    last_total = {}
    running = 0
    for t in txs:
        running += t.amount
        last_total[t.date.date().isoformat()] = running

    assert {p.date: p.balance for p in summary.daily_series} == last_total
    assert series(summary) == [
        {"date": "2025-01-05", "balance": 15},
        {"date": "2025-01-06", "balance": 12},
    ]
    assert summary.current_balance == 12
    assert summary.forecast_balance == 12


def test_forecast_minus_current_is_sum_of_future(mixed_transactions):
    summary = compute_balance_summary(0, mixed_transactions, today=TODAY)

    future = sum(t.amount for t in mixed_transactions if t.date >= datetime(2025, 1, 11))
    assert summary.forecast_balance - summary.current_balance == pytest.approx(future)
    assert summary.current_balance == 65
    assert summary.forecast_balance == 275


def test_today_counts_as_current_at_any_time_of_day(mixed_transactions):
    """A 23:59 transaction today is current; midnight tomorrow is not."""
    summary = compute_balance_summary(0, mixed_transactions, today=datetime(2025, 1, 10, 0, 0))

    assert summary.current_balance == 65


def test_today_accepts_plain_date(mixed_transactions):
    as_datetime = compute_balance_summary(0, mixed_transactions, today=TODAY)
    as_date = compute_balance_summary(0, mixed_transactions, today=date(2025, 1, 10))

    assert as_date == as_datetime


def test_forecast_equals_last_point(mixed_transactions):
    summary = compute_balance_summary(0, mixed_transactions, today=TODAY)

    assert summary.daily_series[-1].balance == summary.forecast_balance
    assert [p.date for p in summary.daily_series] == [
        "2025-01-08",
        "2025-01-10",
        "2025-01-11",
        "2025-01-15",
    ]


def test_ignore_series_keeps_balances(mixed_transactions):
    full = compute_balance_summary(100, mixed_transactions, today=TODAY)
    bare = compute_balance_summary(100, mixed_transactions, today=TODAY, ignore_series=True)

    assert bare.daily_series == []
    assert bare.current_balance == full.current_balance
    assert bare.forecast_balance == full.forecast_balance


def test_string_starting_balance():
    txs = [tx(datetime(2025, 1, 9, 10, 0), Decimal(25))]

    summary = compute_balance_summary("200.50", txs, today=TODAY)

    assert summary.current_balance == pytest.approx(225.5)
    assert summary.forecast_balance == pytest.approx(225.5)


def test_unparseable_amounts_count_as_zero():
    txs = [
        {"date": datetime(2025, 1, 8), "amount": "not a number"},
        {"date": datetime(2025, 1, 8), "amount": None},
        {"date": datetime(2025, 1, 9), "amount": "12.5"},
    ]

    summary = compute_balance_summary("oops", txs, today=TODAY)

    assert summary.current_balance == 12.5
    assert series(summary) == [
        {"date": "2025-01-08", "balance": 0},
        {"date": "2025-01-09", "balance": 12.5},
    ]


def test_undated_transactions_are_skipped():
    txs = [
        {"date": datetime(2025, 1, 8), "amount": 10},
        {"date": None, "amount": 1000},
        {"date": "not a date", "amount": 1000},
        {"amount": 1000},
    ]

    summary = compute_balance_summary(0, txs, today=TODAY)

    assert summary.current_balance == 10
    assert summary.forecast_balance == 10
    assert series(summary) == [{"date": "2025-01-08", "balance": 10}]


def test_reads_mappings_and_row_objects():
    rows = [
        SimpleNamespace(date=datetime(2025, 1, 8, 10, 0), amount=Decimal("50.00"), type="income"),
        {"date": "2025-01-12T08:00:00", "amount": "-20"},
    ]

    summary = compute_balance_summary(0, rows, today=TODAY)

    assert summary.current_balance == 50
    assert summary.forecast_balance == 30


def test_non_iterable_transactions_raise():
    with pytest.raises(TypeError):
        compute_balance_summary(0, 42, today=TODAY)


def test_sign_breakdown():
    txs = [
        tx(datetime(2025, 1, 8, 9, 0), 100),
        tx(datetime(2025, 1, 8, 12, 0), -40),
        tx(datetime(2025, 1, 9, 12, 0), -10),
    ]

    summary = compute_balance_summary(20, txs, today=TODAY, breakdown=BreakdownMode.SIGN)

    assert series(summary) == [
        {"date": "2025-01-08", "balance": 80, "income": 100, "expense": -40},
        {"date": "2025-01-09", "balance": 70, "income": 0, "expense": -10},
    ]


def test_type_breakdown_trusts_tag_for_subtotals_and_sign_for_balance():
    txs = [
        tx(datetime(2025, 1, 8, 9, 0), 30, type="expense"),
        tx(datetime(2025, 1, 8, 10, 0), 200, type="income"),
        tx(datetime(2025, 1, 8, 11, 0), -15),
    ]

    summary = compute_balance_summary(0, txs, today=TODAY, breakdown="type")

    point = summary.daily_series[0]
    assert point.income == 200
    assert point.expense == 15
    assert point.balance == 215
    assert point.balance == 0 + point.income + point.expense


def test_breakdown_does_not_change_balances(mixed_transactions):
    plain = compute_balance_summary(50, mixed_transactions, today=TODAY)
    split = compute_balance_summary(50, mixed_transactions, today=TODAY, breakdown=BreakdownMode.SIGN)

    assert split.current_balance == plain.current_balance
    assert split.forecast_balance == plain.forecast_balance
    assert [p.balance for p in split.daily_series] == [p.balance for p in plain.daily_series]


def test_day_key_uses_timestamp_wall_clock():
    """Without a zone, an aware timestamp keeps its own calendar day."""
    txs = [tx(datetime(2025, 1, 9, 23, 30, tzinfo=timezone.utc), 10)]

    summary = compute_balance_summary(0, txs, today=TODAY)

    assert summary.daily_series[0].date == "2025-01-09"


def test_day_key_converts_to_configured_zone():
    plus_one = timezone(timedelta(hours=1))
    txs = [tx(datetime(2025, 1, 10, 23, 30, tzinfo=timezone.utc), 10)]

    engine = BalanceSummaryEngine(tz=plus_one)
    summary = engine.summarize(0, txs, today=datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc))

    assert summary.daily_series[0].date == "2025-01-11"
    assert summary.current_balance == 0
    assert summary.forecast_balance == 10


def test_cutoff_uses_local_today():
    plus_one = timezone(timedelta(hours=1))
    engine = BalanceSummaryEngine(tz=plus_one)

    # 23:30 UTC on the 10th is already the 11th at +01:00
    assert engine.cutoff_day(datetime(2025, 1, 10, 23, 30, tzinfo=timezone.utc)) == date(2025, 1, 12)
    assert engine.cutoff_day(date(2025, 1, 10)) == date(2025, 1, 11)


def test_clock_used_when_today_missing():
    engine = BalanceSummaryEngine(clock=lambda: datetime(2025, 1, 10, 8, 0))
    txs = [
        tx(datetime(2025, 1, 10, 20, 0), 5),
        tx(datetime(2025, 1, 11, 1, 0), 7),
    ]

    summary = engine.summarize(0, txs)

    assert summary.current_balance == 5
    assert summary.forecast_balance == 12


def test_same_inputs_same_output(mixed_transactions):
    first = compute_balance_summary(10, mixed_transactions, today=TODAY)
    second = compute_balance_summary(10, mixed_transactions, today=TODAY)

    assert first == second


def test_partial_date_strings_are_skipped():
    """Date fragments never resolve against the current date."""
    txs = [
        {"date": "10", "amount": 5},
        {"date": "March", "amount": 7},
        {"date": "2025-01-09", "amount": 1},
    ]

    summary = compute_balance_summary(0, txs, today=TODAY)

    assert summary.current_balance == 1
    assert summary.forecast_balance == 1
    assert series(summary) == [{"date": "2025-01-09", "balance": 1}]


def test_oversized_amounts_count_as_zero():
    txs = [
        {"date": datetime(2025, 1, 8), "amount": 10 ** 400},
        {"date": datetime(2025, 1, 9), "amount": 3},
    ]

    summary = compute_balance_summary(10 ** 400, txs, today=TODAY)

    assert summary.current_balance == 3
    assert summary.forecast_balance == 3
    assert series(summary) == [
        {"date": "2025-01-08", "balance": 0},
        {"date": "2025-01-09", "balance": 3},
    ]
