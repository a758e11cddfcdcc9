"""FastAPI main application."""
import logging
from datetime import date, datetime
from typing import List, Optional, Union

from fastapi import FastAPI, Query

from fintrack import __version__
from fintrack.config import settings
from fintrack.logging_config import configure_logging
from fintrack.models.account import AccountOverviewItem, AccountsSummaryRequest, AccountWithSummary
from fintrack.models.balance import BalanceSummary, BalanceSummaryRequest, BreakdownMode, DailyBalancePoint
from fintrack.services.accounts import build_accounts_overview, summarize_account, trim_series
from fintrack.services.balances import BalanceSummaryEngine

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug, version=__version__)


def _engine(breakdown: Optional[BreakdownMode] = None) -> BalanceSummaryEngine:
    return BalanceSummaryEngine(
        breakdown=breakdown or BreakdownMode(settings.default_breakdown),
        tz=settings.resolve_tz(),
    )


def _today(requested: Optional[Union[datetime, date]]) -> Union[datetime, date]:
    """The request's reference day, or the server clock read once."""
    return requested if requested is not None else datetime.now(settings.resolve_tz())


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": __version__}


@app.post("/balances/summary", response_model=BalanceSummary, response_model_exclude_none=True)
async def balance_summary(request: BalanceSummaryRequest):
    """
    Compute current balance, forecast balance and the daily series for one
    transaction snapshot.
    """
    today = _today(request.today)
    summary = _engine(request.breakdown).summarize(
        request.starting_balance,
        request.transactions,
        today=today,
        ignore_series=request.ignore_series,
    )
    logger.info(
        "Balance summary",
        extra={"transactions": len(request.transactions), "days": len(summary.daily_series)},
    )
    return summary


@app.post("/balances/history", response_model=List[DailyBalancePoint], response_model_exclude_none=True)
async def balance_history(
    request: BalanceSummaryRequest,
    days: Optional[int] = Query(None, ge=0, description="Keep the last N days; 0 keeps everything"),
):
    """
    Daily balance points for charting, truncated to the last ``days`` days.
    Future-dated points are always kept.
    """
    today = _today(request.today)
    summary = _engine(request.breakdown).summarize(request.starting_balance, request.transactions, today=today)
    window = settings.history_days if days is None else days
    tz = settings.resolve_tz()
    if tz is not None and isinstance(today, datetime) and today.tzinfo is not None:
        today = today.astimezone(tz)
    return trim_series(summary.daily_series, window, today)


def _summarize_accounts(request: AccountsSummaryRequest) -> List[AccountWithSummary]:
    engine = _engine()
    today = _today(request.today)
    return [
        summarize_account(
            account,
            account.transactions,
            engine,
            today=today,
            ignore_series=not request.include_series,
        )
        for account in request.accounts
    ]


@app.post("/accounts/summary", response_model=List[AccountWithSummary], response_model_exclude_none=True)
async def accounts_summary(request: AccountsSummaryRequest):
    """
    Accounts merged with their balances. The daily series is left empty
    unless ``include_series`` is set.
    """
    accounts = _summarize_accounts(request)
    logger.info("Accounts summary", extra={"accounts": len(accounts)})
    return accounts


@app.post("/accounts/overview", response_model=List[AccountOverviewItem])
async def accounts_overview(request: AccountsSummaryRequest):
    """Current vs. forecast balance per account."""
    return build_accounts_overview(_summarize_accounts(request))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
