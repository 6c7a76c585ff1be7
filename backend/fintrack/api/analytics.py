"""
Analytics API endpoints.

Each endpoint fetches the user's rows for the date range and runs them
through the aggregation service.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fintrack.config import settings
from fintrack.dependencies import get_db, get_current_session, get_date_range, UserSession
from fintrack.schemas.analytics import (
    AggregationSummary,
    BudgetAlertItem,
    CategoryBreakdown,
    ExpenseBreakdown,
    IncomeBreakdown,
    IncomeExpensePoint,
    PeriodPoint,
    RecurringSplit,
    TopSourceItem,
    TopSpendingItem,
)
from fintrack.services import aggregation_service
from fintrack.services.aggregation_service import (
    AggregationOptions,
    DateRange,
    Granularity,
    Kind,
)
from fintrack.services.money import from_cents
from fintrack.services.palette import resolve_color
from fintrack.services.transaction_service import fetch_budgets, fetch_transactions

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _money(cents: int) -> float:
    return float(from_cents(cents))


def _categories(totals) -> List[CategoryBreakdown]:
    return [
        CategoryBreakdown(
            name=c.name,
            amount=_money(c.amount_cents),
            color=c.color,
            color_rgba=resolve_color(c.color),
            percentage=c.percentage,
            transactions=c.transactions,
            budget=_money(c.budget_cents) if c.budget_cents is not None else None
        )
        for c in totals
    ]


def _series(points) -> List[PeriodPoint]:
    return [PeriodPoint(period=p.label, start=p.start, amount=_money(p.amount_cents)) for p in points]


def _top_spending(entries) -> List[TopSpendingItem]:
    return [
        TopSpendingItem(
            category=e.category,
            amount=_money(e.amount_cents),
            transactions=e.transactions,
            avg_transaction=_money(e.avg_transaction_cents) if e.avg_transaction_cents is not None else None
        )
        for e in entries
    ]


def _alerts(alerts) -> List[BudgetAlertItem]:
    return [
        BudgetAlertItem(
            category=a.category,
            spent=_money(a.spent_cents),
            budget=_money(a.budget_cents),
            percentage=a.percentage
        )
        for a in alerts
    ]


def _week_start() -> int:
    return aggregation_service.week_start_index(settings.week_start)


@router.get("/summary", response_model=AggregationSummary)
def get_summary(
    kind: Kind = Query(Kind.expense, description="income or expense"),
    granularity: Granularity = Query(Granularity.monthly),
    series_kind: Kind = Query(Kind.net),
    include_budgets: bool = Query(True),
    fill: bool = Query(False, description="Include empty periods"),
    top_n: int = Query(settings.top_n, ge=0, le=50),
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """
    Generic breakdown for a date range.
    Returns category totals, a period series, top spending and budget alerts.
    """
    if kind == Kind.net:
        raise HTTPException(status_code=422, detail="kind must be 'income' or 'expense'")

    transactions = fetch_transactions(db, session, date_range)
    budgets = fetch_budgets(db, session) if include_budgets else []
    options = AggregationOptions(
        kind=kind,
        granularity=granularity,
        series_kind=series_kind,
        include_budgets=include_budgets,
        top_n=top_n,
        alert_threshold=settings.budget_alert_threshold,
        week_start=_week_start(),
        fill_periods=fill,
    )
    result = aggregation_service.aggregate(transactions, date_range, budgets, options)

    return AggregationSummary(
        date_from=date_range.start,
        date_to=date_range.end,
        category_totals=_categories(result.category_totals),
        period_series=_series(result.period_series),
        top_spending=_top_spending(result.top_spending),
        budget_alerts=_alerts(result.budget_alerts),
        total_expenses=_money(result.total_expenses_cents),
        total_income=_money(result.total_income_cents),
        net=_money(result.net_cents),
        average_daily=_money(result.average_daily_cents),
        highest_category=result.highest_category
    )


@router.get("/expenses", response_model=ExpenseBreakdown)
def get_expense_breakdown(
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Expense categories with budgets, monthly and weekly trends, top spending."""
    transactions = fetch_transactions(db, session, date_range, kind=Kind.expense)
    budgets = fetch_budgets(db, session)
    options = AggregationOptions(
        kind=Kind.expense,
        granularity=Granularity.monthly,
        series_kind=Kind.expense,
        top_n=settings.top_n,
        alert_threshold=settings.budget_alert_threshold,
        week_start=_week_start(),
    )
    result = aggregation_service.aggregate(transactions, date_range, budgets, options)
    weekly = aggregation_service.aggregate_by_period(
        transactions, Granularity.weekly, Kind.expense, date_range, week_start=_week_start()
    )

    return ExpenseBreakdown(
        categories=_categories(result.category_totals),
        monthly_trends=_series(result.period_series),
        weekly_trends=_series(weekly),
        top_spending=_top_spending(result.top_spending),
        budget_alerts=_alerts(result.budget_alerts),
        total_expenses=_money(result.total_expenses_cents),
        average_daily=_money(result.average_daily_cents),
        highest_category=result.highest_category
    )


@router.get("/income", response_model=IncomeBreakdown)
def get_income_breakdown(
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Income categories, monthly trend, top sources and recurring share."""
    transactions = fetch_transactions(db, session, date_range, kind=Kind.income)

    categories = aggregation_service.aggregate_by_category(transactions, Kind.income)
    monthly = aggregation_service.aggregate_by_period(
        transactions, Granularity.monthly, Kind.income, date_range
    )
    split = aggregation_service.classify_income(transactions, settings.recurring_income_pattern)

    return IncomeBreakdown(
        categories=_categories(categories),
        monthly_trends=_series(monthly),
        top_sources=[
            TopSourceItem(source=s.source, amount=_money(s.amount_cents), transactions=s.transactions)
            for s in aggregation_service.top_sources(transactions, settings.top_n)
        ],
        total_income=_money(split.total_cents),
        recurring_vs_one_time=RecurringSplit(
            recurring=_money(split.recurring_cents),
            one_time=_money(split.one_time_cents)
        ),
        growth=aggregation_service.growth_percentage(monthly)
    )


@router.get("/income-expense", response_model=list[IncomeExpensePoint])
def get_income_expense_chart(
    granularity: Granularity = Query(Granularity.daily),
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """One income/expense/net point per period of the range, empty periods included."""
    transactions = fetch_transactions(db, session, date_range)
    points = aggregation_service.income_expense_series(
        transactions, date_range, granularity, week_start=_week_start()
    )

    return [
        IncomeExpensePoint(
            period=p.label,
            start=p.start,
            income=_money(p.income_cents),
            expenses=_money(p.expense_cents),
            net=_money(p.net_cents)
        )
        for p in points
    ]
