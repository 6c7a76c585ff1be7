"""
Analytics response schemas.
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import date


class CategoryBreakdown(BaseModel):
    name: str
    amount: float
    color: Optional[str]
    color_rgba: str
    percentage: int
    transactions: int
    budget: Optional[float] = None


class PeriodPoint(BaseModel):
    period: str
    start: date
    amount: float


class TopSpendingItem(BaseModel):
    category: str
    amount: float
    transactions: int
    avg_transaction: Optional[float]


class TopSourceItem(BaseModel):
    source: str
    amount: float
    transactions: int


class BudgetAlertItem(BaseModel):
    category: str
    spent: float
    budget: float
    percentage: int


class AggregationSummary(BaseModel):
    date_from: date
    date_to: date
    category_totals: List[CategoryBreakdown]
    period_series: List[PeriodPoint]
    top_spending: List[TopSpendingItem]
    budget_alerts: List[BudgetAlertItem]
    total_expenses: float
    total_income: float
    net: float
    average_daily: float
    highest_category: Optional[str]


class ExpenseBreakdown(BaseModel):
    categories: List[CategoryBreakdown]
    monthly_trends: List[PeriodPoint]
    weekly_trends: List[PeriodPoint]
    top_spending: List[TopSpendingItem]
    budget_alerts: List[BudgetAlertItem]
    total_expenses: float
    average_daily: float
    highest_category: Optional[str]


class RecurringSplit(BaseModel):
    recurring: float
    one_time: float


class IncomeBreakdown(BaseModel):
    categories: List[CategoryBreakdown]
    monthly_trends: List[PeriodPoint]
    top_sources: List[TopSourceItem]
    total_income: float
    recurring_vs_one_time: RecurringSplit
    growth: float


class IncomeExpensePoint(BaseModel):
    period: str
    start: date
    income: float
    expenses: float
    net: float
