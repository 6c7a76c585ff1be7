"""
Period aggregation of transactions for dashboard analytics.

Every function here is a pure transform over already-fetched records:
category breakdowns, per-period series, top spending, budget alerts and
the recurring income split. Money is summed in integer cents.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Optional, Pattern, Sequence, Union

from fintrack.exceptions import InvalidAmountError, InvalidTransactionError
from fintrack.services.money import divide_cents, from_cents, percent_of, to_cents

logger = logging.getLogger(__name__)

# Heuristic only. Callers can pass their own pattern to classify_income.
DEFAULT_RECURRING_PATTERN = r"salary|wage|payroll|monthly|weekly"

DEFAULT_ALERT_THRESHOLD = 0.8
DEFAULT_TOP_N = 5

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}
SUNDAY = WEEKDAYS["sunday"]


class Kind(str, Enum):
    """Which side of the ledger a calculation looks at."""
    income = "income"
    expense = "expense"
    net = "net"


class Granularity(str, Enum):
    """Period bucket size."""
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


@dataclass(frozen=True)
class CategoryRef:
    name: str
    color: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class TransactionRecord:
    """A transaction as seen by the aggregator. Negative = expense."""
    id: Optional[str]
    amount_cents: int
    date: date
    description: str = ""
    category: Optional[CategoryRef] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(frozen=True)
class BudgetRecord:
    category_name: str
    amount_cents: int
    id: Optional[str] = None
    color: Optional[str] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""
    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    @property
    def days(self) -> int:
        if self.is_empty:
            return 0
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    amount_cents: int
    color: Optional[str]
    percentage: int
    transactions: int = 0
    budget_cents: Optional[int] = None

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)

    @property
    def budget(self) -> Optional[Decimal]:
        return from_cents(self.budget_cents) if self.budget_cents is not None else None


@dataclass(frozen=True)
class PeriodTotal:
    start: date
    label: str
    amount_cents: int

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(frozen=True)
class IncomeExpensePoint:
    start: date
    label: str
    income_cents: int
    expense_cents: int

    @property
    def net_cents(self) -> int:
        return self.income_cents - self.expense_cents


@dataclass(frozen=True)
class TopSpending:
    category: str
    amount_cents: int
    transactions: int
    avg_transaction_cents: Optional[int]

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)

    @property
    def avg_transaction(self) -> Optional[Decimal]:
        if self.avg_transaction_cents is None:
            return None
        return from_cents(self.avg_transaction_cents)


@dataclass(frozen=True)
class TopSource:
    source: str
    amount_cents: int
    transactions: int

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(frozen=True)
class BudgetAlert:
    category: str
    spent_cents: int
    budget_cents: int
    percentage: int


@dataclass(frozen=True)
class BudgetProgress:
    category: str
    budget_cents: int
    spent_cents: int
    percentage: int
    budget_id: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class IncomeSplit:
    recurring_cents: int
    one_time_cents: int

    @property
    def total_cents(self) -> int:
        return self.recurring_cents + self.one_time_cents


@dataclass
class AggregationOptions:
    """Selects which breakdown the composite aggregate() produces."""
    kind: Kind = Kind.expense
    granularity: Granularity = Granularity.monthly
    series_kind: Kind = Kind.net
    include_budgets: bool = True
    top_n: int = DEFAULT_TOP_N
    alert_threshold: float = DEFAULT_ALERT_THRESHOLD
    week_start: int = SUNDAY
    fill_periods: bool = False


@dataclass
class AggregationResult:
    category_totals: List[CategoryTotal] = field(default_factory=list)
    period_series: List[PeriodTotal] = field(default_factory=list)
    top_spending: List[TopSpending] = field(default_factory=list)
    budget_alerts: List[BudgetAlert] = field(default_factory=list)
    total_expenses_cents: int = 0
    total_income_cents: int = 0
    average_daily_cents: int = 0
    highest_category: Optional[str] = None

    @property
    def total_expenses(self) -> Decimal:
        return from_cents(self.total_expenses_cents)

    @property
    def total_income(self) -> Decimal:
        return from_cents(self.total_income_cents)

    @property
    def net_cents(self) -> int:
        return self.total_income_cents - self.total_expenses_cents


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------

def week_start_index(name: Union[str, int]) -> int:
    """Map a weekday name (or 0-6 index, Monday = 0) to a weekday index."""
    if isinstance(name, int) and not isinstance(name, bool):
        if 0 <= name <= 6:
            return name
        raise ValueError(f"Week start index out of range: {name}")
    try:
        return WEEKDAYS[str(name).strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown week start day: {name!r}") from None


def _parse_date(value: Any, ref: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text[-1:] in ("Z", "z"):
            # fromisoformat only accepts a Z suffix from Python 3.11
            text = text[:-1] + "+00:00"
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise InvalidTransactionError(ref, "date", value, "unparseable ISO-8601 date") from None
    raise InvalidTransactionError(ref, "date", value, f"unsupported type {type(value).__name__}")


def _parse_category(value: Any) -> Optional[CategoryRef]:
    if isinstance(value, CategoryRef):
        return value if value.name else None
    if isinstance(value, Mapping):
        name = value.get("name")
        if isinstance(name, str) and name:
            color = value.get("color")
            kind = value.get("type")
            return CategoryRef(
                name=name,
                color=color if isinstance(color, str) else None,
                type=kind if isinstance(kind, str) else None,
            )
    return None


def parse_transaction(raw: Any, index: int = 0) -> Optional[TransactionRecord]:
    """
    Build a TransactionRecord from a mapping.

    Returns None for rows missing an amount or a date so the caller can skip
    them. Values of the wrong type raise InvalidTransactionError naming the
    record (its ``id`` or its position in the batch).
    """
    if isinstance(raw, TransactionRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidTransactionError(index, "record", raw, "expected a mapping")

    ref = raw.get("id") or f"#{index}"
    amount = raw.get("amount")
    day = raw.get("date")
    if amount is None or amount == "" or day is None or day == "":
        logger.debug("Skipping transaction %s: missing amount or date", ref)
        return None

    try:
        amount_cents = to_cents(amount)
    except InvalidAmountError as e:
        raise InvalidTransactionError(ref, "amount", amount, str(e)) from None

    description = raw.get("description")
    return TransactionRecord(
        id=str(raw["id"]) if raw.get("id") is not None else None,
        amount_cents=amount_cents,
        date=_parse_date(day, ref),
        description=description if isinstance(description, str) else "",
        category=_parse_category(raw.get("category")),
    )


def normalize_transactions(rows: Iterable[Any]) -> List[TransactionRecord]:
    """Parse a batch of rows, dropping malformed ones."""
    records = []
    for index, raw in enumerate(rows):
        record = parse_transaction(raw, index)
        if record is not None:
            records.append(record)
    return records


def budget_lookup(budgets: Iterable[Any]) -> Dict[str, int]:
    """Build a category name -> budget cents lookup. Later entries win."""
    lookup: Dict[str, int] = {}
    for budget in budgets:
        if isinstance(budget, BudgetRecord):
            name, cents = budget.category_name, budget.amount_cents
        elif isinstance(budget, Mapping):
            name = budget.get("category_name") or budget.get("category")
            amount = budget.get("amount")
            if not name or amount is None:
                continue
            cents = to_cents(amount)
        else:
            raise InvalidAmountError(f"Unsupported budget entry: {budget!r}")
        if cents < 0:
            raise InvalidAmountError(f"Budget for {name!r} is negative: {from_cents(cents)}")
        lookup[name] = cents
    return lookup


def filter_range(transactions: Iterable[TransactionRecord], date_range: DateRange) -> List[TransactionRecord]:
    """Keep transactions inside the inclusive range. Inverted ranges keep nothing."""
    if date_range.is_empty:
        return []
    return [t for t in transactions if date_range.contains(t.date)]


# ---------------------------------------------------------------------------
# Bucketing
# ---------------------------------------------------------------------------

def _matches(kind: Kind, cents: int) -> bool:
    if kind is Kind.income:
        return cents > 0
    if kind is Kind.expense:
        return cents < 0
    return True


def _value(kind: Kind, cents: int) -> int:
    # Expenses are reported as positive magnitudes, net keeps the sign
    if kind is Kind.expense:
        return -cents
    return cents


def bucket_start(day: date, granularity: Granularity, week_start: int = SUNDAY) -> date:
    """First day of the bucket containing ``day``."""
    granularity = Granularity(granularity)
    if granularity is Granularity.daily:
        return day
    if granularity is Granularity.weekly:
        return day - timedelta(days=(day.weekday() - week_start) % 7)
    return day.replace(day=1)


def bucket_label(start: date, granularity: Granularity) -> str:
    if granularity is Granularity.monthly:
        return start.strftime("%Y-%m")
    return start.isoformat()


def _next_bucket(start: date, granularity: Granularity) -> date:
    if granularity is Granularity.daily:
        return start + timedelta(days=1)
    if granularity is Granularity.weekly:
        return start + timedelta(days=7)
    if start.month == 12:
        return date(start.year + 1, 1, 1)
    return date(start.year, start.month + 1, 1)


def enumerate_buckets(date_range: DateRange, granularity: Granularity, week_start: int = SUNDAY) -> List[date]:
    """Every bucket start that overlaps the inclusive range, in order."""
    granularity = Granularity(granularity)
    if date_range.is_empty:
        return []
    buckets = []
    current = bucket_start(date_range.start, granularity, week_start)
    while current <= date_range.end:
        buckets.append(current)
        current = _next_bucket(current, granularity)
    return buckets


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def aggregate_by_category(
    transactions: Iterable[TransactionRecord],
    kind: Kind = Kind.expense,
    budgets: Optional[Mapping] = None,
) -> List[CategoryTotal]:
    """
    Group income or expense transactions by category name.

    Uncategorized transactions still count toward the total used for the
    percentages. Result is sorted by amount, largest first.
    """
    kind = Kind(kind)
    if kind is Kind.net:
        raise ValueError("Category breakdown needs an income or expense kind")

    groups: Dict[str, Dict[str, Any]] = {}
    total = 0
    for t in transactions:
        if not _matches(kind, t.amount_cents):
            continue
        amount = abs(t.amount_cents)
        total += amount
        if t.category is None:
            continue

        group = groups.get(t.category.name)
        if group is None:
            group = groups[t.category.name] = {"amount": 0, "color": t.category.color, "count": 0}
        group["amount"] += amount
        group["count"] += 1

    lookup = budgets or {}
    totals = [
        CategoryTotal(
            name=name,
            amount_cents=group["amount"],
            color=group["color"],
            percentage=percent_of(group["amount"], total),
            transactions=group["count"],
            budget_cents=lookup.get(name),
        )
        for name, group in groups.items()
    ]
    totals.sort(key=lambda c: c.amount_cents, reverse=True)
    return totals


def aggregate_by_period(
    transactions: Iterable[TransactionRecord],
    granularity: Granularity = Granularity.monthly,
    kind: Kind = Kind.net,
    date_range: Optional[DateRange] = None,
    fill: bool = False,
    week_start: int = SUNDAY,
) -> List[PeriodTotal]:
    """
    Sum transactions per day, week or month.

    Without ``fill`` only buckets holding at least one matching transaction
    are returned. With ``fill`` every bucket of ``date_range`` is returned,
    zero or not.
    """
    granularity, kind = Granularity(granularity), Kind(kind)
    if fill and date_range is None:
        raise ValueError("Filling empty periods requires a date range")
    if date_range is not None:
        transactions = filter_range(transactions, date_range)

    sums: Dict[date, int] = {}
    for t in transactions:
        if not _matches(kind, t.amount_cents):
            continue
        key = bucket_start(t.date, granularity, week_start)
        sums[key] = sums.get(key, 0) + _value(kind, t.amount_cents)

    keys = enumerate_buckets(date_range, granularity, week_start) if fill else sorted(sums)
    return [PeriodTotal(start=k, label=bucket_label(k, granularity), amount_cents=sums.get(k, 0)) for k in keys]


def income_expense_series(
    transactions: Iterable[TransactionRecord],
    date_range: DateRange,
    granularity: Granularity = Granularity.daily,
    week_start: int = SUNDAY,
) -> List[IncomeExpensePoint]:
    """One income/expense point per bucket of the range, including empty ones."""
    records = list(transactions)
    income = aggregate_by_period(records, granularity, Kind.income, date_range, True, week_start)
    expenses = aggregate_by_period(records, granularity, Kind.expense, date_range, True, week_start)
    return [
        IncomeExpensePoint(start=i.start, label=i.label, income_cents=i.amount_cents, expense_cents=e.amount_cents)
        for i, e in zip(income, expenses)
    ]


def top_spending(
    category_totals: Sequence[CategoryTotal],
    n: int = DEFAULT_TOP_N,
    transaction_counts: Optional[Mapping] = None,
) -> List[TopSpending]:
    """Largest ``n`` categories with their transaction count and average size."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    ranked = sorted(category_totals, key=lambda c: c.amount_cents, reverse=True)[:n]
    entries = []
    for c in ranked:
        count = transaction_counts.get(c.name, 0) if transaction_counts is not None else c.transactions
        entries.append(TopSpending(
            category=c.name,
            amount_cents=c.amount_cents,
            transactions=count,
            avg_transaction_cents=divide_cents(c.amount_cents, count) if count > 0 else None,
        ))
    return entries


def top_sources(
    transactions: Iterable[TransactionRecord],
    n: int = DEFAULT_TOP_N,
    kind: Kind = Kind.income,
) -> List[TopSource]:
    """Largest ``n`` descriptions by summed amount."""
    kind = Kind(kind)
    if kind is Kind.net:
        raise ValueError("Top sources needs an income or expense kind")

    groups: Dict[str, List[int]] = {}
    for t in transactions:
        if not _matches(kind, t.amount_cents):
            continue
        group = groups.setdefault(t.description, [0, 0])
        group[0] += abs(t.amount_cents)
        group[1] += 1

    ranked = sorted(groups.items(), key=lambda item: item[1][0], reverse=True)[:n]
    return [TopSource(source=name, amount_cents=amount, transactions=count) for name, (amount, count) in ranked]


def budget_comparison(
    category_totals: Sequence[CategoryTotal],
    budgets: Optional[Mapping] = None,
    alert_threshold: float = DEFAULT_ALERT_THRESHOLD,
) -> List[BudgetAlert]:
    """
    Categories whose spending is above ``alert_threshold`` of their budget.

    ``budgets`` maps category name to budget cents; when omitted the budget
    attached to each CategoryTotal is used. Percentages are not capped.
    """
    if alert_threshold < 0:
        raise ValueError(f"alert_threshold must be non-negative, got {alert_threshold}")
    threshold = Fraction(str(alert_threshold))

    alerts = []
    for c in category_totals:
        budget = budgets.get(c.name) if budgets is not None else c.budget_cents
        if not budget:
            continue
        if c.amount_cents > budget * threshold:
            alerts.append(BudgetAlert(
                category=c.name,
                spent_cents=c.amount_cents,
                budget_cents=budget,
                percentage=percent_of(c.amount_cents, budget),
            ))
    return alerts


def budget_progress(
    category_totals: Sequence[CategoryTotal],
    budgets: Sequence[BudgetRecord],
) -> List[BudgetProgress]:
    """Spent amount and usage percentage for every budget, in budget order."""
    spent = {c.name: c.amount_cents for c in category_totals}
    return [
        BudgetProgress(
            category=b.category_name,
            budget_cents=b.amount_cents,
            spent_cents=spent.get(b.category_name, 0),
            percentage=percent_of(spent.get(b.category_name, 0), b.amount_cents),
            budget_id=b.id,
            color=b.color,
        )
        for b in budgets
    ]


def classify_income(
    transactions: Iterable[TransactionRecord],
    pattern: Union[str, Pattern, None] = None,
) -> IncomeSplit:
    """
    Split income into recurring and one-time by matching descriptions.

    This is a keyword heuristic: anything matching ``pattern`` (salary,
    wage, payroll... by default) counts as recurring.
    """
    if pattern is None:
        pattern = DEFAULT_RECURRING_PATTERN
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)

    recurring = one_time = 0
    for t in transactions:
        if t.amount_cents <= 0:
            continue
        if pattern.search(t.description or ""):
            recurring += t.amount_cents
        else:
            one_time += t.amount_cents
    return IncomeSplit(recurring_cents=recurring, one_time_cents=one_time)


def growth_percentage(series: Sequence[PeriodTotal]) -> float:
    """Change from the first to the last period, in percent (1 decimal)."""
    if len(series) < 2 or series[0].amount_cents == 0:
        return 0.0
    first, last = series[0].amount_cents, series[-1].amount_cents
    return round(float(Fraction(last - first, first) * 100), 1)


def average_daily_cents(total_cents: int, date_range: DateRange) -> int:
    return divide_cents(total_cents, date_range.days)


def aggregate(
    transactions: Iterable[Any],
    date_range: DateRange,
    budgets: Iterable[Any] = (),
    options: Optional[AggregationOptions] = None,
) -> AggregationResult:
    """
    Full breakdown for one date range.

    ``transactions`` may be TransactionRecords or plain mappings; rows
    missing an amount or date are skipped.
    """
    options = options or AggregationOptions()
    records = filter_range(normalize_transactions(transactions), date_range)
    lookup = budget_lookup(budgets) if options.include_budgets else {}

    categories = aggregate_by_category(records, options.kind, lookup)
    series = aggregate_by_period(
        records,
        options.granularity,
        options.series_kind,
        date_range,
        fill=options.fill_periods,
        week_start=options.week_start,
    )
    alerts = budget_comparison(categories, lookup, options.alert_threshold) if options.include_budgets else []

    total_expenses = sum(-t.amount_cents for t in records if t.amount_cents < 0)
    total_income = sum(t.amount_cents for t in records if t.amount_cents > 0)
    selected_total = total_income if options.kind is Kind.income else total_expenses

    return AggregationResult(
        category_totals=categories,
        period_series=series,
        top_spending=top_spending(categories, options.top_n),
        budget_alerts=alerts,
        total_expenses_cents=total_expenses,
        total_income_cents=total_income,
        average_daily_cents=average_daily_cents(selected_total, date_range),
        highest_category=categories[0].name if categories else None,
    )
