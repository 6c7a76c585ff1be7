"""Data access for analytics: loads a user's rows and hands them to the aggregator."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from fintrack.dependencies import UserSession
from fintrack.models.budget import Budget
from fintrack.models.category import CategoryType
from fintrack.models.transaction import Transaction
from fintrack.services.aggregation_service import (
    BudgetRecord,
    CategoryRef,
    DateRange,
    Kind,
    TransactionRecord,
)
from fintrack.services.money import to_cents

logger = logging.getLogger(__name__)


def apply_category_sign(amount: Decimal, category_type: Optional[CategoryType]) -> Decimal:
    """
    Force the sign of an entered amount to match its category.

    Expense categories store negative amounts, income categories positive.
    Without a category the amount is kept as entered.
    """
    if amount == 0:
        raise ValueError("Transaction amount cannot be zero")
    if category_type == CategoryType.expense and amount > 0:
        return -amount
    if category_type == CategoryType.income and amount < 0:
        return abs(amount)
    return amount


def to_record(transaction: Transaction) -> TransactionRecord:
    """Convert an ORM row to the aggregator's record type."""
    category = None
    if transaction.category is not None:
        category = CategoryRef(
            name=transaction.category.name,
            color=transaction.category.color,
            type=transaction.category.type.value if transaction.category.type else None,
        )
    return TransactionRecord(
        id=transaction.id,
        amount_cents=to_cents(transaction.amount),
        date=transaction.date,
        description=transaction.description,
        category=category,
    )


def fetch_transactions(
    db: Session,
    session: UserSession,
    date_range: DateRange,
    kind: Optional[Kind] = None
) -> List[TransactionRecord]:
    """Transactions of the session's user inside the inclusive range, oldest first."""
    if date_range.is_empty:
        return []

    query = db.query(Transaction).options(joinedload(Transaction.category)).filter(
        Transaction.user_id == session.user_id,
        Transaction.date >= date_range.start,
        Transaction.date <= date_range.end
    )
    if kind == Kind.income:
        query = query.filter(Transaction.amount > 0)
    elif kind == Kind.expense:
        query = query.filter(Transaction.amount < 0)

    rows = query.order_by(Transaction.date.asc()).all()
    logger.debug("Fetched %d transactions for user %s (%s..%s)",
                 len(rows), session.user_id, date_range.start, date_range.end)
    return [to_record(t) for t in rows]


def fetch_budgets(db: Session, session: UserSession) -> List[BudgetRecord]:
    """Budgets of the session's user, keyed by their category name."""
    budgets = db.query(Budget).options(joinedload(Budget.category)).filter(
        Budget.user_id == session.user_id
    ).order_by(Budget.created_at.asc()).all()

    return [
        BudgetRecord(
            category_name=b.category.name,
            amount_cents=to_cents(b.amount),
            id=b.id,
            color=b.category.color,
        )
        for b in budgets
        if b.category is not None
    ]
