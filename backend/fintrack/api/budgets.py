"""
Budget API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fintrack.dependencies import get_db, get_current_session, get_date_range, UserSession
from fintrack.api.categories import get_visible_category
from fintrack.models import Budget
from fintrack.schemas.budget import (
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
    BudgetOverviewItem,
)
from fintrack.services import aggregation_service
from fintrack.services.aggregation_service import DateRange, Kind
from fintrack.services.money import from_cents
from fintrack.services.palette import normalize_token
from fintrack.services.transaction_service import fetch_budgets, fetch_transactions

router = APIRouter(prefix="/budgets", tags=["budgets"])


def _get_owned_budget(db: Session, session: UserSession, budget_id: str) -> Budget:
    budget = db.query(Budget).filter(
        Budget.id == budget_id,
        Budget.user_id == session.user_id
    ).first()
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.get("", response_model=list[BudgetResponse])
def list_budgets(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """List the user's budgets."""
    return db.query(Budget).filter(
        Budget.user_id == session.user_id
    ).order_by(Budget.created_at.asc()).all()


@router.get("/overview", response_model=list[BudgetOverviewItem])
def get_budget_overview(
    date_range: DateRange = Depends(get_date_range),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Spending against every budget for the date range."""
    budgets = fetch_budgets(db, session)
    transactions = fetch_transactions(db, session, date_range, kind=Kind.expense)
    totals = aggregation_service.aggregate_by_category(transactions, Kind.expense)

    return [
        BudgetOverviewItem(
            id=p.budget_id,
            category=p.category,
            color=normalize_token(p.color),
            amount=float(from_cents(p.budget_cents)),
            spent=float(from_cents(p.spent_cents)),
            percentage=p.percentage
        )
        for p in aggregation_service.budget_progress(totals, budgets)
    ]


@router.post("", response_model=BudgetResponse, status_code=201)
def create_budget(
    budget: BudgetCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Create a budget for a category."""
    category = get_visible_category(db, session, budget.category_id)

    existing = db.query(Budget).filter(
        Budget.user_id == session.user_id,
        Budget.category_id == budget.category_id
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="Budget already exists for this category")

    db_budget = Budget(
        user_id=session.user_id,
        category_id=category.id,
        amount=budget.amount,
        period=budget.period
    )
    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    return db_budget


@router.patch("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    update: BudgetUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Update a budget's amount or period."""
    budget = _get_owned_budget(db, session, budget_id)

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(budget, field, value)

    db.commit()
    db.refresh(budget)
    return budget


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Delete a budget."""
    budget = _get_owned_budget(db, session, budget_id)
    db.delete(budget)
    db.commit()
    return None
