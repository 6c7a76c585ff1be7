"""
Transaction API endpoints.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload

from fintrack.dependencies import get_db, get_current_session, UserSession
from fintrack.api.categories import get_visible_category
from fintrack.models import Account, Category, Transaction
from fintrack.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    RecentTransaction,
)
from fintrack.services.palette import normalize_token
from fintrack.services.transaction_service import apply_category_sign

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _get_owned_transaction(db: Session, session: UserSession, transaction_id: str) -> Transaction:
    transaction = db.query(Transaction).filter(
        Transaction.id == transaction_id,
        Transaction.user_id == session.user_id
    ).first()
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


def _get_owned_account(db: Session, session: UserSession, account_id: str) -> Account:
    account = db.query(Account).filter(
        Account.id == account_id,
        Account.user_id == session.user_id
    ).first()
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


def _get_category(db: Session, session: UserSession, category_id: Optional[str]) -> Optional[Category]:
    if not category_id:
        return None
    return get_visible_category(db, session, category_id)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    account_id: Optional[str] = None,
    category_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """List transactions with filtering and pagination"""
    query = db.query(Transaction).filter(Transaction.user_id == session.user_id)

    if account_id:
        query = query.filter(Transaction.account_id == account_id)
    if category_id:
        query = query.filter(Transaction.category_id == category_id)
    if start_date:
        query = query.filter(Transaction.date >= start_date)
    if end_date:
        query = query.filter(Transaction.date <= end_date)
    if search:
        query = query.filter(Transaction.description.ilike(f"%{search}%"))

    total = query.count()

    query = query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
    query = query.offset((page - 1) * per_page).limit(per_page)

    transactions = query.all()
    pages = (total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        page=page,
        pages=pages
    )


@router.get("/recent", response_model=list[RecentTransaction])
def get_recent_transactions(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get most recent transactions for dashboard widget"""
    transactions = db.query(Transaction).options(joinedload(Transaction.category)).filter(
        Transaction.user_id == session.user_id
    ).order_by(Transaction.date.desc(), Transaction.created_at.desc()).limit(limit).all()

    return [
        RecentTransaction(
            id=t.id,
            date=t.date.isoformat(),
            description=t.description,
            category=t.category.name if t.category else "Uncategorized",
            color=normalize_token(t.category.color if t.category else None),
            amount=float(t.amount)
        )
        for t in transactions
    ]


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get a single transaction"""
    transaction = _get_owned_transaction(db, session, transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Record a transaction and move the account balance by its amount"""
    account = _get_owned_account(db, session, data.account_id)
    category = _get_category(db, session, data.category_id)
    amount = apply_category_sign(data.amount, category.type if category else None)

    transaction = Transaction(
        user_id=session.user_id,
        account_id=account.id,
        category_id=category.id if category else None,
        description=data.description,
        amount=amount,
        date=data.date,
        notes=data.notes
    )
    db.add(transaction)
    account.balance = Decimal(account.balance or 0) + amount

    db.commit()
    db.refresh(transaction)
    logger.info("Created transaction %s (%s) on account %s", transaction.id, amount, account.id)

    return TransactionResponse.model_validate(transaction)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Update a transaction, keeping the account balance in step"""
    transaction = _get_owned_transaction(db, session, transaction_id)
    update_data = update.model_dump(exclude_unset=True)

    if "category_id" in update_data:
        category = _get_category(db, session, update_data["category_id"])
    else:
        category = transaction.category

    old_amount = Decimal(transaction.amount)
    new_amount = update_data.pop("amount", None)
    if new_amount is None:
        new_amount = old_amount
    new_amount = apply_category_sign(new_amount, category.type if category else None)

    for field, value in update_data.items():
        setattr(transaction, field, value)
    transaction.amount = new_amount

    if new_amount != old_amount:
        account = transaction.account
        account.balance = Decimal(account.balance or 0) - old_amount + new_amount

    db.commit()
    db.refresh(transaction)

    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Delete a transaction and take its amount back off the account balance"""
    transaction = _get_owned_transaction(db, session, transaction_id)

    account = transaction.account
    account.balance = Decimal(account.balance or 0) - Decimal(transaction.amount)

    db.delete(transaction)
    db.commit()
    logger.info("Deleted transaction %s", transaction_id)
    return None
