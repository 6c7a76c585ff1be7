"""
Account API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from fintrack.dependencies import get_db, get_current_session, UserSession
from fintrack.models import Account
from fintrack.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountList,
    AccountSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _get_owned_account(db: Session, session: UserSession, account_id: str) -> Account:
    account = db.query(Account).filter(
        Account.id == account_id,
        Account.user_id == session.user_id
    ).first()
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


@router.get("", response_model=AccountList)
def list_accounts(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """List the user's accounts."""
    query = db.query(Account).filter(Account.user_id == session.user_id)
    accounts = query.order_by(Account.created_at.asc()).offset(skip).limit(limit).all()

    return AccountList(
        items=accounts,
        total=query.count()
    )


@router.get("/summary", response_model=AccountSummary)
def get_account_summary(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Total balance across all accounts."""
    total, count = db.query(
        func.coalesce(func.sum(Account.balance), 0),
        func.count(Account.id)
    ).filter(Account.user_id == session.user_id).one()

    return AccountSummary(total_balance=float(total), account_count=count)


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    account: AccountCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Create a new account."""
    db_account = Account(
        user_id=session.user_id,
        name=account.name,
        type=account.type,
        institution=account.institution,
        balance=account.balance
    )
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    logger.info("Created account %s for user %s", db_account.id, session.user_id)
    return db_account


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get a specific account."""
    return _get_owned_account(db, session, account_id)


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    account_update: AccountUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Update an account."""
    account = _get_owned_account(db, session, account_id)

    update_data = account_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(account, field, value)

    db.commit()
    db.refresh(account)
    return account


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Delete an account together with its transactions."""
    account = _get_owned_account(db, session, account_id)

    db.delete(account)
    db.commit()
    logger.info("Deleted account %s for user %s", account_id, session.user_id)
    return None
