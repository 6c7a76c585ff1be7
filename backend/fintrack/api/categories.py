"""
Category API endpoints.

Categories without an owner are the shared defaults: every user can read
and use them, nobody can change them. Users may add their own categories
and only they can see, edit or delete those.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional

from fintrack.dependencies import get_db, get_current_session, UserSession
from fintrack.models import Category, CategoryType, Transaction, Budget
from fintrack.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryList,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


def visible_categories(db: Session, session: UserSession):
    """Shared defaults plus the session user's own categories."""
    return db.query(Category).filter(
        or_(Category.user_id.is_(None), Category.user_id == session.user_id)
    )


def get_visible_category(db: Session, session: UserSession, category_id: str) -> Category:
    category = visible_categories(db, session).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _get_editable_category(db: Session, session: UserSession, category_id: str) -> Category:
    category = get_visible_category(db, session, category_id)
    if category.user_id is None:
        raise HTTPException(status_code=403, detail="Default categories cannot be modified")
    return category


@router.get("", response_model=CategoryList)
def list_categories(
    type: Optional[CategoryType] = None,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """List categories, optionally only income or only expense ones."""
    query = visible_categories(db, session)
    if type is not None:
        query = query.filter(Category.type == type)
    categories = query.order_by(Category.name.asc()).all()

    return CategoryList(
        items=categories,
        total=len(categories)
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Create a category owned by the current user."""
    db_category = Category(
        user_id=session.user_id,
        name=category.name,
        type=category.type,
        color=category.color.value,
        icon=category.icon
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get a specific category."""
    return get_visible_category(db, session, category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Update one of the user's own categories."""
    category = _get_editable_category(db, session, category_id)

    if category_update.name is not None:
        category.name = category_update.name
    if category_update.type is not None:
        category.type = category_update.type
    if category_update.color is not None:
        category.color = category_update.color.value
    if category_update.icon is not None:
        category.icon = category_update.icon

    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Delete one of the user's own categories. Its transactions become uncategorized."""
    category = _get_editable_category(db, session, category_id)

    in_budget = db.query(Budget).filter(
        Budget.category_id == category_id,
        Budget.user_id == session.user_id
    ).count()
    if in_budget:
        raise HTTPException(status_code=409, detail="Category is used by a budget")

    db.query(Transaction).filter(
        Transaction.category_id == category_id,
        Transaction.user_id == session.user_id
    ).update({"category_id": None})

    db.delete(category)
    db.commit()
    logger.info("Deleted category %s for user %s", category_id, session.user_id)
    return None
