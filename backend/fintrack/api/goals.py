"""
Savings goal API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fintrack.dependencies import get_db, get_current_session, UserSession
from fintrack.models import SavingsGoal
from fintrack.schemas.savings_goal import (
    SavingsGoalCreate,
    SavingsGoalUpdate,
    SavingsGoalResponse,
)
from fintrack.services.money import percent_of, to_cents

router = APIRouter(prefix="/goals", tags=["goals"])


def goal_percentage(current_amount, target_amount) -> int:
    """Completion percentage of a goal; 0 when the target is 0."""
    return percent_of(to_cents(current_amount), to_cents(target_amount))


def _to_response(goal: SavingsGoal) -> SavingsGoalResponse:
    return SavingsGoalResponse(
        id=goal.id,
        name=goal.name,
        target_amount=float(goal.target_amount),
        current_amount=float(goal.current_amount),
        target_date=goal.target_date,
        is_completed=goal.is_completed,
        percentage=goal_percentage(goal.current_amount, goal.target_amount),
        created_at=goal.created_at
    )


def _get_owned_goal(db: Session, session: UserSession, goal_id: str) -> SavingsGoal:
    goal = db.query(SavingsGoal).filter(
        SavingsGoal.id == goal_id,
        SavingsGoal.user_id == session.user_id
    ).first()
    if not goal:
        raise HTTPException(status_code=404, detail="Savings goal not found")
    return goal


@router.get("", response_model=list[SavingsGoalResponse])
def list_goals(
    include_completed: bool = Query(False),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Savings goals ordered by target date, soonest first."""
    query = db.query(SavingsGoal).filter(SavingsGoal.user_id == session.user_id)
    if not include_completed:
        query = query.filter(SavingsGoal.is_completed == False)

    return [_to_response(g) for g in query.order_by(SavingsGoal.target_date.asc()).all()]


@router.post("", response_model=SavingsGoalResponse, status_code=201)
def create_goal(
    goal: SavingsGoalCreate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Create a savings goal."""
    db_goal = SavingsGoal(
        user_id=session.user_id,
        name=goal.name,
        target_amount=goal.target_amount,
        current_amount=goal.current_amount,
        target_date=goal.target_date
    )
    db.add(db_goal)
    db.commit()
    db.refresh(db_goal)
    return _to_response(db_goal)


@router.patch("/{goal_id}", response_model=SavingsGoalResponse)
def update_goal(
    goal_id: str,
    update: SavingsGoalUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Update a savings goal."""
    goal = _get_owned_goal(db, session, goal_id)

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(goal, field, value)

    db.commit()
    db.refresh(goal)
    return _to_response(goal)


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Delete a savings goal."""
    goal = _get_owned_goal(db, session, goal_id)
    db.delete(goal)
    db.commit()
    return None
