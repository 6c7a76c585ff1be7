"""
Profile API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fintrack.dependencies import get_db, get_current_session, UserSession
from fintrack.models import User
from fintrack.schemas.profile import ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get the current user's profile."""
    return db.query(User).filter(User.id == session.user_id).one()


@router.patch("", response_model=ProfileResponse)
def update_profile(
    update: ProfileUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Update the current user's display name or avatar URL."""
    user = db.query(User).filter(User.id == session.user_id).one()

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user
