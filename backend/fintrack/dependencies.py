"""
FastAPI dependencies.
"""

from dataclasses import dataclass
from datetime import date
from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from fintrack.database import SessionLocal
from fintrack.models.user import User
from fintrack.services.aggregation_service import DateRange


@dataclass(frozen=True)
class UserSession:
    """The authenticated caller, passed explicitly to the data layer."""
    user_id: str
    email: str


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_session(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> UserSession:
    """
    Resolve the caller from the X-User-Id header set by the auth gateway.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = db.query(User).filter(User.id == x_user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")

    return UserSession(user_id=user.id, email=user.email)


def get_date_range(
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to")
) -> DateRange:
    """
    Inclusive date range from the query string.
    Defaults to the start of the current month through today.
    """
    today = date.today()
    start = from_date or today.replace(day=1)
    end = to_date or today
    return DateRange(start=start, end=end)
