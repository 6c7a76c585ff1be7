"""Service for reading and acknowledging user notifications."""

from typing import List, Optional
from sqlalchemy.orm import Session

from fintrack.dependencies import UserSession
from fintrack.models.notification import Notification


def get_notifications(
    db: Session,
    session: UserSession,
    is_read: Optional[bool] = None,
    limit: int = 20
) -> List[Notification]:
    """Get the user's notifications, newest first."""
    query = db.query(Notification).filter(Notification.user_id == session.user_id)

    if is_read is not None:
        query = query.filter(Notification.is_read == is_read)

    return query.order_by(Notification.created_at.desc()).limit(limit).all()


def get_unread_count(db: Session, session: UserSession) -> int:
    """Get count of unread notifications."""
    return db.query(Notification).filter(
        Notification.user_id == session.user_id,
        Notification.is_read == False
    ).count()


def mark_all_read(db: Session, session: UserSession) -> int:
    """Mark all notifications as read. Returns count updated."""
    result = db.query(Notification).filter(
        Notification.user_id == session.user_id,
        Notification.is_read == False
    ).update({Notification.is_read: True})
    db.commit()
    return result
