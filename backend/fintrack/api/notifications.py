"""API endpoints for notifications."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from fintrack.dependencies import get_db, get_current_session, UserSession
from fintrack.models.notification import Notification
from fintrack.schemas.notification import (
    NotificationResponse,
    NotificationListResponse,
    NotificationUpdate,
    UnreadCountResponse,
)
from fintrack.services import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
def get_notifications(
    is_read: Optional[bool] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get notifications with optional read filter."""
    notifications = notification_service.get_notifications(db, session, is_read=is_read, limit=limit)

    return NotificationListResponse(
        items=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=notification_service.get_unread_count(db, session),
        total=len(notifications)
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Get count of unread notifications."""
    return UnreadCountResponse(count=notification_service.get_unread_count(db, session))


@router.patch("/{notification_id}", response_model=NotificationResponse)
def update_notification(
    notification_id: str,
    update: NotificationUpdate,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Mark a notification read or unread."""
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == session.user_id
    ).first()
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(notification, field, value)

    db.commit()
    db.refresh(notification)
    return NotificationResponse.model_validate(notification)


@router.post("/mark-all-read")
def mark_all_read(
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_current_session)
):
    """Mark all notifications as read."""
    count = notification_service.mark_all_read(db, session)
    return {"marked_read": count}
