"""Pydantic schemas for notifications."""

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from fintrack.models.notification import NotificationType


class NotificationUpdate(BaseModel):
    is_read: Optional[bool] = None


class NotificationResponse(BaseModel):
    id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationListResponse(BaseModel):
    items: List[NotificationResponse]
    unread_count: int
    total: int


class UnreadCountResponse(BaseModel):
    count: int
