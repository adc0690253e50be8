"""
Notification API routes. Every route acts on the logged-in user's inbox.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, Query

from liora.core.deps import get_current_user, get_notification_service
from liora.models.auth import User
from liora.models.schemas import Notification, UnreadCountResponse
from liora.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("", response_model=List[Notification])
async def list_notifications(
    unread_only: bool = Query(default=False),
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Notifications for the current user, newest first."""
    return notifications.list_for_user(user.id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service)
):
    return UnreadCountResponse(
        user_id=user.id, unread=notifications.unread_count(user.id))


@router.post("/read-all")
async def mark_all_read(
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service)
):
    return {"updated": notifications.mark_all_read(user.id)}


@router.post("/{notification_id}/read", response_model=Notification)
async def mark_read(
    notification_id: str,
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service)
):
    return notifications.mark_read(notification_id, user_id=user.id)


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: str,
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service)
):
    notifications.remove(notification_id, user_id=user.id)


@router.delete("")
async def clear_notifications(
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Remove every notification addressed to the current user."""
    return {"removed": notifications.clear(user.id)}
