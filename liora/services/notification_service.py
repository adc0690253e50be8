"""
Notification Service - in-process inbox for call and meeting updates.
"""

from typing import List, Optional
import logging
import random
import time

from liora.core.events import event_bus, Event, EventType
from liora.core.exceptions import ResourceNotFoundError
from liora.models.schemas import Notification

logger = logging.getLogger(__name__)


def generate_notification_id() -> str:
    return f"notif-{int(time.time() * 1000)}-{random.randint(0, 99999):05d}"


class NotificationService:
    """
    Keeps every notification in a single list, newest first.
    Nothing here is persisted.
    """

    def __init__(self, seed: Optional[List[Notification]] = None):
        self._notifications: List[Notification] = list(seed or [])

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    async def add(self, notification: Notification) -> Notification:
        self._notifications.insert(0, notification)
        logger.debug(
            f"Notification {notification.id} ({notification.type}) for {notification.user_id}")
        await event_bus.publish(Event(
            type=EventType.NOTIFICATION_CREATED,
            data={
                "notification_id": notification.id,
                "type": notification.type,
                "user_id": notification.user_id,
            },
            source="notification_service"
        ))
        return notification

    def get(self, notification_id: str, user_id: Optional[str] = None) -> Notification:
        for notification in self._notifications:
            if notification.id == notification_id and (
                    user_id is None or notification.user_id == user_id):
                return notification
        raise ResourceNotFoundError("Notification", notification_id)

    def list_for_user(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        """Notifications addressed to a user, newest first."""
        items = [n for n in self._notifications if n.user_id == user_id]
        if unread_only:
            items = [n for n in items if not n.read]
        return sorted(items, key=lambda n: n.timestamp, reverse=True)

    def unread_count(self, user_id: str) -> int:
        return sum(1 for n in self._notifications
                   if n.user_id == user_id and not n.read)

    def mark_read(self, notification_id: str, user_id: Optional[str] = None) -> Notification:
        notification = self.get(notification_id, user_id)
        notification.read = True
        return notification

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification for a user; returns how many."""
        changed = 0
        for notification in self._notifications:
            if notification.user_id == user_id and not notification.read:
                notification.read = True
                changed += 1
        return changed

    def remove(self, notification_id: str, user_id: Optional[str] = None) -> None:
        notification = self.get(notification_id, user_id)
        self._notifications.remove(notification)

    def clear(self, user_id: Optional[str] = None) -> int:
        """Drop all notifications, or only one user's."""
        before = len(self._notifications)
        if user_id is None:
            self._notifications = []
        else:
            self._notifications = [
                n for n in self._notifications if n.user_id != user_id]
        return before - len(self._notifications)
