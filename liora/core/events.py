"""
Event system for decoupled communication between components.
Implements a simple pub/sub pattern for application events.
"""

from typing import Callable, Dict, List, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import asyncio
import logging

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Enumeration of event types in the application."""

    # Auth events
    AUTH_LOGIN = "auth.login"
    AUTH_LOGOUT = "auth.logout"

    # Call events
    CALL_REQUESTED = "call.requested"
    CALL_RESPONDED = "call.responded"
    CALL_STATUS_CHANGED = "call.status_changed"
    MEETING_SCHEDULED = "meeting.scheduled"
    MEETING_CANCELLED = "meeting.cancelled"

    # Notification events
    NOTIFICATION_CREATED = "notification.created"
    TOAST = "toast"

    # Interview events
    INTERVIEW_INITIALIZED = "interview.initialized"
    INTERVIEW_RESPONSE_PROCESSED = "interview.response_processed"
    INTERVIEW_COMPLETED = "interview.completed"

    # Upload events
    UPLOAD_STARTED = "upload.started"
    UPLOAD_COMPLETED = "upload.completed"
    UPLOAD_FAILED = "upload.failed"

    # System events
    PROVIDER_INITIALIZED = "provider.initialized"
    PROVIDER_ERROR = "provider.error"


@dataclass
class Event:
    """Represents an application event."""

    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.utcnow)
    source: Optional[str] = None
    correlation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "type": self.type.value,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "correlation_id": self.correlation_id
        }


# Type alias for event handlers
EventHandler = Callable[[Event], Any]


class EventBus:
    """
    Simple event bus for pub/sub communication.
    Services publish what happened; toasts and audit logging subscribe.
    """

    _instance: Optional["EventBus"] = None

    def __new__(cls) -> "EventBus":
        """Singleton pattern for global event bus."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._handlers = {}
            cls._instance._async_handlers = {}
        return cls._instance

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe a handler to an event type."""
        if asyncio.iscoroutinefunction(handler):
            self._async_handlers.setdefault(event_type, []).append(handler)
        else:
            self._handlers.setdefault(event_type, []).append(handler)

        logger.debug(f"Handler subscribed to {event_type.value}")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe a handler from an event type."""
        if handler in self._handlers.get(event_type, []):
            self._handlers[event_type].remove(handler)
        if handler in self._async_handlers.get(event_type, []):
            self._async_handlers[event_type].remove(handler)

    def handler_count(self, event_type: EventType) -> int:
        """Number of handlers listening to an event type."""
        return (len(self._handlers.get(event_type, []))
                + len(self._async_handlers.get(event_type, [])))

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        logger.debug(f"Publishing event: {event.type.value}")

        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in sync event handler: {e}")

        tasks = [
            self._safe_call_async(handler, event)
            for handler in list(self._async_handlers.get(event.type, []))
        ]
        if tasks:
            await asyncio.gather(*tasks)

    async def _safe_call_async(self, handler: EventHandler, event: Event) -> None:
        """Safely call an async handler, catching exceptions."""
        try:
            await handler(event)
        except Exception as e:
            logger.error(f"Error in async event handler: {e}")

    def clear(self) -> None:
        """Clear all handlers (useful for testing)."""
        self._handlers.clear()
        self._async_handlers.clear()


def log_toast(event: Event) -> None:
    """Record user-facing toasts in the application log."""
    data = event.data
    logger.info(
        f"🔔 Toast for {data.get('user_id', 'unknown')}: "
        f"{data.get('title', '')} - {data.get('description', '')}"
    )


# Global event bus instance
event_bus = EventBus()
