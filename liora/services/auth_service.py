"""
Authentication service for name-only login.
Session state lives in the AuthStore; users are also recorded in the
database so they survive a logout.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from liora.core.events import event_bus, Event, EventType
from liora.core.exceptions import AuthenticationError
from liora.database.repositories import UserRepository
from liora.models.auth import SessionResponse, User, UserType, UserUpdate
from liora.stores.auth_store import AuthStore

logger = logging.getLogger(__name__)


class AuthService:
    """Service for login, logout and profile updates."""

    def __init__(self, db: AsyncSession, store: AuthStore):
        self.db = db
        self.store = store
        self.users = UserRepository(db)

    async def login(self, name: str, user_type: UserType) -> User:
        """Log in by name. A new user record is created every time."""
        user = self.store.login(name, user_type)

        if await self.users.get(user.id) is None:
            await self.users.create(user)
        else:
            await self.users.update(
                user.id, {"name": user.name}, updated_at=user.updated_at)
        await self.db.commit()

        await event_bus.publish(Event(
            type=EventType.AUTH_LOGIN,
            data={"user_id": user.id, "user_type": user_type.value},
            source="auth_service"
        ))
        return user

    async def logout(self) -> None:
        """Clear the session. State is reset even if publishing fails."""
        user_id = self.store.user.id if self.store.user else None
        try:
            await event_bus.publish(Event(
                type=EventType.AUTH_LOGOUT,
                data={"user_id": user_id},
                source="auth_service"
            ))
        finally:
            self.store.logout()
            logger.info(f"Logged out {user_id or 'anonymous session'}")

    def get_session(self) -> SessionResponse:
        return SessionResponse(
            is_authenticated=self.store.is_authenticated,
            user=self.store.user,
            user_type=self.store.user_type,
            has_hydrated=self.store.has_hydrated,
        )

    def current_user(self) -> User:
        if not self.store.is_authenticated or self.store.user is None:
            raise AuthenticationError()
        return self.store.user

    async def update_current_user(self, updates: UserUpdate) -> User:
        """Partially update the logged-in user and bump `updated_at`."""
        self.current_user()
        changes = updates.model_dump(exclude_unset=True)
        user = self.store.update_user(changes)

        record = await self.users.update(
            user.id, changes, updated_at=user.updated_at)
        if record is None:
            await self.users.create(user)
        await self.db.commit()
        return user

    async def get_user(self, user_id: str) -> Optional[User]:
        record = await self.users.get(user_id)
        return User.model_validate(record) if record else None
