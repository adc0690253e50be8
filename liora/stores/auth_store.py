"""
Auth store: who is logged in on this server.
"""

from typing import Any, Dict, Optional
from datetime import datetime
import logging
import time

from liora.models.auth import User, UserType
from liora.stores.local_state import PersistedStore

logger = logging.getLogger(__name__)


def build_user(name: str, user_type: UserType) -> User:
    """Create a fresh user for a name-only login."""
    now = datetime.utcnow()
    return User(
        id=f"{user_type.value}-{int(time.time() * 1000)}",
        name=name.strip(),
        type=user_type,
        created_at=now,
        updated_at=now,
        profile_complete=False,
    )


class AuthStore(PersistedStore):
    """Holds `{is_authenticated, user, user_type}`."""

    storage_key = "liora-auth"
    persisted_fields = ("is_authenticated", "user", "user_type")

    def __init__(self, storage):
        super().__init__(storage)
        self.is_authenticated: bool = False
        self.user: Optional[User] = None
        self.user_type: Optional[UserType] = None

    def login(self, name: str, user_type: UserType) -> User:
        user = build_user(name, user_type)
        self.is_authenticated = True
        self.user = user
        self.user_type = user_type
        self.persist()
        logger.info(f"Logged in {user.id} as {user_type.value}")
        return user

    def logout(self) -> None:
        self.is_authenticated = False
        self.user = None
        self.user_type = None
        self.persist()

    def set_user(self, user: User) -> None:
        self.user = user
        self.user_type = user.type
        self.is_authenticated = True
        self.persist()

    def update_user(self, updates: Dict[str, Any]) -> Optional[User]:
        """Merge updates into the current user. No-op when logged out."""
        if self.user is None:
            return None

        merged = {**self.user.model_dump(), **updates,
                  "updated_at": datetime.utcnow()}
        self.user = User.model_validate(merged)
        self.persist()
        return self.user

    def _apply(self, data: Dict[str, Any]) -> None:
        user = data.get("user")
        user_type = data.get("user_type")
        self.user = User.model_validate(user) if user else None
        self.user_type = UserType(user_type) if user_type else None
        self.is_authenticated = bool(
            data.get("is_authenticated")) and self.user is not None
