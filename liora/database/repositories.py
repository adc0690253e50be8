"""
Repository pattern for database operations.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from liora.database.models import UserRecord
from liora.models.auth import User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"name", "email", "company_id", "profile_complete"}


class UserRepository:
    """
    Repository for User operations. There is no delete.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> UserRecord:
        """Insert a new user row."""
        record = UserRecord(
            id=user.id,
            name=user.name,
            type=user.type.value,
            email=user.email,
            company_id=user.company_id,
            profile_complete=user.profile_complete,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(record)
        await self.session.flush()
        logger.debug(f"Created user: {user.id}")
        return record

    async def get(self, user_id: str) -> Optional[UserRecord]:
        result = await self.session.execute(
            select(UserRecord).where(UserRecord.id == user_id)
        )
        return result.scalar_one_or_none()

    async def update(
        self,
        user_id: str,
        updates: Dict[str, Any],
        updated_at: Optional[datetime] = None
    ) -> Optional[UserRecord]:
        """Apply a partial update and bump `updated_at`."""
        record = await self.get(user_id)
        if record is None:
            return None

        for key, value in updates.items():
            if key in UPDATABLE_FIELDS:
                setattr(record, key, value)
        record.updated_at = updated_at or datetime.utcnow()

        await self.session.flush()
        return record

    async def list_by_type(self, user_type: str) -> List[UserRecord]:
        result = await self.session.execute(
            select(UserRecord)
            .where(UserRecord.type == user_type)
            .order_by(UserRecord.created_at.desc())
        )
        return list(result.scalars().all())
