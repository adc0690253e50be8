"""
Database models for users.
Uses SQLAlchemy ORM with async support.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column

from liora.database.connection import Base


class UserRecord(Base):
    """
    A user created at login. Rows are never deleted; profile fields
    change through partial updates.
    """
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    type: Mapped[str] = mapped_column(String(20))  # 'founder' or 'investor'
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    company_id: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True)
    profile_complete: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_user_type", "type"),
    )
