"""
Authentication Pydantic models and schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class UserType(str, Enum):
    """The two roles the application serves."""
    FOUNDER = "founder"
    INVESTOR = "investor"


class LoginRequest(BaseModel):
    """Request model for name-only login."""
    name: str = Field(..., min_length=1, max_length=100)
    user_type: UserType

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class User(BaseModel):
    """User record returned by the API."""
    id: str
    name: str
    type: UserType
    email: Optional[str] = None
    company_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    profile_complete: bool = False

    model_config = {"from_attributes": True}

    @property
    def initials(self) -> str:
        return get_user_initials(self.name)


class UserUpdate(BaseModel):
    """Partial update for the current user. Unset fields are left alone."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = None
    company_id: Optional[str] = None
    profile_complete: Optional[bool] = None


class SessionResponse(BaseModel):
    """Current auth state."""
    is_authenticated: bool
    user: Optional[User] = None
    user_type: Optional[UserType] = None
    has_hydrated: bool = False


def is_valid_user_type(value: str) -> bool:
    """Check a raw string against the known roles."""
    return value in {t.value for t in UserType}


def get_user_initials(name: str) -> str:
    """Up to two upper-case initials for an avatar."""
    return "".join(part[0] for part in name.split() if part).upper()[:2]
