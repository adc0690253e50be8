"""
Models package containing all Pydantic schemas and data models.
"""

from liora.models.auth import (
    UserType,
    User,
    UserUpdate,
    LoginRequest,
    SessionResponse,
)
from liora.models.schemas import (
    CallStatus,
    MeetingStatus,
    NotificationType,
    RiskLevel,
    CallRequest,
    CallResponse,
    MeetingSchedule,
    Notification,
    InvestorPreferences,
    PreferencesUpdate,
    CompanyFilters,
    UploadStatus,
    UploadedFile,
    UploadFileError,
    HealthResponse,
    ErrorResponse,
)
from liora.models.company import (
    CompanyOverview,
    InvestmentMemo,
    InvestorProfile,
)

__all__ = [
    "UserType",
    "User",
    "UserUpdate",
    "LoginRequest",
    "SessionResponse",
    "CallStatus",
    "MeetingStatus",
    "NotificationType",
    "RiskLevel",
    "CallRequest",
    "CallResponse",
    "MeetingSchedule",
    "Notification",
    "InvestorPreferences",
    "PreferencesUpdate",
    "CompanyFilters",
    "UploadStatus",
    "UploadedFile",
    "UploadFileError",
    "HealthResponse",
    "ErrorResponse",
    "CompanyOverview",
    "InvestmentMemo",
    "InvestorProfile",
]
