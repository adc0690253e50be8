"""
Services package.
"""

from liora.services.session_store import InMemorySessionStore
from liora.services.interview_service import InterviewService
from liora.services.notification_service import NotificationService
from liora.services.calls_service import CallsService
from liora.services.upload_service import UploadService, UPLOAD_PRESETS
from liora.services.company_service import CompanyService
from liora.services.auth_service import AuthService

__all__ = [
    "InMemorySessionStore",
    "InterviewService",
    "NotificationService",
    "CallsService",
    "UploadService",
    "UPLOAD_PRESETS",
    "CompanyService",
    "AuthService",
]
