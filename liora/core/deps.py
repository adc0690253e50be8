"""
FastAPI dependencies for stores, services and the current user.

Stores and services are process-wide singletons created lazily on first
use. `reset_dependencies` drops them so tests start clean.
"""

from typing import Optional
import logging

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from liora.config import get_settings
from liora.core.providers import get_upload_transport
from liora.data.seed import demo_call_requests, demo_meetings, demo_notifications
from liora.database.connection import get_db
from liora.models.auth import User, UserType
from liora.services.auth_service import AuthService
from liora.services.calls_service import CallsService
from liora.services.company_service import CompanyService
from liora.services.interview_service import InterviewService
from liora.services.notification_service import NotificationService
from liora.services.upload_service import UploadService
from liora.stores import AuthStore, FounderStore, InvestorStore, LocalStateStorage

logger = logging.getLogger(__name__)

_state_storage: Optional[LocalStateStorage] = None
_auth_store: Optional[AuthStore] = None
_investor_store: Optional[InvestorStore] = None
_founder_store: Optional[FounderStore] = None
_interview_service: Optional[InterviewService] = None
_notification_service: Optional[NotificationService] = None
_calls_service: Optional[CallsService] = None
_upload_service: Optional[UploadService] = None
_company_service: Optional[CompanyService] = None


def reset_dependencies() -> None:
    """Forget every singleton (useful for testing)."""
    global _state_storage, _auth_store, _investor_store, _founder_store
    global _interview_service, _notification_service, _calls_service
    global _upload_service, _company_service
    _state_storage = None
    _auth_store = None
    _investor_store = None
    _founder_store = None
    _interview_service = None
    _notification_service = None
    _calls_service = None
    _upload_service = None
    _company_service = None


# ============================================================================
# Persisted stores
# ============================================================================

def get_state_storage() -> LocalStateStorage:
    global _state_storage
    if _state_storage is None:
        _state_storage = LocalStateStorage(
            get_settings().state_persistence_path)
    return _state_storage


def get_auth_store() -> AuthStore:
    global _auth_store
    if _auth_store is None:
        _auth_store = AuthStore(get_state_storage())
        _auth_store.hydrate()
    return _auth_store


def get_investor_store() -> InvestorStore:
    global _investor_store
    if _investor_store is None:
        _investor_store = InvestorStore(get_state_storage())
        _investor_store.hydrate()
    return _investor_store


def get_founder_store() -> FounderStore:
    global _founder_store
    if _founder_store is None:
        _founder_store = FounderStore(
            get_state_storage(),
            save_delay=get_settings().call_simulated_delay_seconds / 2,
        )
        _founder_store.hydrate()
    return _founder_store


# ============================================================================
# Services
# ============================================================================

def get_interview_service() -> InterviewService:
    global _interview_service
    if _interview_service is None:
        _interview_service = InterviewService()
    return _interview_service


def get_notification_service() -> NotificationService:
    global _notification_service
    if _notification_service is None:
        seed = demo_notifications() if get_settings().seed_demo_data else None
        _notification_service = NotificationService(seed=seed)
    return _notification_service


def get_calls_service() -> CallsService:
    global _calls_service
    if _calls_service is None:
        settings = get_settings()
        _calls_service = CallsService(
            notifications=get_notification_service(),
            delay_seconds=settings.call_simulated_delay_seconds,
            call_requests=demo_call_requests() if settings.seed_demo_data else None,
            meetings=demo_meetings() if settings.seed_demo_data else None,
        )
    return _calls_service


async def get_upload_service() -> UploadService:
    global _upload_service
    if _upload_service is None:
        settings = get_settings()
        if settings.upload_mode.value == "http":
            transport = await get_upload_transport(
                "http",
                endpoint=settings.upload_endpoint,
                timeout_seconds=settings.upload_timeout_seconds,
            )
        else:
            transport = await get_upload_transport(
                "simulated",
                success_rate=settings.upload_success_rate,
                tick_seconds=settings.upload_tick_seconds,
            )
        _upload_service = UploadService(transport)
        logger.info(f"Upload service using {transport.name} transport")
    return _upload_service


def get_company_service() -> CompanyService:
    global _company_service
    if _company_service is None:
        _company_service = CompanyService()
    return _company_service


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    store: AuthStore = Depends(get_auth_store)
) -> AuthService:
    return AuthService(db, store)


# ============================================================================
# Current user
# ============================================================================

def get_current_user(store: AuthStore = Depends(get_auth_store)) -> User:
    """
    The logged-in user.

    Raises:
        HTTPException 401: nobody is logged in
    """
    if not store.is_authenticated or store.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return store.user


def require_investor(user: User = Depends(get_current_user)) -> User:
    if user.type != UserType.INVESTOR:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Investor access required"
        )
    return user


def require_founder(user: User = Depends(get_current_user)) -> User:
    if user.type != UserType.FOUNDER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Founder access required"
        )
    return user
