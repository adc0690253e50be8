"""
Authentication API routes.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from liora.core.deps import get_auth_service, get_current_user
from liora.core.exceptions import AppException
from liora.models.auth import LoginRequest, SessionResponse, User, UserUpdate
from liora.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=User)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Log in with a display name.

    - **name**: 1-100 characters, surrounding whitespace is trimmed
    - **user_type**: founder or investor

    There is no password; every login creates a fresh user.
    """
    try:
        return await auth_service.login(credentials.name, credentials.user_type)
    except AppException as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message
        )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(auth_service: AuthService = Depends(get_auth_service)):
    """Clear the current session."""
    await auth_service.logout()


@router.get("/session", response_model=SessionResponse)
async def get_session(auth_service: AuthService = Depends(get_auth_service)):
    """Current auth state, including whether it has been hydrated."""
    return auth_service.get_session()


@router.get("/me", response_model=User)
async def get_me(current_user: User = Depends(get_current_user)):
    """The logged-in user."""
    return current_user


@router.patch("/me", response_model=User)
async def update_me(
    updates: UserUpdate,
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Partially update the logged-in user. Unset fields are left alone."""
    return await auth_service.update_current_user(updates)
