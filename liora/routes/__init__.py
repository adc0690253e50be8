"""
Routes package.
"""

from liora.routes.interview import router as interview_router
from liora.routes.auth import router as auth_router
from liora.routes.calls import router as calls_router
from liora.routes.notifications import router as notifications_router
from liora.routes.preferences import router as preferences_router
from liora.routes.companies import router as companies_router
from liora.routes.companies import investors_router
from liora.routes.uploads import router as uploads_router
from liora.routes.founder import router as founder_router

__all__ = [
    "interview_router",
    "auth_router",
    "calls_router",
    "notifications_router",
    "preferences_router",
    "companies_router",
    "investors_router",
    "uploads_router",
    "founder_router",
]
