"""
Investor preference and discovery filter API routes.
"""

from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends

from liora.core.deps import get_investor_store, require_investor
from liora.core.exceptions import ResourceNotFoundError
from liora.models.auth import User
from liora.models.schemas import (
    CompanyFilters,
    CompletenessResponse,
    InvestorPreferences,
    PreferencesUpdate,
)
from liora.stores.investor_store import (
    InvestorStore,
    PREFERENCE_CATEGORIES,
    count_populated_categories,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/preferences", tags=["preferences"])


def _state(store: InvestorStore) -> Dict[str, Any]:
    return {
        "preferences": store.preferences,
        "is_preferences_setup_complete": store.is_preferences_setup_complete,
        "has_hydrated": store.has_hydrated,
    }


@router.get("")
async def get_preferences(
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    return _state(store)


@router.put("")
async def replace_preferences(
    preferences: InvestorPreferences,
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    """
    Replace all preferences.

    Requires at least one sector, stage and geography, weights in [0, 1]
    and an investment range with max >= min.
    """
    store.set_preferences(preferences)
    logger.info(f"Preferences replaced by {user.id}")
    return _state(store)


@router.patch("")
async def update_preferences(
    updates: PreferencesUpdate,
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    """Merge a partial update into existing preferences."""
    if store.update_preferences(updates) is None:
        raise ResourceNotFoundError(
            "InvestorPreferences", user.id, message="No preferences to update")
    return _state(store)


@router.delete("")
async def reset_preferences(
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    store.reset_preferences()
    return _state(store)


@router.get("/completeness", response_model=CompletenessResponse)
async def preferences_completeness(
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    """Share of the five preference categories that are filled in."""
    return CompletenessResponse(
        completeness=store.completeness,
        populated=count_populated_categories(store.preferences),
        total=PREFERENCE_CATEGORIES,
        is_preferences_setup_complete=store.is_preferences_setup_complete,
    )


@router.get("/filters", response_model=CompanyFilters)
async def get_filters(
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    return store.filters


@router.put("/filters", response_model=CompanyFilters)
async def set_filters(
    filters: CompanyFilters,
    user: User = Depends(require_investor),
    store: InvestorStore = Depends(get_investor_store)
):
    store.set_filters(filters)
    return store.filters
