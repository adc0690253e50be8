"""
Investor store: preferences, discovery filters and setup progress.
"""

from typing import Any, Dict, Optional

from liora.models.schemas import (
    CompanyFilters,
    InvestorPreferences,
    PreferencesUpdate,
)
from liora.stores.local_state import PersistedStore

PREFERENCE_CATEGORIES = 5


def count_populated_categories(preferences: Optional[PreferencesUpdate]) -> int:
    """
    Count filled preference categories: sectors, stages, geographies,
    a usable investment range (min >= 0 and max > min) and risk tolerance.
    """
    if preferences is None:
        return 0

    populated = 0
    if preferences.sectors:
        populated += 1
    if preferences.stages:
        populated += 1
    if preferences.geographies:
        populated += 1

    bounds = preferences.investment_range or {}
    low, high = bounds.get("min"), bounds.get("max")
    if low is not None and high is not None and low >= 0 and high > low:
        populated += 1

    if preferences.risk_tolerance:
        populated += 1
    return populated


def calculate_preferences_completeness(
    preferences: Optional[PreferencesUpdate]
) -> float:
    """Percentage of the five categories that are populated."""
    return count_populated_categories(preferences) / PREFERENCE_CATEGORIES * 100


class InvestorStore(PersistedStore):

    storage_key = "liora-investor-store"
    persisted_fields = (
        "preferences", "is_preferences_setup_complete", "filters")

    def __init__(self, storage):
        super().__init__(storage)
        self.preferences: Optional[PreferencesUpdate] = None
        self.filters: CompanyFilters = CompanyFilters()
        self.is_preferences_setup_complete: bool = False

    @property
    def completeness(self) -> float:
        return calculate_preferences_completeness(self.preferences)

    def set_preferences(self, preferences: InvestorPreferences) -> PreferencesUpdate:
        """Replace preferences wholesale and mark setup complete."""
        self.preferences = PreferencesUpdate.model_validate(
            preferences.model_dump())
        self.is_preferences_setup_complete = True
        self.persist()
        return self.preferences

    def update_preferences(self, updates: PreferencesUpdate) -> Optional[PreferencesUpdate]:
        """Merge into existing preferences; a no-op when none are set."""
        if self.preferences is None:
            return None

        current = self.preferences.model_dump()
        changes = updates.model_dump(exclude_unset=True)
        if changes.get("investment_range") and current.get("investment_range"):
            changes["investment_range"] = {
                **current["investment_range"], **changes["investment_range"]}

        merged = {**current, **changes}
        self.preferences = PreferencesUpdate.model_validate(merged)
        self.persist()
        return self.preferences

    def set_filters(self, filters: CompanyFilters) -> None:
        self.filters = filters
        self.persist()

    def reset_preferences(self) -> None:
        self.preferences = None
        self.is_preferences_setup_complete = False
        self.filters = CompanyFilters()
        self.persist()

    def mark_preferences_complete(self) -> None:
        self.is_preferences_setup_complete = True
        self.persist()

    def _apply(self, data: Dict[str, Any]) -> None:
        prefs = data.get("preferences")
        self.preferences = PreferencesUpdate.model_validate(
            prefs) if prefs else None
        self.is_preferences_setup_complete = bool(
            data.get("is_preferences_setup_complete", False))
        if data.get("filters"):
            self.filters = CompanyFilters.model_validate(data["filters"])
