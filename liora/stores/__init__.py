"""
Persisted local stores.
"""

from liora.stores.local_state import LocalStateStorage, PersistedStore
from liora.stores.auth_store import AuthStore, build_user
from liora.stores.investor_store import (
    InvestorStore,
    calculate_preferences_completeness,
)
from liora.stores.founder_store import FounderStore

__all__ = [
    "LocalStateStorage",
    "PersistedStore",
    "AuthStore",
    "build_user",
    "InvestorStore",
    "calculate_preferences_completeness",
    "FounderStore",
]
