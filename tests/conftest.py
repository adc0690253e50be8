"""
Pytest configuration and shared fixtures.
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock
import pytest

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are cached on first use, so the environment is set before any
# liora import.
STATE_DIR = tempfile.mkdtemp(prefix="liora-test-state-")
os.environ.update({
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "STATE_PERSISTENCE_PATH": STATE_DIR,
    "CALL_SIMULATED_DELAY_SECONDS": "0",
    "UPLOAD_MODE": "simulated",
    "UPLOAD_TICK_SECONDS": "0",
    "UPLOAD_SUCCESS_RATE": "1.0",
    "SEED_DEMO_DATA": "true",
    "INTERVIEW_LLM_ENABLED": "false",
    "LOG_LEVEL": "WARNING",
})

from fastapi.testclient import TestClient

from liora.core.deps import reset_dependencies
from liora.models.schemas import (
    InvestorPreferences,
    InvestmentRange,
    SectorPreference,
    StagePreference,
)
from liora.stores import LocalStateStorage


def _clear_state_dir() -> None:
    for entry in Path(STATE_DIR).iterdir():
        if entry.is_file():
            entry.unlink()
        else:
            shutil.rmtree(entry)


# ============================================================================
# Test Data Fixtures
# ============================================================================

@pytest.fixture
def sample_preferences() -> InvestorPreferences:
    """Create a complete set of investor preferences."""
    return InvestorPreferences(
        sectors=[SectorPreference(name="AI/ML", weight=0.8)],
        stages=[StagePreference(stage="seed", weight=0.6)],
        geographies=["San Francisco, CA"],
        investment_range=InvestmentRange(min=100_000, max=2_000_000),
        risk_tolerance="medium",
    )


@pytest.fixture
def state_storage(tmp_path) -> LocalStateStorage:
    """Local state storage in a throwaway directory."""
    return LocalStateStorage(str(tmp_path / "state"))


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================

@pytest.fixture
def client():
    """Create a FastAPI test client with fresh stores and services."""
    from liora.main import app

    reset_dependencies()
    _clear_state_dir()
    with TestClient(app) as test_client:
        yield test_client
    reset_dependencies()
    _clear_state_dir()


@pytest.fixture
def investor_client(client):
    """Test client logged in as an investor."""
    response = client.post(
        "/api/v1/auth/login",
        json={"name": "Sarah Johnson", "user_type": "investor"}
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def founder_client(client):
    """Test client logged in as the founder of company 1."""
    response = client.post(
        "/api/v1/auth/login",
        json={"name": "Alex Rivera", "user_type": "founder"}
    )
    assert response.status_code == 200
    client.patch("/api/v1/auth/me", json={"company_id": "1"})
    return client


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_llm_provider():
    """Create a mock LLM provider."""
    provider = AsyncMock()
    provider.name = "gemini"
    provider.generate_response = AsyncMock(return_value="Rephrased question?")
    return provider
