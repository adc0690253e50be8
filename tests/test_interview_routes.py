"""
Integration tests for the interview endpoint.
"""

import sys
from pathlib import Path

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class TestInterviewEndpoint:
    """Tests for POST and GET /api/interview."""

    def test_initialize(self, client):
        """Test initialize returns the opening question and 20% progress."""
        response = client.post(
            "/api/interview",
            json={"action": "initialize", "sessionId": "session-1"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["workflowStatus"]["progress"] == 20
        assert data["workflowStatus"]["currentStep"] == "active"
        assert data["state"]["questionCount"] == 1
        assert data["state"]["messages"][0]["type"] == "ai"

    def test_full_interview(self, client):
        """Test five answers complete the interview."""
        client.post("/api/interview",
                    json={"action": "initialize", "sessionId": "session-1"})

        for i in range(5):
            response = client.post(
                "/api/interview",
                json={
                    "action": "processResponse",
                    "sessionId": "session-1",
                    "data": {"response": f"Answer number {i + 1}"},
                }
            )
            assert response.status_code == 200

        data = response.json()
        assert data["state"]["isComplete"] is True
        assert data["state"]["questionCount"] == 5
        assert data["workflowStatus"]["currentStep"] == "completed"
        assert data["memoryStats"]["totalConversations"] == 5

    def test_unknown_session_returns_404(self, client):
        """Test every action but initialize needs an existing session."""
        for action in ("processResponse", "reset", "getStats"):
            response = client.post(
                "/api/interview",
                json={
                    "action": action,
                    "sessionId": "does-not-exist",
                    "data": {"response": "hello"},
                }
            )

            assert response.status_code == 404
            assert response.json() == {
                "success": False, "error": "Session not found"}

    def test_invalid_action(self, client):
        """Test an unknown action is rejected."""
        response = client.post(
            "/api/interview",
            json={"action": "explode", "sessionId": "session-1"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid action"

    def test_missing_session_id(self, client):
        """Test a request without a session id is rejected."""
        response = client.post("/api/interview", json={"action": "initialize"})

        assert response.status_code == 400
        assert response.json()["error"] == "Session ID required"

    def test_missing_response(self, client):
        """Test processResponse without an answer is rejected."""
        client.post("/api/interview",
                    json={"action": "initialize", "sessionId": "session-1"})

        response = client.post(
            "/api/interview",
            json={"action": "processResponse", "sessionId": "session-1", "data": {}}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Response required"

    def test_get_state(self, client):
        """Test GET returns the stored state."""
        client.post("/api/interview",
                    json={"action": "initialize", "sessionId": "session-1"})

        response = client.get("/api/interview", params={"sessionId": "session-1"})

        assert response.status_code == 200
        assert response.json()["state"]["questionCount"] == 1

    def test_get_without_session_id(self, client):
        """Test GET needs a session id."""
        response = client.get("/api/interview")

        assert response.status_code == 400
        assert response.json()["error"] == "Session ID required"

    def test_get_unknown_session(self, client):
        """Test GET for an unknown session is a 404."""
        response = client.get("/api/interview", params={"sessionId": "nope"})

        assert response.status_code == 404
        assert response.json()["success"] is False
