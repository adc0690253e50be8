"""
Integration tests for API routes.
"""

import sys
import time
from pathlib import Path

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


PREFERENCES = {
    "sectors": [{"name": "AI/ML", "weight": 0.9}],
    "stages": [{"stage": "series-a", "weight": 0.7}],
    "geographies": ["San Francisco, CA"],
    "investment_range": {"min": 500000, "max": 5000000},
    "risk_tolerance": "medium",
}


def wait_for_uploads(client, timeout=5.0):
    """Poll until no upload is still moving."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        progress = client.get("/api/v1/uploads/progress").json()
        if not progress["is_uploading"] and all(
                f["status"] != "pending" for f in progress["files"]):
            return progress
        time.sleep(0.01)
    raise AssertionError("uploads did not settle")


class TestHealthEndpoint:
    """Tests for service endpoints."""

    def test_health_check(self, client):
        """Test /health endpoint."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "environment" in data

    def test_info_endpoint(self, client):
        """Test /info lists registered providers."""
        response = client.get("/info")

        assert response.status_code == 200
        data = response.json()
        assert "gemini" in data["available_providers"]["llm"]
        assert set(data["available_providers"]["upload"]) == {"simulated", "http"}


class TestAuthEndpoints:
    """Tests for login, logout and the session."""

    def test_login(self, client):
        """Test name-only login returns the new user."""
        response = client.post(
            "/api/v1/auth/login",
            json={"name": "  Jane Doe ", "user_type": "investor"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Jane Doe"
        assert data["type"] == "investor"
        assert data["id"].startswith("investor-")

    def test_login_validation(self, client):
        """Test blank names and unknown roles are rejected."""
        assert client.post(
            "/api/v1/auth/login", json={"name": "   ", "user_type": "founder"}
        ).status_code == 422
        assert client.post(
            "/api/v1/auth/login", json={"name": "Jane", "user_type": "admin"}
        ).status_code == 422

    def test_session_lifecycle(self, client):
        """Test the session reflects login and logout."""
        session = client.get("/api/v1/auth/session").json()
        assert session["is_authenticated"] is False
        assert session["has_hydrated"] is True

        client.post("/api/v1/auth/login",
                    json={"name": "Jane", "user_type": "founder"})
        session = client.get("/api/v1/auth/session").json()
        assert session["is_authenticated"] is True
        assert session["user_type"] == "founder"

        assert client.post("/api/v1/auth/logout").status_code == 204
        session = client.get("/api/v1/auth/session").json()
        assert session["is_authenticated"] is False
        assert session["user"] is None

    def test_me_requires_login(self, client):
        """Test /me without a session is a 401."""
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_update_me(self, investor_client):
        """Test a partial profile update."""
        response = investor_client.patch(
            "/api/v1/auth/me", json={"email": "sarah@example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "sarah@example.com"
        assert data["name"] == "Sarah Johnson"
        assert investor_client.get("/api/v1/auth/me").json()["email"] == "sarah@example.com"


class TestPreferencesEndpoints:
    """Tests for investor preferences."""

    def test_requires_investor(self, founder_client):
        """Test founders cannot touch investor preferences."""
        assert founder_client.get("/api/v1/preferences").status_code == 403

    def test_replace_and_read(self, investor_client):
        """Test a full replace marks setup complete."""
        response = investor_client.put("/api/v1/preferences", json=PREFERENCES)

        assert response.status_code == 200
        data = response.json()
        assert data["is_preferences_setup_complete"] is True
        assert data["preferences"]["geographies"] == ["San Francisco, CA"]

        completeness = investor_client.get(
            "/api/v1/preferences/completeness").json()
        assert completeness["completeness"] == 100
        assert completeness["populated"] == 5

    def test_replace_validation(self, investor_client):
        """Test full preferences need every category and a sane range."""
        missing_sectors = {**PREFERENCES, "sectors": []}
        bad_range = {**PREFERENCES, "investment_range": {"min": 10, "max": 5}}
        bad_weight = {**PREFERENCES, "sectors": [{"name": "AI/ML", "weight": 2}]}

        for body in (missing_sectors, bad_range, bad_weight):
            assert investor_client.put(
                "/api/v1/preferences", json=body).status_code == 422

    def test_patch_without_preferences(self, investor_client):
        """Test merging before any preferences exist is a 404."""
        response = investor_client.patch(
            "/api/v1/preferences", json={"geographies": ["Paris"]})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No preferences to update"

    def test_patch_merges(self, investor_client):
        """Test a partial update keeps untouched fields."""
        investor_client.put("/api/v1/preferences", json=PREFERENCES)

        response = investor_client.patch(
            "/api/v1/preferences", json={"investment_range": {"max": 9000000}})

        prefs = response.json()["preferences"]
        assert prefs["investment_range"] == {"min": 500000, "max": 9000000}
        assert prefs["sectors"][0]["name"] == "AI/ML"

    def test_reset(self, investor_client):
        """Test deleting preferences resets setup."""
        investor_client.put("/api/v1/preferences", json=PREFERENCES)

        data = investor_client.delete("/api/v1/preferences").json()

        assert data["preferences"] is None
        assert data["is_preferences_setup_complete"] is False

    def test_filters(self, investor_client):
        """Test saved filters drive a discovery search."""
        response = investor_client.put(
            "/api/v1/preferences/filters",
            json={"sectors": ["FinTech"], "stages": []}
        )
        assert response.status_code == 200

        result = investor_client.get(
            "/api/v1/companies", params={"use_saved": True}).json()
        assert [c["name"] for c in result["companies"]] == ["FinanceFlow"]
        assert result["active_filters_count"] == 1


class TestCompanyEndpoints:
    """Tests for discovery and memos."""

    def test_search_with_query_params(self, client):
        """Test query parameters become filters."""
        response = client.get(
            "/api/v1/companies",
            params={"stages": ["seed"], "max_funding": 6000000}
        )

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["companies"]] == ["GreenTech Solutions"]
        assert data["total"] == 1
        assert data["active_filters_count"] == 2

    def test_get_company(self, client):
        """Test fetching one company."""
        assert client.get("/api/v1/companies/1").json()["name"] == "TechFlow AI"
        response = client.get("/api/v1/companies/999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    def test_memo_and_charts(self, client):
        """Test the memo and its derived charts."""
        memo = client.get("/api/v1/companies/1/memo")
        assert memo.status_code == 200
        assert memo.json()["company_id"] == "1"

        charts = client.get("/api/v1/companies/1/charts").json()
        assert charts["risk_summary"]["risk_percentage"] == 44
        assert charts["risk_summary"]["level"] == "Medium"

    def test_missing_memo(self, client):
        """Test companies without a memo return 404."""
        assert client.get("/api/v1/companies/2/memo").status_code == 404

    def test_investor_directory(self, client):
        """Test listing and fetching investors."""
        investors = client.get(
            "/api/v1/investors", params={"focus_area": "automation"}).json()
        assert [i["id"] for i in investors] == ["investor-2"]

        assert client.get("/api/v1/investors/investor-1").json()["firm"] == "Accel Partners"
        assert client.get("/api/v1/investors/nobody").status_code == 404


class TestCallEndpoints:
    """Tests for the call request and meeting flow."""

    def test_send_request_requires_investor(self, founder_client):
        """Test only investors can request calls."""
        response = founder_client.post(
            "/api/v1/calls/requests", json={"company_id": "1"})

        assert response.status_code == 403

    def test_full_flow(self, client):
        """Test request, accept, schedule and cancel across both roles."""
        client.post("/api/v1/auth/login",
                    json={"name": "Sarah Johnson", "user_type": "investor"})
        response = client.post(
            "/api/v1/calls/requests",
            json={"company_id": "1", "message": "Let's talk"}
        )
        assert response.status_code == 201
        request = response.json()
        assert request["status"] == "pending"
        assert request["investor_name"] == "Sarah Johnson"
        investor_id = request["investor_id"]

        client.post("/api/v1/auth/login",
                    json={"name": "Alex Rivera", "user_type": "founder"})
        client.patch("/api/v1/auth/me", json={"company_id": "1"})
        visible = client.get("/api/v1/calls/requests").json()
        assert request["id"] in [r["id"] for r in visible]

        response = client.post(
            f"/api/v1/calls/requests/{request['id']}/respond",
            json={"status": "accepted", "message": "Happy to chat"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "accepted"

        response = client.post(
            "/api/v1/calls/meetings",
            json={
                "call_request_id": request["id"],
                "scheduled_time": "2030-01-01T15:00:00",
                "duration": 45,
            }
        )
        assert response.status_code == 201
        meeting = response.json()
        assert meeting["investor_id"] == investor_id
        assert meeting["founder_id"] == "founder-1"

        cancel_path = f"/api/v1/calls/meetings/{meeting['id']}/cancel"
        assert client.post(cancel_path).json()["status"] == "cancelled"
        response = client.post(cancel_path)
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CALL_FLOW_ERROR"

        state = client.get("/api/v1/calls/state").json()
        assert state["is_loading"] is False
        assert state["error"] == "Meeting is already cancelled"

    def test_respond_unknown_request(self, founder_client):
        """Test responding to a missing request is a 404."""
        response = founder_client.post(
            "/api/v1/calls/requests/missing/respond", json={"status": "declined"})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Call request not found"

    def test_schedule_unknown_request(self, investor_client):
        """Test scheduling for a missing request is a 404."""
        response = investor_client.post(
            "/api/v1/calls/meetings",
            json={"call_request_id": "missing",
                  "scheduled_time": "2030-01-01T15:00:00"}
        )

        assert response.status_code == 404

    def test_seeded_state(self, client):
        """Test demo call requests and meetings are loaded."""
        state = client.get("/api/v1/calls/state").json()

        assert {r["id"] for r in state["call_requests"]} >= {
            "call-req-1", "call-req-2", "call-req-3"}
        assert len(state["meetings"]) == 2


class TestNotificationEndpoints:
    """Tests for the notification inbox."""

    def test_requires_login(self, client):
        """Test the inbox needs a session."""
        assert client.get("/api/v1/notifications").status_code == 401

    def test_call_request_reaches_founder(self, client):
        """Test a call request lands in the company founder's inbox."""
        from liora.core.deps import get_notification_service

        client.post("/api/v1/auth/login",
                    json={"name": "Sarah Johnson", "user_type": "investor"})
        request = client.post(
            "/api/v1/calls/requests", json={"company_id": "2"}).json()

        inbox = get_notification_service().list_for_user("founder-2")
        assert inbox[0].type == "call-request"
        assert inbox[0].payload.request_id == request["id"]

    def test_investor_inbox(self, investor_client):
        """Test the investor hears back after a founder responds."""
        from liora.core.deps import get_auth_store

        investor = get_auth_store().user
        me = investor_client.get("/api/v1/auth/me").json()
        request = investor_client.post(
            "/api/v1/calls/requests",
            json={"company_id": "1", "investor_id": me["id"]}
        ).json()
        assert investor_client.get("/api/v1/notifications").json() == []

        investor_client.post("/api/v1/auth/login",
                             json={"name": "Alex Rivera", "user_type": "founder"})
        investor_client.post(
            f"/api/v1/calls/requests/{request['id']}/respond",
            json={"status": "accepted"}
        )

        get_auth_store().set_user(investor)

        inbox = investor_client.get("/api/v1/notifications").json()
        assert [n["title"] for n in inbox] == ["Call Request Accepted"]
        assert investor_client.get("/api/v1/notifications/unread-count").json() == {
            "user_id": me["id"], "unread": 1}

    def test_mark_read_and_clear(self, client):
        """Test read, read-all, delete and clear for one user."""
        from liora.core.deps import get_notification_service
        from liora.data.seed import demo_notifications

        client.post("/api/v1/auth/login",
                    json={"name": "Founder", "user_type": "founder"})
        user_id = client.get("/api/v1/auth/me").json()["id"]
        service = get_notification_service()
        for notification in demo_notifications():
            service._notifications.append(
                notification.model_copy(update={"user_id": user_id}))

        items = client.get("/api/v1/notifications").json()
        assert len(items) == 3
        unread = client.get("/api/v1/notifications",
                            params={"unread_only": True}).json()
        assert len(unread) == 2

        response = client.post(f"/api/v1/notifications/{unread[0]['id']}/read")
        assert response.json()["read"] is True
        assert client.post("/api/v1/notifications/read-all").json() == {"updated": 1}

        assert client.delete(
            f"/api/v1/notifications/{items[0]['id']}").status_code == 204
        assert client.delete("/api/v1/notifications").json() == {"removed": 2}
        assert client.post(
            "/api/v1/notifications/missing/read").status_code == 404


class TestUploadEndpoints:
    """Tests for file uploads."""

    def test_presets(self, client):
        """Test presets are listed with readable limits."""
        presets = {p["name"]: p for p in client.get("/api/v1/uploads/presets").json()}

        assert presets["PITCH_DECK"]["max_size_label"] == "50 MB"
        assert presets["IMAGES"]["max_files"] == 10

    def test_upload_requires_login(self, client):
        """Test uploading needs a session."""
        response = client.post(
            "/api/v1/uploads/PITCH_DECK",
            files=[("files", ("deck.pdf", b"%PDF", "application/pdf"))]
        )

        assert response.status_code == 401

    def test_upload_completes(self, founder_client):
        """Test an accepted upload reaches 100%."""
        response = founder_client.post(
            "/api/v1/uploads/DOCUMENTS",
            files=[
                ("files", ("notes.txt", b"hello", "text/plain")),
                ("files", ("virus.exe", b"bad", "application/octet-stream")),
            ]
        )

        assert response.status_code == 200
        batch = response.json()
        assert len(batch["accepted"]) == 1
        assert batch["rejected"][0]["error"]["type"] == "type"
        assert batch["rejected"][0]["error"]["retryable"] is False

        progress = wait_for_uploads(founder_client)
        assert progress["all_completed"] is True
        assert progress["overall_progress"] == 100

        file_id = batch["accepted"][0]["id"]
        record = founder_client.get(f"/api/v1/uploads/{file_id}").json()
        assert record["status"] == "completed"
        assert record["url"]

    def test_oversized_file_rejected_unread(self, founder_client, monkeypatch):
        """Test a file over the preset limit is rejected without reading it."""
        from starlette.datastructures import UploadFile as StarletteUploadFile

        read_names = []
        original_read = StarletteUploadFile.read

        async def tracking_read(self, *args, **kwargs):
            read_names.append(self.filename)
            return await original_read(self, *args, **kwargs)

        monkeypatch.setattr(StarletteUploadFile, "read", tracking_read)

        response = founder_client.post(
            "/api/v1/uploads/IMAGES",
            files=[
                ("files", ("huge.png", b"x" * (5 * 1024 * 1024 + 1), "image/png")),
                ("files", ("logo.png", b"png", "image/png")),
            ]
        )

        assert response.status_code == 200
        batch = response.json()
        assert [f["name"] for f in batch["accepted"]] == ["logo.png"]
        assert batch["rejected"][0]["name"] == "huge.png"
        assert batch["rejected"][0]["error"]["type"] == "size"
        assert "huge.png" not in read_names
        wait_for_uploads(founder_client)

    def test_only_oversized_files(self, founder_client):
        """Test a batch with nothing small enough accepts nothing."""
        response = founder_client.post(
            "/api/v1/uploads/IMAGES",
            files=[("files", ("huge.png", b"x" * (5 * 1024 * 1024 + 1), "image/png"))]
        )

        assert response.status_code == 200
        assert response.json()["accepted"] == []
        assert founder_client.get("/api/v1/uploads").json() == []

    def test_retry_completed_is_rejected(self, founder_client):
        """Test only failed uploads can be retried."""
        batch = founder_client.post(
            "/api/v1/uploads/IMAGES",
            files=[("files", ("logo.png", b"png", "image/png"))]
        ).json()
        wait_for_uploads(founder_client)

        response = founder_client.post(
            f"/api/v1/uploads/{batch['accepted'][0]['id']}/retry")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_unknown_preset(self, founder_client):
        """Test an unknown preset is a 404."""
        response = founder_client.post(
            "/api/v1/uploads/SPREADSHEETS",
            files=[("files", ("a.xls", b"x", "application/vnd.ms-excel"))]
        )

        assert response.status_code == 404

    def test_remove_and_clear(self, founder_client):
        """Test removing and clearing tracked uploads."""
        batch = founder_client.post(
            "/api/v1/uploads/IMAGES",
            files=[
                ("files", ("a.png", b"a", "image/png")),
                ("files", ("b.png", b"b", "image/png")),
            ]
        ).json()
        wait_for_uploads(founder_client)

        first = batch["accepted"][0]["id"]
        assert founder_client.delete(f"/api/v1/uploads/{first}").status_code == 204
        assert founder_client.get(f"/api/v1/uploads/{first}").status_code == 404
        assert founder_client.delete("/api/v1/uploads").json() == {"removed": 1}


class TestFounderEndpoints:
    """Tests for the founder profile draft."""

    def test_requires_founder(self, investor_client):
        """Test investors cannot read the founder profile."""
        assert investor_client.get("/api/v1/founder/profile").status_code == 403

    def test_profile_flow(self, founder_client):
        """Test drafting, stepping, analysis and reset."""
        response = founder_client.patch(
            "/api/v1/founder/profile",
            json={"name": "Acme Robotics", "sector": "Robotics"}
        )
        assert response.status_code == 200
        assert response.json()["company_data"] == {
            "name": "Acme Robotics", "sector": "Robotics"}

        response = founder_client.put(
            "/api/v1/founder/profile/step",
            json={"current_step": 2, "is_form_complete": True}
        )
        assert response.json()["current_step"] == 2
        assert response.json()["is_form_complete"] is True

        response = founder_client.put(
            "/api/v1/founder/profile/analysis",
            json={"analysis_status": "in-progress", "analysis_progress": 140}
        )
        assert response.json()["analysis_status"] == "in-progress"
        assert response.json()["analysis_progress"] == 100

        saved = founder_client.post("/api/v1/founder/profile/save").json()
        assert saved["last_saved"] is not None

        assert founder_client.delete("/api/v1/founder/profile").status_code == 204
        assert founder_client.get(
            "/api/v1/founder/profile").json()["company_data"] == {}

    def test_invalid_profile_data(self, founder_client):
        """Test form validation on the draft."""
        response = founder_client.patch(
            "/api/v1/founder/profile", json={"founded_year": 3000})

        assert response.status_code == 422

    def test_attach_files(self, founder_client):
        """Test attaching an upload to the pitch deck slot."""
        batch = founder_client.post(
            "/api/v1/uploads/PITCH_DECK",
            files=[("files", ("deck.pdf", b"%PDF", "application/pdf"))]
        ).json()
        wait_for_uploads(founder_client)
        file_id = batch["accepted"][0]["id"]

        response = founder_client.put(
            "/api/v1/founder/profile/files/pitch_deck", json=[file_id])

        assert response.status_code == 200
        slot = response.json()["uploaded_files"]["pitch_deck"]
        assert slot[0]["id"] == file_id
        assert slot[0]["status"] == "completed"

        bad = founder_client.put(
            "/api/v1/founder/profile/files/tax_returns", json=[])
        assert bad.status_code == 400
