# type: ignore
"""
Tests for the PollyTrack HTTP API
=================================
Endpoints, status codes, error bodies and middleware, exercised through
FastAPI's TestClient against an in-memory SQLite store.

Run:  pytest test_main.py -v
"""
import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy import text

from app.core.dependencies import get_family_repo
from app.middleware import normalize_path
from conftest import engine
from main import app


# ── Helpers ───────────────────────────────────────────────────────────────
def _make_payload(**overrides):
    """Build a valid create-family payload with optional overrides."""
    base = {
        "name": "Smiths",
        "members": [
            {"name": "Alice", "phone": "+15550001"},
            {"name": "Bob", "phone": "+15550002", "notifications": False},
            {"name": "Carol", "phone": "+15550003"},
        ],
    }
    base.update(overrides)
    return base


def _create(client, **overrides):
    resp = client.post("/api/families", json=_make_payload(**overrides))
    assert resp.status_code == 201
    return resp.json()


def _task_id(family, name):
    return next(t["id"] for t in family["tasks"] if t["name"] == name)


# ══════════════════════════════════════════════════════════════════════════
# HEALTH & OPS ENDPOINTS
# ══════════════════════════════════════════════════════════════════════════
class TestHealthEndpoints:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "OK"
        assert "timestamp" in data

    def test_readiness_ok(self, client):
        _create(client)
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["families_in_db"] == 1

    def test_readiness_degraded_on_db_error(self, client):
        broken = MagicMock()
        broken.verify_connection.side_effect = Exception("DB down")
        app.dependency_overrides[get_family_repo] = lambda: broken
        resp = client.get("/health/ready")
        assert resp.status_code == 503
        assert resp.json()["status"] == "degraded"

    def test_metrics_endpoint(self, client):
        _create(client)
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert "families_created_total" in resp.text


# ══════════════════════════════════════════════════════════════════════════
# MIDDLEWARE
# ══════════════════════════════════════════════════════════════════════════
class TestMiddleware:
    def test_request_id_auto_generated(self, client):
        resp = client.get("/api/health")
        assert "x-request-id" in resp.headers

    def test_request_id_forwarded(self, client):
        resp = client.get("/api/health", headers={"X-Request-ID": "my-req-id"})
        assert resp.headers["x-request-id"] == "my-req-id"

    def test_request_id_in_error_body(self, client):
        resp = client.get(f"/api/families/{uuid.uuid4()}", headers={"X-Request-ID": "trace-1"})
        assert resp.json()["request_id"] == "trace-1"

    @pytest.mark.parametrize("path, expected", [
        ("/api/families", "/api/families"),
        ("/api/families/abc/tasks/def/complete", "/api/families/{param}/tasks/{param}/complete"),
        ("/api/families/abc/members/x/toggle-notifications",
         "/api/families/{param}/members/{param}/toggle-notifications"),
        ("/", "/"),
    ])
    def test_normalize_path(self, path, expected):
        assert normalize_path(path) == expected


# ══════════════════════════════════════════════════════════════════════════
# FAMILIES
# ══════════════════════════════════════════════════════════════════════════
class TestCreateFamily:
    def test_create_returns_201_with_defaults(self, client):
        data = _create(client)
        assert data["name"] == "Smiths"
        assert [t["name"] for t in data["tasks"]] == ["Poop", "Pee", "Walk", "Feed", "Medicine", "Bath"]
        assert [t["category"] for t in data["tasks"]] == [
            "hygiene", "hygiene", "activity", "health", "health", "hygiene",
        ]
        for task in data["tasks"]:
            assert task["isCompleted"] is False
            assert task["completedBy"] is None
            assert task["completedAt"] is None
        assert "createdAt" in data
        uuid.UUID(data["id"])

    def test_members_serialised(self, client):
        data = _create(client)
        assert [(m["name"], m["notifications"]) for m in data["members"]] == [
            ("Alice", True), ("Bob", False), ("Carol", True),
        ]
        assert all(m["id"] for m in data["members"])

    def test_missing_name_is_400(self, client):
        resp = client.post("/api/families", json={"members": []})
        assert resp.status_code == 400
        assert "name" in resp.json()["error"]

    def test_member_without_phone_is_400(self, client):
        resp = client.post("/api/families", json=_make_payload(members=[{"name": "Alice"}]))
        assert resp.status_code == 400

    def test_malformed_members_is_400(self, client):
        resp = client.post("/api/families", json=_make_payload(members="Alice"))
        assert resp.status_code == 400


class TestGetFamily:
    def test_get_existing(self, client):
        created = _create(client)
        resp = client.get(f"/api/families/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == created

    def test_get_unknown_is_404(self, client):
        resp = client.get(f"/api/families/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Family not found"

    def test_invalid_id_format_is_400(self, client):
        resp = client.get("/api/families/not-a-uuid")
        assert resp.status_code == 400


class TestUpdateFamily:
    def test_partial_update(self, client):
        created = _create(client)
        resp = client.put(f"/api/families/{created['id']}", json={"name": "Smith-Jones"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "Smith-Jones"
        assert data["tasks"] == created["tasks"]
        assert data["createdAt"] == created["createdAt"]

    def test_update_members(self, client):
        created = _create(client)
        resp = client.put(f"/api/families/{created['id']}", json={
            "members": [{"name": "Zed", "phone": "+15550009", "notifications": False}],
        })
        assert resp.status_code == 200
        assert [m["name"] for m in resp.json()["members"]] == ["Zed"]

    def test_update_tasks_accepts_camel_case(self, client):
        created = _create(client)
        resp = client.put(f"/api/families/{created['id']}", json={
            "tasks": [{"name": "Walk", "category": "activity", "isCompleted": True, "completedBy": "Alice"}],
        })
        assert resp.status_code == 200
        task = resp.json()["tasks"][0]
        assert task["completedBy"] == "Alice"
        assert task["completedAt"] is not None

    def test_update_unknown_is_404(self, client):
        resp = client.put(f"/api/families/{uuid.uuid4()}", json={"name": "X"})
        assert resp.status_code == 404

    def test_update_invalid_category_is_400(self, client):
        created = _create(client)
        resp = client.put(f"/api/families/{created['id']}", json={"tasks": [{"name": "Nap", "category": "sleep"}]})
        assert resp.status_code == 400


# ══════════════════════════════════════════════════════════════════════════
# TASKS
# ══════════════════════════════════════════════════════════════════════════
class TestCompleteTask:
    def test_complete(self, client, sms):
        created = _create(client)
        walk_id = _task_id(created, "Walk")
        resp = client.post(f"/api/families/{created['id']}/tasks/{walk_id}/complete",
                           json={"completedBy": "Alice"})
        assert resp.status_code == 200
        walk = next(t for t in resp.json()["tasks"] if t["id"] == walk_id)
        assert walk["isCompleted"] is True
        assert walk["completedBy"] == "Alice"
        assert walk["completedAt"] is not None
        assert sms.sent == [("+15550003", "Alice completed task: Walk for Smiths")]

    def test_sms_failure_still_returns_200(self, client, sms):
        sms.failing.update({"+15550001", "+15550003"})
        created = _create(client)
        feed_id = _task_id(created, "Feed")
        resp = client.post(f"/api/families/{created['id']}/tasks/{feed_id}/complete",
                           json={"completedBy": "Bob"})
        assert resp.status_code == 200
        stored = client.get(f"/api/families/{created['id']}").json()
        assert next(t for t in stored["tasks"] if t["id"] == feed_id)["isCompleted"] is True

    def test_unknown_task_is_404(self, client, sms):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/tasks/nope/complete",
                           json={"completedBy": "Alice"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "Task not found"
        assert client.get(f"/api/families/{created['id']}").json() == created
        assert sms.sent == []

    def test_unknown_family_is_404(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{uuid.uuid4()}/tasks/{created['tasks'][0]['id']}/complete",
                           json={"completedBy": "Alice"})
        assert resp.status_code == 404

    def test_missing_completed_by_is_400(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/tasks/{created['tasks'][0]['id']}/complete",
                           json={})
        assert resp.status_code == 400


class TestResetTask:
    def test_complete_then_reset_round_trip(self, client):
        created = _create(client)
        bath_id = _task_id(created, "Bath")
        client.post(f"/api/families/{created['id']}/tasks/{bath_id}/complete", json={"completedBy": "Carol"})
        resp = client.post(f"/api/families/{created['id']}/tasks/{bath_id}/reset")
        assert resp.status_code == 200
        assert resp.json()["tasks"] == created["tasks"]

    def test_reset_unknown_task_is_404(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/tasks/missing/reset")
        assert resp.status_code == 404


class TestAddTask:
    def test_add_with_category(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/tasks", json={"name": "Vet", "category": "health"})
        assert resp.status_code == 200
        task = resp.json()["tasks"][-1]
        assert (task["name"], task["category"], task["isCompleted"]) == ("Vet", "health", False)

    def test_category_omitted_defaults_to_other(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/tasks", json={"name": "Brush"})
        assert resp.status_code == 200
        assert resp.json()["tasks"][-1]["category"] == "other"

    def test_invalid_category_is_400(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/tasks", json={"name": "Nap", "category": "sleep"})
        assert resp.status_code == 400
        assert "category" in resp.json()["error"]
        assert len(client.get(f"/api/families/{created['id']}").json()["tasks"]) == 6

    def test_unknown_family_is_404(self, client):
        resp = client.post(f"/api/families/{uuid.uuid4()}/tasks", json={"name": "Walk"})
        assert resp.status_code == 404


# ══════════════════════════════════════════════════════════════════════════
# MEMBERS
# ══════════════════════════════════════════════════════════════════════════
class TestMembers:
    def test_toggle_notifications_twice(self, client):
        created = _create(client)
        member_id = created["members"][0]["id"]
        url = f"/api/families/{created['id']}/members/{member_id}/toggle-notifications"
        first = client.post(url)
        assert first.status_code == 200
        assert first.json()["members"][0]["notifications"] is False
        second = client.post(url)
        assert second.json()["members"][0]["notifications"] is True

    def test_toggle_unknown_member_is_404(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/members/ghost/toggle-notifications")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Member not found"

    def test_add_member(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/members",
                           json={"name": "Dave", "phone": "+15550004"})
        assert resp.status_code == 200
        assert resp.json()["members"][-1]["name"] == "Dave"

    def test_add_member_without_phone_is_400(self, client):
        created = _create(client)
        resp = client.post(f"/api/families/{created['id']}/members", json={"name": "Dave"})
        assert resp.status_code == 400


# ══════════════════════════════════════════════════════════════════════════
# STORE ERRORS
# ══════════════════════════════════════════════════════════════════════════
class TestStoreErrors:
    def test_persistence_error_is_400(self, client):
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE families"))
        resp = client.get(f"/api/families/{uuid.uuid4()}")
        assert resp.status_code == 400
        assert "families" in resp.json()["error"]
