"""
Tests for the HTTP API and its job events, on the SQLite backend.

Run with: pytest tests/test_api.py -v
"""
import asyncio
import time
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from nexusai.main import create_app
from nexusai.repositories.base import PlacementRepository
from nexusai.services.notifier import JobNotifier
from tests.conftest import START


# ==============================================================================
# Jobs
# ==============================================================================

class TestJobRoutes:

    def test_create_and_list(self, client, make_job):
        response = client.post("/api/jobs", json=make_job())

        assert response.status_code == 201
        job = response.json()
        assert job["postedAt"] == START.isoformat()

        listed = client.get("/api/jobs")
        assert listed.status_code == 200
        assert [j["_id"] for j in listed.json()] == [job["_id"]]
        assert listed.json()[0]["skillsRequired"] == ["React", "Go"]

    def test_client_cannot_set_posted_at(self, client, make_job):
        response = client.post("/api/jobs", json=make_job(postedAt="1999-01-01T00:00:00"))

        assert response.json()["postedAt"] == START.isoformat()

    def test_update_job(self, client, make_job):
        job = client.post("/api/jobs", json=make_job()).json()

        response = client.put(f"/api/jobs/{job['_id']}", json=make_job(title="Staff Engineer"))

        assert response.status_code == 200
        assert response.json()["title"] == "Staff Engineer"
        assert response.json()["_id"] == job["_id"]

    def test_update_unknown_job_returns_null(self, client, make_job):
        response = client.put("/api/jobs/missing01", json=make_job())

        assert response.status_code == 200
        assert response.json() is None

    def test_delete_twice_succeeds(self, client, make_job):
        job = client.post("/api/jobs", json=make_job()).json()

        first = client.delete(f"/api/jobs/{job['_id']}")
        second = client.delete(f"/api/jobs/{job['_id']}")

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json() == {"success": True}
        assert client.get("/api/jobs").json() == []

    def test_apply_records_application(self, client):
        client.post("/api/users", json={"uid": "u1", "email": "u1@example.edu", "role": "student"})

        response = client.post("/api/jobs/J1/apply", json={"uid": "u1"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        applications = client.get("/api/users/u1").json()["applications"]
        assert len(applications) == 1
        assert applications[0]["jobId"] == "J1"
        assert applications[0]["status"] == "Applied"

    def test_apply_without_uid_is_server_error(self, client):
        response = client.post("/api/jobs/J1/apply", json={})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to apply for job"}


# ==============================================================================
# Users & Colleges
# ==============================================================================

class TestUserRoutes:

    def test_create_and_fetch_user(self, client):
        response = client.post("/api/users", json={
            "uid": "u1", "email": "u1@example.edu", "name": "Ada", "role": "student", "collegeId": "c1"
        })

        assert response.status_code == 201
        assert response.json()["uid"] == "u1"
        fetched = client.get("/api/users/u1").json()
        assert fetched["name"] == "Ada"
        assert fetched["applications"] == []

    def test_unknown_user_is_null_not_error(self, client):
        response = client.get("/api/users/nobody")

        assert response.status_code == 200
        assert response.json() is None

    def test_duplicate_uid_is_server_error(self, client):
        body = {"uid": "u1", "email": "u1@example.edu", "role": "student"}
        client.post("/api/users", json=body)

        response = client.post("/api/users", json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create user"}

    def test_user_without_uid_is_server_error(self, client):
        for _ in range(2):
            response = client.post("/api/users", json={"email": "a@x.edu", "name": "Ada"})

            assert response.status_code == 500
            assert response.json() == {"error": "Failed to create user"}

    def test_update_user_name_and_bio(self, client):
        client.post("/api/users", json={"uid": "u1", "email": "u1@example.edu", "name": "Ada", "role": "student"})

        response = client.put("/api/users/u1", json={"name": "Grace", "bio": "Compilers"})

        assert response.status_code == 200
        assert response.json()["name"] == "Grace"
        assert response.json()["bio"] == "Compilers"

    def test_college_students(self, client):
        client.post("/api/users", json={"uid": "s1", "email": "s1@x.edu", "role": "student", "collegeId": "c1"})
        client.post("/api/users", json={"uid": "r1", "email": "r1@x.com", "role": "recruiter", "collegeId": "c1"})
        client.post("/api/jobs/J9/apply", json={"uid": "s1"})

        response = client.get("/api/colleges/c1/students")

        assert response.status_code == 200
        students = response.json()
        assert [s["uid"] for s in students] == ["s1"]
        assert students[0]["applications"][0]["jobId"] == "J9"

    def test_college_without_students_is_empty_list(self, client):
        response = client.get("/api/colleges/nowhere/students")

        assert response.status_code == 200
        assert response.json() == []


# ==============================================================================
# Error handling
# ==============================================================================

@pytest.fixture
def broken_client(settings, sio):
    repository = MagicMock(spec=PlacementRepository)
    repository.backend_name = "sqlite"
    for name in ("list_jobs", "create_job", "update_job", "delete_job", "get_user",
                 "create_user", "update_user", "apply_to_job", "list_college_students"):
        getattr(repository, name).side_effect = RuntimeError("disk I/O error at /var/secret")
    app = create_app(settings, repository=repository, notifier=JobNotifier(sio=sio))
    with TestClient(app) as test_client:
        yield test_client


class TestErrors:

    @pytest.mark.parametrize("method, path, body, message", [
        ("get", "/api/jobs", None, "Failed to fetch jobs"),
        ("post", "/api/jobs", {}, "Failed to create job"),
        ("put", "/api/jobs/j1", {}, "Failed to update job"),
        ("delete", "/api/jobs/j1", None, "Failed to delete job"),
        ("post", "/api/jobs/j1/apply", {"uid": "u1"}, "Failed to apply for job"),
        ("get", "/api/users/u1", None, "Failed to fetch user"),
        ("post", "/api/users", {}, "Failed to create user"),
        ("put", "/api/users/u1", {}, "Failed to update user"),
        ("get", "/api/colleges/c1/students", None, "Failed to fetch college students"),
    ])
    def test_store_failure_is_opaque_500(self, broken_client, method, path, body, message):
        kwargs = {"json": body} if body is not None else {}

        response = getattr(broken_client, method)(path, **kwargs)

        assert response.status_code == 500
        assert response.json() == {"error": message}
        assert "secret" not in response.text

    def test_failed_mutations_broadcast_nothing(self, broken_client, sio):
        broken_client.post("/api/jobs", json={"title": "x"})
        broken_client.put("/api/jobs/j1", json={"title": "x"})
        broken_client.delete("/api/jobs/j1")

        sio.emit.assert_not_awaited()

    def test_malformed_body_is_500_not_4xx(self, client):
        response = client.post(
            "/api/jobs",
            content="not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Malformed request"}


# ==============================================================================
# Health & realtime
# ==============================================================================

class TestRealtime:

    def test_health_reports_backend(self, client):
        response = client.get("/health")

        assert response.json() == {"status": "healthy", "backend": "sqlite"}

    def test_created_event_carries_same_identity(self, client, sio, make_job):
        job = client.post("/api/jobs", json=make_job()).json()

        sio.emit.assert_awaited_once()
        event, data = sio.emit.await_args.args
        assert event == "job:created"
        assert data["_id"] == job["_id"]
        assert data["version"] == 1

    def test_update_and_delete_events(self, client, sio, make_job):
        job = client.post("/api/jobs", json=make_job()).json()

        client.put(f"/api/jobs/{job['_id']}", json=make_job(title="Renamed"))
        client.delete(f"/api/jobs/{job['_id']}")

        events = [c.args for c in sio.emit.await_args_list]
        assert [event for event, _ in events] == ["job:created", "job:updated", "job:deleted"]
        assert events[1][1]["title"] == "Renamed"
        assert events[1][1]["version"] == 2
        assert events[2][1] == job["_id"]

    def test_update_of_unknown_job_broadcasts_nothing(self, client, sio, make_job):
        client.put("/api/jobs/missing01", json=make_job())

        sio.emit.assert_not_awaited()


# ==============================================================================
# Concurrency
# ==============================================================================

STORE_DELAY = 0.5


def slow(result):
    def call(*args, **kwargs):
        time.sleep(STORE_DELAY)
        return result
    return call


@pytest.fixture
def slow_app(settings, sio):
    repository = MagicMock(spec=PlacementRepository)
    repository.backend_name = "mongodb"
    repository.list_jobs.side_effect = slow([])
    repository.get_user.side_effect = slow(None)
    repository.create_job.side_effect = slow({"_id": "j1", "title": "x"})
    return create_app(settings, repository=repository, notifier=JobNotifier(sio=sio))


class TestConcurrency:
    """A slow store call holds up its own request only."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("requests", [
        [("GET", "/api/jobs", None), ("GET", "/api/jobs", None)],
        [("GET", "/api/users/u1", None), ("GET", "/api/jobs", None)],
        [("POST", "/api/jobs", {"title": "x"}), ("POST", "/api/jobs", {"title": "y"})],
    ])
    async def test_slow_store_calls_overlap(self, slow_app, requests):
        transport = httpx.ASGITransport(app=slow_app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            started = time.perf_counter()
            responses = await asyncio.gather(*[
                ac.request(method, path, json=body) for method, path, body in requests
            ])
            elapsed = time.perf_counter() - started

        assert all(r.status_code in (200, 201) for r in responses)
        assert elapsed < STORE_DELAY * 1.8
