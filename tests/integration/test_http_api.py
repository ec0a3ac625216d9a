"""Integration tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from task_manager_api.server.http_app import create_app


@pytest.fixture
def client():
    """Create a test client over a fresh application and database."""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def create(client):
    """Create a task over HTTP and return the response JSON."""

    def _create(title="Test Task", due_date="2026-03-01T09:00:00", **extra):
        body = {"title": title, "dueDate": due_date, **extra}
        response = client.post("/api/tasks", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestListEndpoint:
    """Tests for GET /api/tasks."""

    def test_empty_list(self, client):
        response = client.get("/api/tasks")

        assert response.status_code == 200
        assert response.json() == []

    def test_response_uses_camel_case_keys(self, client, create):
        create(title="Shape", description="Check keys", isCompleted=True)

        task = client.get("/api/tasks").json()[0]

        assert set(task) == {"id", "title", "description", "dueDate", "isCompleted"}
        assert task["isCompleted"] is True
        assert task["dueDate"].startswith("2026-03-01T09:00:00")

    def test_filter_sort_and_page_parameters(self, client, create):
        create(title="Report A", due_date="2026-03-03T00:00:00", isCompleted=True)
        create(title="Report B", due_date="2026-03-02T00:00:00", isCompleted=True)
        create(title="Report C", due_date="2026-03-01T00:00:00", isCompleted=False)
        create(title="report D", due_date="2026-03-04T00:00:00", isCompleted=True)

        response = client.get(
            "/api/tasks",
            params={
                "title": "Report",
                "isCompleted": "true",
                "sortBy": "title",
                "sortOrder": "descending",
                "page": 1,
                "pageSize": 1,
            },
        )

        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["Report B"]

    def test_page_size_over_maximum_is_plain_text_400(self, client):
        response = client.get("/api/tasks", params={"pageSize": 101})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Maximum page size is 100."

    def test_invalid_sort_by_is_plain_text_400(self, client):
        response = client.get("/api/tasks", params={"sortBy": "InvalidField"})

        assert response.status_code == 400
        assert response.text == (
            "Invalid sortBy value. Valid options are: Id, Title, DueDate, IsCompleted."
        )

    def test_invalid_sort_order_is_plain_text_400(self, client):
        response = client.get("/api/tasks", params={"sortOrder": "Upwards"})

        assert response.status_code == 400
        assert response.text == "Invalid sortOrder value. Valid options are: Ascending, Descending."

    def test_malformed_query_value_is_validation_problem(self, client):
        response = client.get("/api/tasks", params={"page": "first"})

        assert response.status_code == 400
        body = response.json()
        assert body["title"] == "One or more validation errors occurred."
        assert "page" in body["errors"]


class TestGetEndpoint:
    """Tests for GET /api/tasks/{id}."""

    def test_get_existing(self, client, create):
        created = create(title="Find Me")

        response = client.get(f"/api/tasks/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_is_empty_404(self, client):
        response = client.get("/api/tasks/999")

        assert response.status_code == 404
        assert response.content == b""


class TestCreateEndpoint:
    """Tests for POST /api/tasks."""

    def test_create_returns_location(self, client):
        response = client.post(
            "/api/tasks",
            json={"title": "New Task", "description": "New Desc", "dueDate": "2026-03-05T12:00:00"},
        )

        assert response.status_code == 201
        created = response.json()
        assert created["title"] == "New Task"
        assert created["isCompleted"] is False
        assert response.headers["location"].endswith(f"/api/tasks/{created['id']}")

        follow = client.get(response.headers["location"])
        assert follow.json() == created

    def test_snake_case_body_is_accepted(self, client):
        response = client.post(
            "/api/tasks", json={"title": "Snake", "due_date": "2026-03-05T12:00:00"}
        )

        assert response.status_code == 201

    def test_empty_title_is_validation_problem(self, client):
        response = client.post("/api/tasks", json={"title": "", "dueDate": "2026-03-05T12:00:00"})

        assert response.status_code == 400
        assert response.json()["errors"] == {"title": ["The Title field is required."]}
        assert client.get("/api/tasks").json() == []

    def test_long_title_is_validation_problem(self, client):
        response = client.post(
            "/api/tasks", json={"title": "t" * 101, "dueDate": "2026-03-05T12:00:00"}
        )

        assert response.status_code == 400
        assert response.json()["errors"]["title"] == [
            "The field Title must be a string with a maximum length of 100."
        ]

    def test_missing_due_date_is_validation_problem(self, client):
        response = client.post("/api/tasks", json={"title": "No date"})

        assert response.status_code == 400
        assert "dueDate" in response.json()["errors"]


class TestUpdateEndpoint:
    """Tests for PUT /api/tasks/{id}."""

    def test_update_existing_is_204(self, client, create):
        created = create(title="Before")

        response = client.put(
            f"/api/tasks/{created['id']}",
            json={
                "id": created["id"],
                "title": "After",
                "dueDate": "2026-04-01T00:00:00",
                "isCompleted": True,
            },
        )

        assert response.status_code == 204
        assert response.content == b""
        stored = client.get(f"/api/tasks/{created['id']}").json()
        assert stored["title"] == "After"
        assert stored["isCompleted"] is True
        assert stored["description"] is None

    def test_id_mismatch_is_plain_text_400(self, client, create):
        created = create(title="Mine")

        response = client.put(
            f"/api/tasks/{created['id']}",
            json={"id": created["id"] + 1, "title": "Theirs", "dueDate": "2026-04-01T00:00:00"},
        )

        assert response.status_code == 400
        assert response.text == "Route id and request id do not match."
        assert client.get(f"/api/tasks/{created['id']}").json()["title"] == "Mine"

    def test_update_missing_is_404(self, client):
        response = client.put(
            "/api/tasks/999",
            json={"id": 999, "title": "Ghost", "dueDate": "2026-04-01T00:00:00"},
        )

        assert response.status_code == 404


class TestDeleteEndpoint:
    """Tests for DELETE /api/tasks/{id}."""

    def test_delete_existing_then_missing(self, client, create):
        created = create(title="Delete Me")

        first = client.delete(f"/api/tasks/{created['id']}")
        second = client.delete(f"/api/tasks/{created['id']}")

        assert first.status_code == 204
        assert second.status_code == 404
        assert client.get(f"/api/tasks/{created['id']}").status_code == 404


class TestHealthEndpoint:
    """Tests for GET /healthz."""

    def test_healthy(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "tasks" in body["database"]["tables"]

    def test_unhealthy_database_is_503(self, client, monkeypatch):
        from task_manager_api.services import get_service_factory

        orm_manager = get_service_factory().orm_manager
        monkeypatch.setattr(
            orm_manager,
            "perform_health_check",
            lambda: {"healthy": False, "error": "database is locked"},
        )

        response = client.get("/healthz")

        assert response.status_code == 503
        assert response.json()["status"] == "unavailable"


class TestServiceOverride:
    """Tests for swapping the task service dependency."""

    def test_routes_use_overridden_service(self, task_service, add_task):
        from task_manager_api.server.http_app import get_task_service

        add_task("From the fixture store")
        app = create_app()
        app.dependency_overrides[get_task_service] = lambda: task_service

        with TestClient(app) as override_client:
            response = override_client.get("/api/tasks")

        assert [t["title"] for t in response.json()] == ["From the fixture store"]
