"""Tests for the HTTP API."""

import json

import pytest
from starlette.testclient import TestClient

from promptform.api import create_app
from promptform.orchestrator import FormGenerationOrchestrator

from conftest import VALID_RESPONSES, FakeProvider

OWNER = {"X-User-Id": "owner-1"}
INTRUDER = {"X-User-Id": "intruder"}


@pytest.fixture
def client(store, provider, config):
    orchestrator = FormGenerationOrchestrator(store, provider=provider, config=config)
    with TestClient(create_app(store=store, orchestrator=orchestrator, config=config)) as client:
        yield client


def _generate(client) -> dict:
    response = client.post("/api/forms/generate", json={"query": "Coffee feedback"}, headers=OWNER)
    assert response.status_code == 200
    return response.json()


def _publish(client, form_id) -> dict:
    response = client.patch(f"/api/forms/{form_id}/publish", headers=OWNER)
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestGenerate:
    """POST /api/forms/generate"""

    def test_generate(self, client):
        body = _generate(client)
        assert body["success"] is True
        assert body["message"] == "Form generated successfully"
        assert body["data"]["formName"] == "Coffee Shop Feedback"
        assert body["form"]["slug"] == "coffee-shop-feedback"
        assert body["form"]["sharing"]["isPublic"] is False
        assert body["formId"] == body["form"]["id"]

    def test_requires_user(self, client):
        response = client.post("/api/forms/generate", json={"query": "Coffee feedback"})
        assert response.status_code == 401
        assert response.json()["errorCode"] == "unauthenticated"

    def test_missing_query(self, client):
        response = client.post("/api/forms/generate", json={}, headers=OWNER)
        assert response.status_code == 400

    def test_invalid_json(self, client):
        response = client.post(
            "/api/forms/generate",
            content=b"{not json",
            headers={**OWNER, "Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_malformed_output(self, store, config):
        """Test generation errors carry their kind."""
        orchestrator = FormGenerationOrchestrator(store, provider=FakeProvider("no json here"), config=config)
        with TestClient(create_app(store=store, orchestrator=orchestrator, config=config)) as client:
            response = client.post("/api/forms/generate", json={"query": "Anything"}, headers=OWNER)

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert body["kind"] == "MalformedOutput"

    def test_invalid_schema(self, store, config):
        candidate = {"formName": "Broken", "fields": [{"fieldId": "x", "type": "SLIDER", "displayName": "X"}]}
        orchestrator = FormGenerationOrchestrator(
            store, provider=FakeProvider(json.dumps(candidate)), config=config,
        )
        with TestClient(create_app(store=store, orchestrator=orchestrator, config=config)) as client:
            response = client.post("/api/forms/generate", json={"query": "Anything"}, headers=OWNER)

        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "InvalidSchema"
        assert body["violations"][0]["rule"] == "unknown_type"


class TestForms:
    """Owner form routes."""

    def test_list_forms_omits_fields(self, client):
        _generate(client)
        body = client.get("/api/forms", headers=OWNER).json()
        assert len(body["data"]) == 1
        assert "fields" not in body["data"][0]
        assert body["data"][0]["fieldCount"] == 5

    def test_get_form(self, client):
        form_id = _generate(client)["formId"]
        assert client.get(f"/api/forms/{form_id}", headers=OWNER).json()["data"]["id"] == form_id
        assert client.get(f"/api/forms/{form_id}", headers=INTRUDER).status_code == 403
        assert client.get("/api/forms/missing", headers=OWNER).status_code == 404

    def test_update_form(self, client):
        form_id = _generate(client)["formId"]
        response = client.post(f"/api/forms/{form_id}", json={"formName": "Renamed"}, headers=OWNER)
        assert response.status_code == 200
        assert response.json()["data"]["formName"] == "Renamed"
        assert response.json()["data"]["slug"] == "coffee-shop-feedback"

    def test_update_form_invalid(self, client):
        form_id = _generate(client)["formId"]
        response = client.post(
            f"/api/forms/{form_id}",
            json={"fields": [{"fieldId": "a", "type": "RADIO", "displayName": "A"}]},
            headers=OWNER,
        )
        assert response.status_code == 422
        assert response.json()["violations"][0]["rule"] == "choices_required"

    def test_publish_toggle(self, client):
        form_id = _generate(client)["formId"]
        body = _publish(client, form_id)
        assert body["isPublic"] is True
        assert body["publicLink"].endswith("/form/coffee-shop-feedback")
        assert _publish(client, form_id)["isPublic"] is False

    def test_publish_requires_owner(self, client):
        form_id = _generate(client)["formId"]
        assert client.patch(f"/api/forms/{form_id}/publish", headers=INTRUDER).status_code == 403

    def test_public_form(self, client):
        form_id = _generate(client)["formId"]
        assert client.get("/api/forms/public/coffee-shop-feedback").status_code == 403

        _publish(client, form_id)
        body = client.get("/api/forms/public/coffee-shop-feedback").json()
        assert body["data"]["id"] == form_id
        assert body["formConfig"]["schema"]["required"] == ["name", "email", "rating"]

        assert client.get("/api/forms/public/unknown").status_code == 404

    def test_delete_form(self, client):
        form_id = _generate(client)["formId"]
        _publish(client, form_id)
        client.post(f"/api/submissions/{form_id}", json={"responses": VALID_RESPONSES})

        assert client.delete(f"/api/forms/{form_id}", headers=INTRUDER).status_code == 403
        response = client.delete(f"/api/forms/{form_id}", headers=OWNER)
        assert response.status_code == 200
        assert response.json()["deletedSubmissions"] == 1
        assert client.get(f"/api/forms/{form_id}", headers=OWNER).status_code == 404


class TestSubmissions:
    """Submission routes."""

    def test_submit_and_read_back(self, client):
        form_id = _generate(client)["formId"]
        _publish(client, form_id)

        response = client.post(
            f"/api/submissions/{form_id}",
            json={"responses": VALID_RESPONSES, "submitterEmail": "ada@example.com"},
            headers={"User-Agent": "pytest-client"},
        )
        assert response.status_code == 201
        submission_id = response.json()["data"]["submissionId"]

        listed = client.get(f"/api/forms/{form_id}/submissions", headers=OWNER).json()["data"]
        assert [s["id"] for s in listed] == [submission_id]

        submission = client.get(f"/api/submissions/{submission_id}", headers=OWNER).json()["data"]
        assert submission["responses"]["email"] == "ada@example.com"
        assert submission["metadata"]["userAgent"] == "pytest-client"

        form = client.get(f"/api/forms/{form_id}", headers=OWNER).json()["data"]
        assert form["submissionStats"]["count"] == 1

    def test_submit_invalid(self, client):
        form_id = _generate(client)["formId"]
        _publish(client, form_id)

        response = client.post(f"/api/submissions/{form_id}", json={"responses": {"email": "nope"}})
        assert response.status_code == 422
        errors = response.json()["errors"]
        assert errors["email"] == "Email must be a valid email address"
        assert errors["name"] == "Your Name is required"

    def test_submit_private(self, client):
        form_id = _generate(client)["formId"]
        response = client.post(f"/api/submissions/{form_id}", json={"responses": VALID_RESPONSES})
        assert response.status_code == 403
        assert response.json()["errorCode"] == "form_not_public"

    def test_submit_bad_body(self, client):
        form_id = _generate(client)["formId"]
        _publish(client, form_id)
        response = client.post(f"/api/submissions/{form_id}", json={"responses": "everything"})
        assert response.status_code == 400

    def test_submissions_require_owner(self, client):
        form_id = _generate(client)["formId"]
        assert client.get(f"/api/forms/{form_id}/submissions", headers=INTRUDER).status_code == 403


class TestAnalytics:
    def test_submissions_over_time(self, client):
        form_id = _generate(client)["formId"]
        _publish(client, form_id)
        client.post(f"/api/submissions/{form_id}", json={"responses": VALID_RESPONSES})

        body = client.get("/api/submissions/analytics/submissions-over-time?days=7", headers=OWNER).json()["data"]
        assert body["periodDays"] == 7
        assert body["totalSubmissions"] == 1
        assert len(body["submissions"]) == 7
        assert body["submissions"][-1]["count"] == 1

    def test_bad_days(self, client):
        response = client.get("/api/submissions/analytics/submissions-over-time?days=abc", headers=OWNER)
        assert response.status_code == 400
