"""
Integration tests for the registration flow.

Tests the full flow through the API with the real validator, service,
console notifier and an in-memory repository.
"""

import logging
import re

import pytest
from fastapi.testclient import TestClient

from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.api.main import app


@pytest.fixture
def store() -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository()


@pytest.fixture
def client(store: InMemoryRegistrationRepository) -> TestClient:
    """Create test client backed by a fresh in-memory repository."""
    app.state.repository = store
    app.state.pool = None
    return TestClient(app)


class TestCreateFlow:
    """End-to-end tests for POST /v1/registration."""

    def test_full_registration_flow(self, client, make_payload, caplog: pytest.LogCaptureFixture) -> None:
        """Create succeeds, notifications are logged and flags are true."""
        with caplog.at_level(logging.INFO):
            response = client.post("/v1/registration", json=make_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert re.match(r"^reg_", body["registrationId"])
        assert body["emailSent"] is True
        assert body["adminNotificationSent"] is True
        assert "[CONFIRMATION]" in caplog.text
        assert "[ADMIN ALERT]" in caplog.text

    def test_duplicate_submission_returns_409(self, client, make_payload) -> None:
        """Same input twice: second call is a duplicate pointing at the first id."""
        first = client.post("/v1/registration", json=make_payload())
        second = client.post("/v1/registration", json=make_payload())

        assert second.status_code == 409
        body = second.json()
        assert body["errorCode"] == "DUPLICATE_REGISTRATION"
        assert body["existingRegistrationId"] == first.json()["registrationId"]

    def test_invalid_name_returns_400(self, client, make_payload, store) -> None:
        """Invalid names are rejected with field errors and nothing is stored."""
        response = client.post("/v1/registration", json=make_payload(firstName="John123"))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["field"] == "firstName"
        assert "letters and spaces only" in body["errors"][0]["message"]
        assert len(store) == 0

    def test_mismatched_emails_return_400(self, client, make_payload) -> None:
        """Mismatched email confirmation is reported on confirmEmail."""
        response = client.post(
            "/v1/registration", json=make_payload(email="a@b.com", confirmEmail="c@b.com")
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "confirmEmail", "message": "Email addresses do not match"}
        ]

    def test_missing_body_returns_400(self, client) -> None:
        """An empty request is a validation failure, not a crash."""
        response = client.post("/v1/registration")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "body"


class TestFetchFlow:
    """End-to-end tests for GET /v1/registration/{id}."""

    def test_get_after_create(self, client, make_payload) -> None:
        """Fetching a created registration returns it as confirmed."""
        created = client.post(
            "/v1/registration", json=make_payload(email="John.Doe@Example.com")
        ).json()

        response = client.get(f"/v1/registration/{created['registrationId']}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["registrationId"]
        assert body["status"] == "confirmed"
        assert body["email"] == "john.doe@example.com"
        assert body["emailSent"] is True
        assert "adminNotificationSent" not in body
        assert "updatedAt" not in body

    def test_get_unknown_returns_404(self, client, make_payload) -> None:
        """Unknown ids are not found, regardless of existing registrations."""
        client.post("/v1/registration", json=make_payload())

        response = client.get("/v1/registration/reg_nonexistent123")

        assert response.status_code == 404
        assert "not found" in response.json()["message"]


class TestValidateFlow:
    """End-to-end tests for POST /v1/registration/validate."""

    def test_valid_data(self, client, make_payload) -> None:
        response = client.post("/v1/registration/validate", json=make_payload())

        assert response.status_code == 200
        assert response.json() == {"valid": True, "message": "All fields are valid"}

    def test_invalid_name(self, client, make_payload) -> None:
        response = client.post("/v1/registration/validate", json=make_payload(firstName="John123"))

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is False
        assert body["errors"][0]["field"] == "firstName"
        assert "letters and spaces only" in body["errors"][0]["message"]

    def test_reports_every_failure(self, client, make_payload) -> None:
        """Each broken rule is listed, including the email match."""
        response = client.post(
            "/v1/registration/validate",
            json=make_payload(firstName="1", confirmEmail="other@example.com"),
        )

        assert [(e["field"], e["code"]) for e in response.json()["errors"]] == [
            ("firstName", "TOO_SMALL"),
            ("firstName", "INVALID_PATTERN"),
            ("confirmEmail", "EMAIL_MISMATCH"),
        ]

    def test_duplicate_email(self, client, make_payload) -> None:
        client.post("/v1/registration", json=make_payload())

        response = client.post("/v1/registration/validate", json=make_payload())

        assert response.json() == {
            "valid": False,
            "message": "Validation failed",
            "errors": [
                {"field": "email", "message": "Email already registered", "code": "DUPLICATE_EMAIL"}
            ],
        }

    def test_validate_never_creates(self, client, make_payload, store) -> None:
        """Any number of validate calls leaves the store empty."""
        for payload in (make_payload(), make_payload(firstName="J"), {}, make_payload()):
            client.post("/v1/registration/validate", json=payload)

        assert len(store) == 0


class TestHealth:
    """Tests for /health."""

    def test_health_without_database(self, client) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
