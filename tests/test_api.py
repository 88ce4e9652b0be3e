"""Test the HTTP API with FastAPI's TestClient."""
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

import letters.service
from api.main import app
from core.llm.completion import Completion, CompletionFailure
from letters.router import get_completer
from letters.schemas import LetterType


class FakeCompleter:
    def __init__(self, result):
        self.result = result
        self.calls = 0

    async def complete(self, prompt, max_tokens):
        self.calls += 1
        return self.result


@pytest.fixture
def client():
    app.dependency_overrides[get_completer] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


def _letter_body(letter_type):
    return {
        "letterType": letter_type,
        "complaint": "My order never arrived.",
        "companyName": "Acme Ltd",
        "incidentDate": "2026-01-10",
        "purchaseAmount": "75",
        "currency": "GBP",
        "desiredOutcome": "a full refund",
        "tone": "assertive",
        "issues": ["Non-delivery"],
        "legalBasis": [],
    }


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_tools(client):
    body = client.get("/").json()
    assert "vehicle-rights" in body["tools"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert client.get("/health").headers["X-Request-ID"]


# ---------------------------------------------------------------------------
# Letter generation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("letter_type", [t.value for t in LetterType])
def test_letter_without_credentials_is_mock(client, letter_type):
    response = client.post("/api/generate/letter-type", json=_letter_body(letter_type))
    assert response.status_code == 200
    body = response.json()
    assert body["mock"] is True
    assert body["letter"].strip()
    assert "Acme Ltd" in body["subject"]
    assert "letterType" not in body


def test_letter_with_completer(client):
    completer = FakeCompleter(Completion("Subject: x\n\nDear Acme Ltd Customer Relations,\n\nBody"))
    app.dependency_overrides[get_completer] = lambda: completer

    response = client.post("/api/generate/letter-type", json=_letter_body("follow-up"))
    body = response.json()
    assert response.status_code == 200
    assert body == {
        "letter": "Dear Acme Ltd Customer Relations,\n\nBody",
        "subject": "Follow-Up - Formal Complaint - Acme Ltd",
        "letterType": "follow-up",
        "mock": False,
    }
    assert completer.calls == 1


def test_letter_service_error_is_mock(client):
    app.dependency_overrides[get_completer] = lambda: FakeCompleter(CompletionFailure("timeout"))
    body = client.post("/api/generate/letter-type", json=_letter_body("initial")).json()
    assert body["mock"] is True
    assert "Dear Acme Ltd Customer Relations," in body["letter"]


def test_letter_failure_returns_500(client, monkeypatch):
    def broken(request, today):
        raise RuntimeError("template error")

    monkeypatch.setattr(letters.service, "fallback_letter", broken)
    response = client.post("/api/generate/letter-type", json=_letter_body("initial"))
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to generate letter",
        "letter": "",
        "subject": "",
        "mock": True,
    }


def test_letter_with_very_large_amount(client):
    body = _letter_body("initial")
    body["purchaseAmount"] = "12345678901234567890123456789"
    app.dependency_overrides[get_completer] = lambda: FakeCompleter(Completion("Dear Acme Ltd,"))
    response = client.post("/api/generate/letter-type", json=body)
    assert response.status_code == 200
    assert response.json()["mock"] is False

    app.dependency_overrides[get_completer] = lambda: None
    response = client.post("/api/generate/letter-type", json=body)
    assert response.status_code == 200
    assert response.json()["mock"] is True


def test_letter_rejects_unknown_type(client):
    response = client.post("/api/generate/letter-type", json=_letter_body("poem"))
    assert response.status_code == 422


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

def test_vehicle_rights_endpoint(client):
    purchase = date.today() - timedelta(days=10)
    response = client.post(
        "/api/tools/vehicle-rights",
        json={"country": "uk", "seller_type": "dealer", "purchase_date": purchase.isoformat()},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["eligible"] is True
    assert body["remedies"][0] == "Full refund"
    assert body["window_label"] == "20 days left in 30-day window to reject for full refund"


def test_vehicle_rights_input_error(client):
    response = client.post("/api/tools/vehicle-rights", json={})
    assert response.status_code == 422
    assert response.json() == {"error": "Please select your country", "field": "country"}


def test_warranty_endpoint_protections(client):
    purchase = date.today() - timedelta(days=100)
    response = client.post(
        "/api/tools/warranty-check",
        json={"country": "uk", "product_category": "electronics", "purchase_date": purchase.isoformat()},
    )
    body = response.json()
    assert response.status_code == 200
    assert body["claim_type"] == "Manufacturer Warranty"
    assert body["protections"][0]["name"] == "Manufacturer Warranty"
    assert body["protections"][0]["active"] is True


def test_parking_endpoint_returns_letter(client):
    response = client.post(
        "/api/tools/parking-appeal",
        json={
            "ticket_type": "private",
            "appeal_ground": "signage",
            "ticket_date": date.today().isoformat(),
        },
    )
    body = response.json()
    assert response.status_code == 200
    assert "POPLA" in body["escalation_path"]
    assert "Parking Charge Notice" in body["letter"]


def test_energy_endpoint_input_error(client):
    response = client.post("/api/tools/energy-complaint", json={"supplier": "SSE"})
    assert response.status_code == 422
    assert response.json() == {"error": "Please select the type of issue", "field": "issue_type"}


def test_warranty_endpoint_rejects_huge_months(client):
    response = client.post(
        "/api/tools/warranty-check",
        json={
            "country": "uk",
            "product_category": "electronics",
            "purchase_date": "2024-01-01",
            "warranty_months": 400000,
        },
    )
    assert response.status_code == 422
    assert response.json()["field"] == "warranty_months"
