"""
Basic tests for the auto rating API.
"""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from app.main import app
from app.deps import get_customer_lookup
from app.middleware import PerformanceMiddleware

client = TestClient(app)

CURRENT_YEAR = datetime.now(timezone.utc).year


class StubLookup:
    def __init__(self, has_other_policies=False, is_good_driver=False):
        self._answers = (has_other_policies, is_good_driver)

    def has_other_policies(self, customer_id):
        return self._answers[0]

    def is_good_driver(self, customer_id):
        return self._answers[1]


@pytest.fixture
def stub_lookup():
    def _install(**answers):
        app.dependency_overrides[get_customer_lookup] = lambda: StubLookup(**answers)
    yield _install
    app.dependency_overrides.clear()


def quote_payload(**overrides):
    data = {
        "customer_name": "Jane Doe",
        "customer_age": 30,
        "vehicle_year": CURRENT_YEAR,
        "vehicle_make": "Toyota"
    }
    data.update(overrides)
    return data

def test_root_endpoint():
    """Test the root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Auto Insurance Rating API"

def test_health_endpoint():
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["rate_table_version"] == "2024.1"

def test_quote_endpoint(stub_lookup):
    """Test a quote for a new customer."""
    stub_lookup()
    response = client.post("/v1/quotes", json=quote_payload())
    assert response.status_code == 200

    body = response.json()
    assert body["quote_id"].startswith("QUOTE-")
    assert body["total_premium"] == 1430.0
    assert body["coverages"]["liability"] == 500.0
    assert body["coverages"]["collision"] == 390.0
    assert body["coverages"]["totalPremium"] == 1430.0
    assert body["applied_discounts"] == []
    assert body["customer"]["first_name"] == "Jane"
    assert body["vehicle"]["make"] == "Toyota"

def test_quote_endpoint_with_discounts(stub_lookup):
    """Test that lookup answers drive the discounts for existing customers."""
    stub_lookup(has_other_policies=True, is_good_driver=True)
    response = client.post("/v1/quotes", json=quote_payload(customer_id=1))
    assert response.status_code == 200

    body = response.json()
    assert body["applied_discounts"] == ["multiPolicy", "goodDriver"]
    assert body["total_premium"] == 1093.95
    assert body["coverages"]["multiPolicyDiscount"] == 143.0

def test_quote_endpoint_rejects_invalid_age(stub_lookup):
    """Test that out-of-range age is a 400, not a partial quote."""
    stub_lookup()
    response = client.post("/v1/quotes", json=quote_payload(customer_age=15))
    assert response.status_code == 400
    assert "16" in response.json()["detail"]

def test_quote_endpoint_rejects_blank_make(stub_lookup):
    stub_lookup()
    response = client.post("/v1/quotes", json=quote_payload(vehicle_make="  "))
    assert response.status_code == 400
    assert response.json()["detail"] == "Vehicle make is required"

def test_quote_endpoint_missing_fields():
    """Test that structurally invalid payloads fail schema validation."""
    response = client.post("/v1/quotes", json={})
    assert response.status_code == 422

def test_quote_endpoint_requires_customer_name():
    payload = quote_payload()
    del payload["customer_name"]
    response = client.post("/v1/quotes", json=payload)
    assert response.status_code == 422
    assert any(error["loc"][-1] == "customer_name" for error in response.json()["detail"])

def test_request_id_header(stub_lookup):
    stub_lookup()
    response = client.post("/v1/quotes", json=quote_payload(), headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Response-Time-Ms" in response.headers

def test_slow_threshold_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("SLOW_REQUEST_THRESHOLD_MS", "75")
    assert PerformanceMiddleware(app).slow_threshold_ms == 75.0
    assert PerformanceMiddleware(app, slow_threshold_ms=10.0).slow_threshold_ms == 10.0

def test_quote_endpoint_with_seeded_database():
    """Test lookups against the seeded database (runs startup events)."""
    with TestClient(app) as seeded_client:
        # Maria Lopez: holds a home policy, one violation
        response = seeded_client.post("/v1/quotes", json=quote_payload(customer_id=1))
        assert response.status_code == 200
        assert response.json()["applied_discounts"] == ["multiPolicy", "goodDriver"]

        # Unknown customer: lookups fail open, no discounts
        response = seeded_client.post("/v1/quotes", json=quote_payload(customer_id=999))
        assert response.status_code == 200
        assert response.json()["applied_discounts"] == []
        assert response.json()["total_premium"] == 1430.0
