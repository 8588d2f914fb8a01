"""
HTTP tests for the extraction endpoints
"""

import pytest
from fastapi.testclient import TestClient

from app.api.nlp import SAMPLE_REQUESTS, limiter
from app.main import app

PREFIX = "/api/v1/nlp"


@pytest.fixture
def client():
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        limiter.enabled = True


def test_extract(client):
    response = client.post(f"{PREFIX}/extract", json={"text": "Guests: 4 and up to $400, pool and wifi, villa"})
    assert response.status_code == 200
    data = response.json()
    assert data["extracted"] == {
        "guests": 4,
        "budget": 400,
        "propertyType": "villa",
        "amenities": ["pool", "wifi"],
    }
    assert data["fields_found"] == ["guests", "budget", "propertyType", "amenities"]
    assert data["warnings"] == []
    assert data["processing_time"] >= 0


def test_extract_reports_recovered_date(client):
    response = client.post(f"{PREFIX}/extract", json={"text": "Condo in Lihue, Feb 30 - 31"})
    assert response.status_code == 200
    data = response.json()
    assert data["extracted"] == {"location": "Lihue, Kauai", "propertyType": "condo"}
    assert len(data["warnings"]) == 1


@pytest.mark.parametrize("text", [
    "   ",
    "x" * 2001,
    "villa <script>alert('x')</script>",
])
def test_extract_rejects_invalid_text(client, text):
    response = client.post(f"{PREFIX}/extract", json={"text": text})
    assert response.status_code == 422


def test_extract_batch(client):
    response = client.post(f"{PREFIX}/extract-batch", json=[
        {"text": "Villa in Poipu for 4 guests"},
        {"text": "Random text with no travel info"},
    ])
    assert response.status_code == 200
    data = response.json()
    assert [r["status"] for r in data["results"]] == ["matched", "empty"]
    assert data["results"][1]["extracted"] == {}
    assert data["summary"]["total_requests"] == 2
    assert data["summary"]["matched"] == 1
    assert data["summary"]["empty"] == 1


def test_extract_batch_too_large(client):
    response = client.post(f"{PREFIX}/extract-batch", json=[{"text": "villa"}] * 11)
    assert response.status_code == 400


def test_monitor_request_defaults(client):
    response = client.post(f"{PREFIX}/monitor-request", json={"text": "Random text with no travel info"})
    assert response.status_code == 200
    data = response.json()
    assert data["extracted"] == {}
    assert data["defaults_applied"] == ["location", "guests"]
    assert data["monitor_request"]["location"] == "Kauai, HI"
    assert data["monitor_request"]["guests"] == 2
    assert data["monitor_request"]["checkIn"] == ""


def test_monitor_request_from_text(client):
    response = client.post(f"{PREFIX}/monitor-request", json={
        "text": "Princeville condo, Dec 27th, 2025 through Jan 3rd, 2026, 2 adults, up to $250"
    })
    data = response.json()
    assert data["defaults_applied"] == []
    monitor = data["monitor_request"]
    assert monitor["location"] == "Princeville, Kauai"
    assert monitor["checkIn"] == "2025-12-27"
    assert monitor["checkOut"] == "2026-01-03"
    assert monitor["guests"] == 2
    assert monitor["budget"] == 250
    assert monitor["propertyType"] == "condo"


def test_samples(client):
    response = client.get(f"{PREFIX}/samples")
    assert response.status_code == 200
    assert response.json()["count"] == len(SAMPLE_REQUESTS)


def test_health(client):
    assert client.get(f"{PREFIX}/health").json()["status"] == "healthy"
    detailed = client.get("/health").json()
    assert detailed["status"] == "healthy"
    assert detailed["components"]["extractor"] == "healthy"


def test_request_id_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_length_limit_comes_from_module_settings(monkeypatch):
    from app.api import schemas

    monkeypatch.setattr(schemas.settings, "MAX_REQUEST_LENGTH", 20)
    monkeypatch.setenv("MAX_REQUEST_LENGTH", "5000")

    assert schemas.ExtractRequest(text="Villa in Poipu").text == "Villa in Poipu"
    with pytest.raises(ValueError, match="too long"):
        schemas.ExtractRequest(text="Villa in Poipu for 4 guests")
