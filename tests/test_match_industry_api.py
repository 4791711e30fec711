# tests/test_match_industry_api.py
import json

import pytest
from fastapi.testclient import TestClient

from site_api.core.exceptions import ProviderUnavailableError
from site_api.main import app
from site_api.routes.industries import get_catalog, get_matcher_config
from site_api.services.classification_provider import get_classification_provider
from site_api.services.industry_matcher import FALLBACK_REASONING, MatcherConfig

from conftest import FakeCatalog, FakeProvider, industry


@pytest.fixture
def wire():
    """Install fakes behind the route dependencies; returns a setter."""
    state = {}

    def _wire(catalog=None, provider=None, config=None):
        state["catalog"] = catalog or FakeCatalog()
        state["provider"] = provider or FakeProvider()
        state["config"] = config or MatcherConfig(api_key="test-key", timeout_seconds=2.0)
        app.dependency_overrides[get_catalog] = lambda: state["catalog"]
        app.dependency_overrides[get_classification_provider] = lambda: state["provider"]
        app.dependency_overrides[get_matcher_config] = lambda: state["config"]
        return state

    yield _wire
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def _provider_json(**overrides):
    payload = {
        "matchedIndustry": "construction",
        "confidence": "high",
        "reasoning": "Builds houses.",
        "alternateIndustries": ["real-estate"],
    }
    payload.update(overrides)
    return FakeProvider(json.dumps(payload))


def test_match_industry_success(client, wire):
    wire(provider=_provider_json())

    response = client.post("/api/match-industry", json={"businessDescription": "We build houses"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"matchedIndustry", "confidence", "reasoning", "alternateIndustries"}
    assert body["matchedIndustry"]["slug"] == "construction"
    assert body["matchedIndustry"]["name"] == "Construction"
    assert body["confidence"] == "high"
    assert body["reasoning"] == "Builds houses."
    assert body["alternateIndustries"] == [
        {"slug": "real-estate", "name": "Real Estate", "tagline": "Agencies and property managers"},
    ]
    assert response.headers["X-Request-ID"]


def test_match_industry_fallback(client, wire):
    wire(provider=_provider_json(matchedIndustry="plumbing", alternateIndustries=[]))

    body = client.post("/api/match-industry", json={"businessDescription": "Plumber"}).json()

    assert body["matchedIndustry"]["slug"] == "professional-services"
    assert body["confidence"] == "low"
    assert body["reasoning"] == FALLBACK_REASONING


@pytest.mark.parametrize(
    "payload",
    [{}, {"businessDescription": ""}, {"businessDescription": 12}, {"businessDescription": None}],
)
def test_match_industry_invalid_input(client, wire, payload):
    state = wire(provider=_provider_json())

    response = client.post("/api/match-industry", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Business description is required", "code": "invalid_input"}
    assert state["catalog"].calls == []
    assert state["provider"].prompts == []


def test_match_industry_not_configured(client, wire):
    wire(provider=_provider_json(), config=MatcherConfig(api_key=None))

    response = client.post("/api/match-industry", json={"businessDescription": "Cafe"})

    assert response.status_code == 500
    assert response.json()["code"] == "not_configured"


def test_match_industry_empty_catalog(client, wire):
    state = wire(catalog=FakeCatalog(industries=[industry("construction", is_active=False)]))

    response = client.post("/api/match-industry", json={"businessDescription": "Cafe"})

    assert response.status_code == 503
    assert response.json()["code"] == "catalog_unavailable"
    assert state["provider"].prompts == []


def test_match_industry_contract_violation_hides_provider_text(client, wire):
    wire(provider=FakeProvider("Sure! Here you go: {\"matchedIndustry\": \"construction\"}"))

    response = client.post("/api/match-industry", json={"businessDescription": "Cafe"})

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "provider_contract_violation"
    assert "Sure!" not in body["error"]
    assert "details" not in body


def test_match_industry_provider_unavailable(client, wire):
    wire(provider=FakeProvider(error=ProviderUnavailableError(details={"status_code": 429})))

    response = client.post("/api/match-industry", json={"businessDescription": "Cafe"})

    assert response.status_code == 503
    assert response.json()["code"] == "provider_unavailable"


def test_match_industry_malformed_body(client, wire):
    wire()

    response = client.post(
        "/api/match-industry",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json() == {"error": "Invalid request", "code": "validation_error"}


def test_list_industries(client, wire):
    wire()

    response = client.get("/api/industries")

    assert response.status_code == 200
    assert [i["slug"] for i in response.json()] == ["construction", "real-estate", "professional-services"]


def test_industry_detail_not_found(client, wire):
    wire()

    response = client.get("/api/industries/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Industry not found", "code": "not_found"}


def test_related_industries_parses_slug_list(client, wire):
    captured = {}

    class _Catalog(FakeCatalog):
        async def get_related_industries(self, slugs):
            captured["slugs"] = slugs
            return []

    wire(catalog=_Catalog())

    response = client.get("/api/industries/related", params={"slugs": " retail,,construction,retail "})

    assert response.status_code == 200
    assert response.json() == []
    assert captured["slugs"] == ["retail", "construction"]


def test_request_id_is_propagated(client, wire):
    wire()

    response = client.get("/api/health/live", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.json()["status"] == "alive"
    assert response.headers["X-Request-ID"] == "req-123"
