import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ecoflood.api.v1.endpoints import simulate as simulate_endpoint
from ecoflood.auth.auth import verify_token


@pytest.fixture(scope="module")
def client():
    # Only the simulate router: no data source or database involved
    app = FastAPI()
    app.include_router(simulate_endpoint.router, prefix="/api/v1")

    # Override auth dependency to bypass token validation in tests
    app.dependency_overrides[verify_token] = lambda: "test-token"

    with TestClient(app) as c:
        yield c


def test_simulate_happy_path(client: TestClient):
    payload = {"forest_cover_percent": 60, "rainfall_mm": 100, "soil_absorption": "medium"}
    headers = {"Authorization": "Bearer test-token"}
    resp = client.post("/api/v1/simulate", json=payload, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["floodProbability"] == pytest.approx(39.3)
    assert body["riskLevel"] == "medium"
    assert body["color"] == "#f59e0b"
    assert set(body["factors"]) == {"forestImpact", "rainfallImpact", "soilImpact"}
    assert 1 <= len(body["recommendations"]) <= 3


def test_simulate_defaults_match_baseline(client: TestClient):
    resp = client.post("/api/v1/simulate", json={})
    assert resp.status_code == 200
    assert resp.json()["floodProbability"] == pytest.approx(39.3)


def test_simulate_clamps_out_of_range(client: TestClient):
    resp = client.post("/api/v1/simulate",
                       json={"forest_cover_percent": -50, "rainfall_mm": 1200, "soil_absorption": "low"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["floodProbability"] == 100.0
    assert body["riskLevel"] == "critical"


def test_simulate_rejects_unknown_soil(client: TestClient):
    resp = client.post("/api/v1/simulate", json={"soil_absorption": "clay"})
    assert resp.status_code == 422


@pytest.mark.parametrize("soil,expected", [("Medium", 39.3), (" low ", 49.3), ("HIGH", 29.3)])
def test_simulate_accepts_soil_in_any_case(client: TestClient, soil, expected):
    resp = client.post("/api/v1/simulate", json={"soil_absorption": soil})
    assert resp.status_code == 200
    assert resp.json()["floodProbability"] == pytest.approx(expected)


def test_simulate_rejects_nan(client: TestClient):
    resp = client.post("/api/v1/simulate", json={"forest_cover_percent": "NaN"})
    assert resp.status_code == 422
