import pytest
from fastapi.testclient import TestClient

from ecoflood.api.deps import get_data_source, get_report_service
from ecoflood.app import create_app
from ecoflood.auth.auth import verify_token
from ecoflood.config import settings
from ecoflood.persistence.reports import ReportRepository, ReportService


@pytest.fixture
def app(static_source, fake_collection):
    app = create_app()
    service = ReportService(ReportRepository(collection=fake_collection))
    app.dependency_overrides[verify_token] = lambda: "test-token"
    app.dependency_overrides[get_data_source] = lambda: static_source
    app.dependency_overrides[get_report_service] = lambda: service
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def test_dashboard_endpoint(client):
    resp = client.get("/api/v1/dashboard")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["rainfall"]) == 12
    assert body["metrics"]["total_alerts"] == 15
    assert len(body["river_discharge"]) == 7


def test_forecast_endpoint(client):
    resp = client.post("/api/v1/risk/forecast",
                       json={"lat": -0.5, "lon": 117.15, "forest_cover_percent": 20, "soil_absorption": "low"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["island"] == "kalimantan"
    assert len(body["series"]) == 7
    assert body["peak_risk_level"] in {"low", "medium", "high", "critical"}


def test_forecast_endpoint_validates_coordinates(client):
    resp = client.post("/api/v1/risk/forecast", json={"lat": 120, "lon": 0})
    assert resp.status_code == 422


def test_forecast_endpoint_normalises_soil_and_rejects_nan(client):
    resp = client.post("/api/v1/risk/forecast", json={"lat": -6.2, "lon": 106.8, "soil_absorption": " High "})
    assert resp.status_code == 200, resp.text
    assert resp.json()["soil_absorption"] == "high"
    resp = client.post("/api/v1/risk/forecast", json={"lat": -6.2, "lon": 106.8, "forest_cover_percent": "NaN"})
    assert resp.status_code == 422


def test_islands_endpoint(client):
    resp = client.get("/api/v1/islands")
    assert resp.status_code == 200
    assert {i["id"] for i in resp.json()} == {"all", "sumatra", "java", "kalimantan", "sulawesi", "papua"}


def test_markers_endpoint(client):
    resp = client.get("/api/v1/map/markers", params={"island": "java", "year": 2020, "layers": "flood"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["layers"] == ["flood"]
    assert [m["title"] for m in body["markers"]] == ["Banjir Jakarta"]


def test_markers_endpoint_rejects_unknown_layer(client):
    resp = client.get("/api/v1/map/markers", params={"layers": "lava"})
    assert resp.status_code == 400


def test_report_create_and_list(client):
    payload = {"location": "Samarinda", "type": "flood", "description": "Banjir di jalan utama",
               "lat": -0.5022, "lng": 117.1536}
    resp = client.post("/api/v1/reports", json=payload)
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["location"] == "Samarinda"
    assert created["createdAt"]

    listed = client.get("/api/v1/reports", params={"type": "flood"}).json()
    assert [r["id"] for r in listed] == [created["id"]]
    assert client.get("/api/v1/reports/stats").json()["total_reports"] == 1

    # a stored report with coordinates shows up on the map
    markers = client.get("/api/v1/map/markers", params={"island": "kalimantan", "layers": "reports"}).json()
    assert [m["title"] for m in markers["markers"]] == ["Samarinda"]


def test_report_validation(client):
    resp = client.post("/api/v1/reports", json={"location": " ", "type": "flood", "description": "x"})
    assert resp.status_code == 422
    resp = client.post("/api/v1/reports", json={"location": "A", "type": "fire", "description": "x"})
    assert resp.status_code == 422


def test_token_checked_when_not_overridden(monkeypatch, static_source):
    monkeypatch.setattr(settings, "API_TOKEN", "secret")
    app = create_app()
    app.dependency_overrides[get_data_source] = lambda: static_source
    with TestClient(app) as client:
        bad = client.get("/api/v1/islands", headers={"Authorization": "Bearer nope"})
        good = client.get("/api/v1/islands", headers={"Authorization": "Bearer secret"})
    assert bad.status_code == 403
    assert good.status_code == 200
