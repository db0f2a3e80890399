from ecoflood.services.dashboard import (
    build_dashboard,
    dashboard_metrics,
    deforestation_series,
    discharge_series,
    rainfall_series,
)


def test_series_conversion():
    assert rainfall_series({"monthly": [{"month": "Jan", "rainfall": 120.5}]}) == [{"name": "Jan", "value": 120.5}]
    assert rainfall_series({}) == []
    assert deforestation_series([{"year": 2024, "value": 0.26, "label": "261K ha"}]) == [
        {"name": 2024, "value": 0.26, "label": "261K ha"}]


def test_dashboard_metrics():
    rainfall = [{"name": "Jan", "value": 100.0}, {"name": "Feb", "value": 151.0}]
    deforestation = [{"name": 2023, "value": 0.29, "label": "292K ha"},
                     {"name": 2024, "value": 0.26, "label": "261K ha"}]
    alerts = [{"confidence": "high"}, {"confidence": "medium"}, {"confidence": "high"}]
    m = dashboard_metrics(rainfall, deforestation, alerts)
    assert m == {
        "avg_rainfall_mm": 126,
        "total_alerts": 3,
        "high_confidence_alerts": 2,
        "latest_deforestation": 0.26,
        "latest_deforestation_label": "261K ha",
    }


def test_dashboard_metrics_without_data():
    m = dashboard_metrics([], [], [])
    assert m["avg_rainfall_mm"] == 0
    assert m["latest_deforestation"] == 0
    assert m["latest_deforestation_label"] == "0"


def test_build_dashboard_from_static_source(static_source):
    data = build_dashboard(static_source, lat=-2.5, lon=113.0)
    assert len(data["rainfall"]) == 12
    assert [d["name"] for d in data["deforestation"]] == list(range(2018, 2025))
    assert data["rainfall_source"] == "mock"
    assert data["metrics"]["total_alerts"] == len(data["alerts"]) == 15
    assert data["metrics"]["latest_deforestation_label"] == "261K ha"
    assert len(data["river_discharge"]) == 7
    assert data["river_discharge_source"] == "mock"
    assert data["peak_river_discharge"] == max(p["value"] for p in data["river_discharge"])


def test_discharge_series():
    payload = {"daily": {"time": ["2026-10-19", "2026-10-20"], "river_discharge": [412.5, None]}}
    assert discharge_series(payload) == [
        {"name": "2026-10-19", "value": 412.5},
        {"name": "2026-10-20", "value": 0.0},
    ]
    assert discharge_series({}) == []
