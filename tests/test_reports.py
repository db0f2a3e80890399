import pytest

from ecoflood.errors import ReportStoreError
from ecoflood.persistence.reports import ReportRepository, ReportService, build_report


def test_build_report_validation():
    doc = build_report("  Jakarta ", "flood", " Banjir ", lat=-6.2, lng=106.8)
    assert doc["location"] == "Jakarta"
    assert doc["description"] == "Banjir"
    assert doc["imageUrl"] == ""
    assert doc["createdAt"].tzinfo is not None
    with pytest.raises(ValueError):
        build_report("Jakarta", "earthquake", "x")
    with pytest.raises(ValueError):
        build_report("   ", "flood", "x")


def test_report_lifecycle(fake_collection):
    service = ReportService(ReportRepository(collection=fake_collection))
    first = service.create_report("Jakarta", "flood", "Banjir setinggi lutut", lat=-6.2, lng=106.8)
    second = service.create_report("Riau", "deforestation", "Pembukaan lahan")

    assert isinstance(first["createdAt"], str)
    assert "_id" not in first
    assert service.repository.get(first["id"])["location"] == "Jakarta"

    listed = service.list_reports()
    assert {r["id"] for r in listed} == {first["id"], second["id"]}
    assert listed[0]["createdAt"] >= listed[1]["createdAt"]
    assert [r["id"] for r in service.list_reports(report_type="flood")] == [first["id"]]
    assert len(service.list_reports(limit=1)) == 1

    stats = service.statistics()
    assert stats == {"total_reports": 2, "by_type": {"flood": 1, "deforestation": 1}}


def test_initialise_creates_indexes(fake_collection):
    service = ReportService(ReportRepository(collection=fake_collection))
    service.initialise()
    assert "id" in fake_collection.indexes and "type" in fake_collection.indexes


def test_store_down_lists_mock_reports(down_collection):
    service = ReportService(ReportRepository(collection=down_collection))
    reports = service.list_reports()
    assert [r["id"] for r in reports] == ["1", "2", "3", "4", "5"]
    assert {r["id"] for r in service.list_reports(report_type="flood")} == {"2", "5"}
    assert service.statistics() == {"total_reports": 5, "by_type": {"deforestation": 3, "flood": 2}}


def test_store_down_keeps_new_reports_in_memory(down_collection, caplog):
    service = ReportService(ReportRepository(collection=down_collection))
    saved = service.create_report("Samarinda", "flood", "Air masuk rumah", lat=-0.5, lng=117.15)
    assert "in memory" in caplog.text
    reports = service.list_reports()
    # once something is stored locally the seeded mocks are no longer shown
    assert [r["id"] for r in reports] == [saved["id"]]
    assert service.statistics()["total_reports"] == 1


def test_initialise_does_not_fall_back(down_collection):
    service = ReportService(ReportRepository(collection=down_collection))
    with pytest.raises(ReportStoreError):
        service.initialise()
