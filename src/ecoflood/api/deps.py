"""Shared FastAPI dependencies.

Both providers are cached for the process lifetime; tests replace them with
``app.dependency_overrides``.
"""
from functools import lru_cache

from ecoflood.ingestion.base import EnvironmentalDataSource
from ecoflood.ingestion.sources import build_data_source
from ecoflood.persistence.reports import ReportService


@lru_cache(maxsize=1)
def get_data_source() -> EnvironmentalDataSource:
    return build_data_source()


@lru_cache(maxsize=1)
def get_report_service() -> ReportService:
    return ReportService()
