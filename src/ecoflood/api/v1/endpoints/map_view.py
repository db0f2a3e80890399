"""Map endpoints: island presets and layer markers."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ecoflood.api.deps import get_data_source, get_report_service
from ecoflood.auth.auth import verify_token
from ecoflood.ingestion.base import EnvironmentalDataSource
from ecoflood.persistence.reports import ReportService
from ecoflood.services.map_layers import load_map
from ecoflood.spatial.regions import list_islands

router = APIRouter()


@router.get("/islands")
def islands(token: str = Depends(verify_token)):
    return list_islands()


@router.get("/map/markers")
def map_markers(island: str = Query("all"),
                year: int = Query(2023, ge=2000, le=2100),
                layers: Optional[List[str]] = Query(None, description="Layer names; repeat or comma-separate"),
                source: EnvironmentalDataSource = Depends(get_data_source),
                reports: ReportService = Depends(get_report_service),
                token: str = Depends(verify_token)):
    """Markers for the selected island, year and layers.

    Unknown island ids fall back to the whole of Indonesia; unknown layer
    names are rejected with 400.
    """
    try:
        return load_map(source, reports.list_reports(limit=500), island=island, year=year, layers=layers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
