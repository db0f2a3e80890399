from typing import Optional

from fastapi import APIRouter, Depends, Query

from ecoflood.api.deps import get_data_source
from ecoflood.auth.auth import verify_token
from ecoflood.ingestion.base import EnvironmentalDataSource
from ecoflood.services.dashboard import build_dashboard

router = APIRouter()


@router.get("/dashboard")
def dashboard(lat: Optional[float] = Query(None, ge=-90, le=90),
              lon: Optional[float] = Query(None, ge=-180, le=180),
              source: EnvironmentalDataSource = Depends(get_data_source),
              token: str = Depends(verify_token)):
    """Rainfall, deforestation and river-discharge series, GLAD alerts and headline metrics."""
    return build_dashboard(source, lat=lat, lon=lon)
