"""Forecast risk endpoint.

Projects daily flood risk for a location from its 7-day precipitation
forecast (Open-Meteo, with static fallback) under the given land conditions.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from ecoflood.api.deps import get_data_source
from ecoflood.auth.auth import verify_token
from ecoflood.domain.risk_model import SoilAbsorption
from ecoflood.ingestion.base import EnvironmentalDataSource
from ecoflood.services.forecast import forecast_flood_risk

router = APIRouter()


class ForecastRiskRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False, description="Latitude in WGS84")
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False, description="Longitude in WGS84")
    forest_cover_percent: float = Field(60.0, allow_inf_nan=False,
                                        description="Forest cover (%), clamped to [0, 100]")
    soil_absorption: SoilAbsorption = SoilAbsorption.MEDIUM

    @field_validator("soil_absorption", mode="before")
    @classmethod
    def _parse_soil(cls, v):
        return SoilAbsorption.parse(v)


@router.post("/risk/forecast")
def risk_forecast(request: ForecastRiskRequest,
                  source: EnvironmentalDataSource = Depends(get_data_source),
                  token: str = Depends(verify_token)):
    """Daily flood risk over the forecast window, plus the peak day."""
    return forecast_flood_risk(
        source,
        lat=request.lat,
        lon=request.lon,
        forest_cover_percent=request.forest_cover_percent,
        soil_absorption=request.soil_absorption.value,
    )
