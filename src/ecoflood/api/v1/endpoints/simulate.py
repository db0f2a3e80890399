"""FastAPI endpoint for the flood risk simulation lab.

This module exposes a POST /simulate route that accepts the three simulation
parameters:
- forest cover (percent of land under forest)
- rainfall (mm)
- soil absorption capacity (low, medium or high)

The endpoint delegates to `compute_risk` from the domain model and returns the
result with the display colour for its risk level and 1-3 recommendations.

Notes
-----
- Numeric parameters are not range-validated: values outside forest cover
  [0, 100] or rainfall [0, 300] are clamped by the model, so the endpoint
  always produces a result for well-typed input.
- `soil_absorption` is a closed set matched case-insensitively (" Medium "
  is medium); anything else is rejected with 422, as are NaN and infinity.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from ecoflood.domain.risk_model import (
    SoilAbsorption,
    compute_risk,
    recommendations,
    risk_color,
)
from ecoflood.auth.auth import verify_token

router = APIRouter()


class SimRequest(BaseModel):
    """Request body schema for the simulation endpoint.

    Attributes
    ----------
    forest_cover_percent:
        Share of land under forest, in percent. Clamped to [0, 100].
    rainfall_mm:
        Rainfall amount in millimetres. Clamped to [0, 300].
    soil_absorption:
        Soil absorption capacity: ``low`` (degraded/compacted), ``medium`` or
        ``high`` (healthy/porous).
    """
    forest_cover_percent: float = Field(60.0, examples=[60], allow_inf_nan=False)
    rainfall_mm: float = Field(100.0, examples=[100], allow_inf_nan=False)
    soil_absorption: SoilAbsorption = Field(SoilAbsorption.MEDIUM, examples=["medium"])

    @field_validator("soil_absorption", mode="before")
    @classmethod
    def _parse_soil(cls, v):
        return SoilAbsorption.parse(v)


@router.post("/simulate")
def simulate(req: SimRequest, token: str = Depends(verify_token)):
    """Compute flood risk for the given environmental parameters.

    Parameters
    ----------
    req : SimRequest
        Parsed request body.

    Returns
    -------
    dict
        The simulation result (camelCase keys as read by the web client) plus
        ``color`` and ``recommendations``.
    """
    result = compute_risk(req.forest_cover_percent, req.rainfall_mm, req.soil_absorption)
    return {
        **result.to_dict(),
        "color": risk_color(result.risk_level),
        "recommendations": recommendations(result),
    }
