"""Flood risk model for the simulation lab.

Pure computational utilities (no I/O) mapping forest cover, rainfall and soil
absorption capacity to a bounded flood risk score plus its breakdown.

The model is a weighted heuristic, not a validated hydrological model:

    deforestation     = 100 - forest_cover
    rain_pct          = rainfall_mm / 300 * 100
    forest_impact     = 0.4 * deforestation
    rainfall_impact   = 0.4 * rain_pct
    soil_impact       = 20 (low) | 10 (medium) | 0 (high)
    water_runoff      = (deforestation + rain_pct) / 2
    flood_probability = 0.8 * water_runoff + soil_impact
    health            = 100 - (0.7 * deforestation + 0.3 * soil_degradation)

Every percentage is clamped to [0, 100] and rounded to one decimal.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union
import math

__all__ = [
    "SoilAbsorption",
    "RiskLevel",
    "SimulationInput",
    "RiskFactors",
    "SimulationResult",
    "compute_risk",
    "simulate",
    "classify_risk",
    "risk_color",
    "recommendations",
]


# -------------------- MODEL CONSTANTS --------------------
FOREST_RANGE = (0.0, 100.0)
RAINFALL_RANGE = (0.0, 300.0)

FOREST_WEIGHT = 0.4
RAINFALL_WEIGHT = 0.4
RUNOFF_TO_FLOOD = FOREST_WEIGHT + RAINFALL_WEIGHT

HEALTH_FOREST_WEIGHT = 0.7
HEALTH_SOIL_WEIGHT = 0.3

# Upper bounds (exclusive) of each band over flood probability
RISK_BANDS = ((25.0, "low"), (50.0, "medium"), (75.0, "high"))
# ---------------------------------------------------------


class SoilAbsorption(str, Enum):
    """Soil absorption capacity; healthier soil stores more rainfall."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Union[str, "SoilAbsorption"]) -> "SoilAbsorption":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(
                f"Unknown soil absorption '{value}' (expected one of: {allowed})") from None


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


SOIL_IMPACT: Dict[SoilAbsorption, float] = {
    SoilAbsorption.LOW: 20.0,
    SoilAbsorption.MEDIUM: 10.0,
    SoilAbsorption.HIGH: 0.0,
}

SOIL_DEGRADATION: Dict[SoilAbsorption, float] = {
    SoilAbsorption.LOW: 100.0,
    SoilAbsorption.MEDIUM: 50.0,
    SoilAbsorption.HIGH: 0.0,
}

RISK_COLORS: Dict[RiskLevel, str] = {
    RiskLevel.LOW: "#10b981",
    RiskLevel.MEDIUM: "#f59e0b",
    RiskLevel.HIGH: "#f97316",
    RiskLevel.CRITICAL: "#dc2626",
}

# Every category needs an entry in each lookup table
if not (set(SOIL_IMPACT) == set(SOIL_DEGRADATION) == set(SoilAbsorption)
        and set(RISK_COLORS) == set(RiskLevel)):
    raise RuntimeError("risk model lookup tables do not cover every category")


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    value = float(value)
    if math.isnan(value):
        return lo
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class SimulationInput:
    """Parameters driving one risk computation.

    Numeric values are clamped into their domain on construction, so an
    instance always describes a valid scenario.
    """

    forest_cover_percent: float = 60.0
    rainfall_mm: float = 100.0
    soil_absorption: SoilAbsorption = SoilAbsorption.MEDIUM

    def __post_init__(self):
        object.__setattr__(self, "forest_cover_percent",
                           _clamp(self.forest_cover_percent, *FOREST_RANGE))
        object.__setattr__(self, "rainfall_mm",
                           _clamp(self.rainfall_mm, *RAINFALL_RANGE))
        object.__setattr__(self, "soil_absorption",
                           SoilAbsorption.parse(self.soil_absorption))


@dataclass(frozen=True)
class RiskFactors:
    forest_impact: float
    rainfall_impact: float
    soil_impact: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "forestImpact": self.forest_impact,
            "rainfallImpact": self.rainfall_impact,
            "soilImpact": self.soil_impact,
        }


@dataclass(frozen=True)
class SimulationResult:
    flood_probability: float
    water_runoff: float
    environmental_health: float
    risk_level: RiskLevel
    factors: RiskFactors

    def to_dict(self) -> Dict:
        """Serialise with the camelCase keys the web client reads."""
        return {
            "floodProbability": self.flood_probability,
            "waterRunoff": self.water_runoff,
            "environmentalHealth": self.environmental_health,
            "riskLevel": self.risk_level.value,
            "factors": self.factors.to_dict(),
        }


def classify_risk(flood_probability: float) -> RiskLevel:
    """Map a flood probability in [0, 100] to its risk band.

    Parameters
    ----------
    flood_probability : float
        Probability score; values outside [0, 100] are clamped first.

    Returns
    -------
    RiskLevel
        ``low`` below 25, ``medium`` below 50, ``high`` below 75, otherwise
        ``critical``.
    """
    p = _clamp(flood_probability)
    for upper, level in RISK_BANDS:
        if p < upper:
            return RiskLevel(level)
    return RiskLevel.CRITICAL


def simulate(params: SimulationInput) -> SimulationResult:
    """Compute the flood risk breakdown for an already-clamped input."""
    soil = params.soil_absorption
    deforestation = 100.0 - params.forest_cover_percent
    rain_pct = params.rainfall_mm / RAINFALL_RANGE[1] * 100.0

    forest_impact = FOREST_WEIGHT * deforestation
    rainfall_impact = RAINFALL_WEIGHT * rain_pct
    soil_impact = SOIL_IMPACT[soil]

    water_runoff = _clamp((deforestation + rain_pct) / 2.0)
    flood_probability = _clamp(RUNOFF_TO_FLOOD * water_runoff + soil_impact)
    health = _clamp(100.0 - (HEALTH_FOREST_WEIGHT * deforestation
                             + HEALTH_SOIL_WEIGHT * SOIL_DEGRADATION[soil]))

    flood_probability = round(flood_probability, 1)
    return SimulationResult(
        flood_probability=flood_probability,
        water_runoff=round(water_runoff, 1),
        environmental_health=round(health, 1),
        risk_level=classify_risk(flood_probability),
        factors=RiskFactors(
            forest_impact=round(forest_impact, 1),
            rainfall_impact=round(rainfall_impact, 1),
            soil_impact=round(soil_impact, 1),
        ),
    )


def compute_risk(forest_cover_percent: float, rainfall_mm: float,
                 soil_absorption: Union[str, SoilAbsorption]) -> SimulationResult:
    """Compute flood risk from the three simulation parameters.

    Out-of-range numbers are clamped (forest cover to [0, 100], rainfall to
    [0, 300] mm) rather than rejected; NaN takes the lower bound.
    ``soil_absorption`` accepts the enum or its string value in any case.

    Raises
    ------
    ValueError
        If ``soil_absorption`` is not one of low, medium or high.
    """
    return simulate(SimulationInput(forest_cover_percent, rainfall_mm, soil_absorption))


def risk_color(level: Union[str, RiskLevel]) -> str:
    """Display colour (hex) for a risk level."""
    return RISK_COLORS[RiskLevel(level)]


_FACTOR_ADVICE = {
    "forest": "Restore forest cover through reforestation and protect remaining "
              "forest from clearing; tree loss is the main driver of runoff here.",
    "rainfall": "Expand drainage and water retention capacity (retention ponds, "
                "biopori infiltration holes) to cope with heavy rainfall.",
    "soil": "Improve soil health with cover crops, mulching and reduced "
            "compaction so more rainfall infiltrates.",
}
_SOIL_NOTE = ("Soil absorption is also limiting; rehabilitating degraded land "
              "would lower runoff further.")
_EARLY_WARNING = ("Prepare early-warning systems and evacuation routes for "
                  "communities in flood-prone areas.")
_STABLE = ("Flood risk is low under these conditions; keep protecting forests "
           "and monitoring rainfall to stay that way.")


def recommendations(result: SimulationResult) -> List[str]:
    """Return 1-3 recommendations keyed off the dominant risk factor.

    Ties between factors resolve in the order forest, rainfall, soil.
    """
    f = result.factors
    ranked = sorted(
        [("forest", f.forest_impact), ("rainfall", f.rainfall_impact),
         ("soil", f.soil_impact)],
        key=lambda item: -item[1],
    )
    dominant = ranked[0][0]

    if result.risk_level is RiskLevel.LOW:
        recs = [_STABLE]
    else:
        recs = [_FACTOR_ADVICE[dominant]]
    if dominant != "soil" and ranked[1][0] == "soil" and f.soil_impact > 0:
        recs.append(_SOIL_NOTE)
    if result.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
        recs.append(_EARLY_WARNING)
    return recs
