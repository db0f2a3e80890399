"""Simulation utilities wrapping the risk model into daily forecast runs."""
from typing import List, Dict, Optional

from .risk_model import SimulationInput, simulate, classify_risk


def simulate_forecast(
    rain_mm: List[Optional[float]],
    dates: List[str],
    forest_cover_percent: float,
    soil_absorption: str,
) -> Dict:
    """Run the risk model for each day of a rainfall series.

    Missing values (``None``, as Open-Meteo reports for days without data)
    count as zero rainfall. Forest cover and soil stay fixed across the run.

    Returns:
        {
          "series": [{"t", "rain_mm", "flood_probability", "water_runoff", "risk_level"}, ...],
          "max_flood_probability": float,
          "peak_risk_level": str
        }
    """
    series: list = []
    max_p = 0.0

    for rain, t in zip(rain_mm, dates):
        rain = float(rain or 0.0)
        result = simulate(SimulationInput(forest_cover_percent, rain, soil_absorption))
        max_p = max(max_p, result.flood_probability)
        series.append({
            "t": t,
            "rain_mm": round(rain, 1),
            "flood_probability": result.flood_probability,
            "water_runoff": result.water_runoff,
            "risk_level": result.risk_level.value,
        })

    return {
        "series": series,
        "max_flood_probability": max_p,
        "peak_risk_level": classify_risk(max_p).value,
    }
