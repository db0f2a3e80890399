"""Forecast risk assessment service.

Combines the 7-day precipitation forecast for a location with the risk model
to project daily flood risk under fixed land conditions (forest cover and
soil absorption).
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional
import logging

import pytz

from ecoflood.domain.risk_model import risk_color, SoilAbsorption
from ecoflood.domain.simulation import simulate_forecast
from ecoflood.ingestion.base import EnvironmentalDataSource
from ecoflood.spatial.regions import find_island_for_point

logger = logging.getLogger(__name__)

RISK_MARKS = {"low": "🟢", "medium": "🟡", "high": "🟠", "critical": "🔴"}


def forecast_flood_risk(source: EnvironmentalDataSource, lat: float, lon: float,
                        forest_cover_percent: float = 60.0,
                        soil_absorption: str = SoilAbsorption.MEDIUM.value) -> Dict:
    """Run the risk model over each forecast day for a location."""
    forecast = source.rainfall_forecast(lat, lon)
    daily = forecast.get("daily", {})
    dates: List[str] = daily.get("time", [])
    rain = daily.get("precipitation_sum", [])
    sim = simulate_forecast(rain, dates, forest_cover_percent, soil_absorption)

    peak_day: Optional[str] = None
    for point in sim["series"]:
        if point["flood_probability"] == sim["max_flood_probability"]:
            peak_day = point["t"]
            break

    logger.info("Forecast risk at (%.3f, %.3f): peak %s (%.1f%%) from %s data",
                lat, lon, sim["peak_risk_level"], sim["max_flood_probability"],
                forecast.get("source", source.name))
    return {
        "lat": lat,
        "lon": lon,
        "island": find_island_for_point(lon, lat),
        "forest_cover_percent": forest_cover_percent,
        "soil_absorption": SoilAbsorption.parse(soil_absorption).value,
        "source": forecast.get("source", source.name),
        "peak_day": peak_day,
        "peak_color": risk_color(sim["peak_risk_level"]),
        **sim,
    }


def render_forecast_report(assessment: Dict, tz: str = "Asia/Jakarta") -> str:
    """Plain-text summary of a forecast assessment for terminal output."""
    lines: List[str] = []
    lines.append("=" * 60)
    lines.append("Flood Risk Forecast")
    lines.append("=" * 60)
    lines.append(f"Generated at: {datetime.now(pytz.timezone(tz)).strftime('%Y-%m-%d %H:%M %Z')}")
    lines.append(f"Location: ({assessment['lat']:.4f}, {assessment['lon']:.4f})"
                 f" island={assessment.get('island') or 'n/a'} source={assessment['source']}")
    lines.append(f"Forest cover: {assessment['forest_cover_percent']}%  "
                 f"Soil absorption: {assessment['soil_absorption']}")
    lines.append("")
    for point in assessment["series"]:
        mark = RISK_MARKS.get(point["risk_level"], "")
        lines.append(f"  {point['t']}  rain {point['rain_mm']:>6.1f} mm  "
                     f"flood {point['flood_probability']:>5.1f}%  {mark} {point['risk_level']}")
    lines.append("")
    lines.append(f"Peak: {assessment['peak_risk_level'].upper()} "
                 f"({assessment['max_flood_probability']}%) on {assessment['peak_day'] or 'n/a'}")
    return "\n".join(lines)
