"""Dashboard aggregation: chart series and headline metrics."""
from __future__ import annotations

from typing import Dict, List, Optional
import logging

from ecoflood.ingestion.base import EnvironmentalDataSource

logger = logging.getLogger(__name__)


def rainfall_series(historical: Dict) -> List[Dict]:
    return [{"name": row["month"], "value": row["rainfall"]} for row in historical.get("monthly", [])]


def discharge_series(discharge: Dict) -> List[Dict]:
    """Daily river discharge (m³/s) as chart points; missing days count as zero."""
    daily = discharge.get("daily", {})
    return [{"name": day, "value": float(value or 0.0)}
            for day, value in zip(daily.get("time", []), daily.get("river_discharge", []))]


def deforestation_series(stats: List[Dict]) -> List[Dict]:
    return [{"name": row["year"], "value": row["value"], "label": row.get("label")} for row in stats]


def dashboard_metrics(rainfall: List[Dict], deforestation: List[Dict], alerts: List[Dict]) -> Dict:
    """Headline numbers shown above the dashboard charts.

    Average rainfall is rounded to a whole millimetre and is 0 without data.
    The latest deforestation entry is the last one in the series.
    """
    avg_rainfall = round(sum(r["value"] for r in rainfall) / len(rainfall)) if rainfall else 0
    latest = deforestation[-1] if deforestation else {}
    return {
        "avg_rainfall_mm": avg_rainfall,
        "total_alerts": len(alerts),
        "high_confidence_alerts": sum(1 for a in alerts if a.get("confidence") == "high"),
        "latest_deforestation": latest.get("value", 0),
        "latest_deforestation_label": latest.get("label") or "0",
    }


def build_dashboard(source: EnvironmentalDataSource, lat: Optional[float] = None,
                    lon: Optional[float] = None) -> Dict:
    """Fetch and aggregate everything the dashboard page renders."""
    from ecoflood.config import settings

    lat = settings.DEFAULT_LAT if lat is None else lat
    lon = settings.DEFAULT_LON if lon is None else lon

    historical = source.historical_rainfall(lat, lon)
    alerts = source.glad_alerts()
    rainfall = rainfall_series(historical)
    deforestation = deforestation_series(source.deforestation_stats())
    discharge = source.flood_discharge(lat, lon)
    river = discharge_series(discharge)
    logger.info("Dashboard built from %s rainfall (%d months), %d alerts",
                historical.get("source", source.name), len(rainfall), len(alerts))
    return {
        "rainfall": rainfall,
        "rainfall_source": historical.get("source", source.name),
        "deforestation": deforestation,
        "river_discharge": river,
        "river_discharge_source": discharge.get("source", source.name),
        "peak_river_discharge": max((p["value"] for p in river), default=0.0),
        "alerts": alerts,
        "metrics": dashboard_metrics(rainfall, deforestation, alerts),
    }
