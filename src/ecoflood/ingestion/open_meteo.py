"""Open-Meteo client for rainfall forecasts, river discharge and rainfall history."""
from __future__ import annotations

from calendar import month_abbr
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple
import logging

import pytz
import requests

from ecoflood.errors import DataSourceError

logger = logging.getLogger(__name__)


def monthly_totals(times: List[str], values: List[Optional[float]]) -> List[Dict]:
    """Sum daily precipitation into calendar months, oldest first.

    Days reported as ``None`` count as zero.
    """
    totals: "OrderedDict[str, float]" = OrderedDict()
    for day, value in zip(times, values):
        key = day[:7]  # YYYY-MM
        totals[key] = totals.get(key, 0.0) + float(value or 0.0)
    return [
        {"month": month_abbr[int(key[5:7])], "year": int(key[:4]), "rainfall": round(total, 1)}
        for key, total in totals.items()
    ]


def complete_months_window(today: date, months: int = 12) -> Tuple[date, date]:
    """First and last day of the ``months`` calendar months before ``today``'s month."""
    end_date = today.replace(day=1) - timedelta(days=1)
    index = today.year * 12 + today.month - 1 - months
    start_date = date(index // 12, index % 12 + 1, 1)
    return start_date, end_date


class OpenMeteoClient:
    """Thin wrapper over the Open-Meteo forecast, flood and archive APIs."""

    def __init__(self, forecast_url: Optional[str] = None, flood_url: Optional[str] = None,
                 archive_url: Optional[str] = None, timeout: Optional[float] = None,
                 timezone: Optional[str] = None, session: Optional[requests.Session] = None):
        from ecoflood.config import settings

        self.forecast_url = forecast_url or settings.OPEN_METEO_URL
        self.flood_url = flood_url or settings.OPEN_METEO_FLOOD_URL
        self.archive_url = archive_url or settings.OPEN_METEO_ARCHIVE_URL
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.tz = pytz.timezone(timezone or settings.TIMEZONE)
        self.session = session or requests.Session()

    def _get_daily(self, url: str, params: Dict, required: List[str]) -> Dict:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            raise DataSourceError("open-meteo", f"request to {url} failed: {e}") from e
        except ValueError as e:
            raise DataSourceError("open-meteo", f"invalid JSON from {url}") from e

        daily = payload.get("daily") if isinstance(payload, dict) else None
        if not daily or "time" not in daily or any(k not in daily for k in required):
            raise DataSourceError("open-meteo", f"response from {url} lacks daily {required}")
        logger.debug("Fetched %d daily rows from %s", len(daily["time"]), url)
        return payload

    def fetch_rainfall_forecast(self, lat: float, lon: float) -> Dict:
        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": "precipitation_sum,precipitation_probability_max",
            "timezone": "auto",
        }
        payload = self._get_daily(self.forecast_url, params,
                                  ["precipitation_sum", "precipitation_probability_max"])
        return {**payload, "source": "open-meteo"}

    def fetch_flood_discharge(self, lat: float, lon: float) -> Dict:
        params = {"latitude": lat, "longitude": lon, "daily": "river_discharge"}
        payload = self._get_daily(self.flood_url, params, ["river_discharge"])
        return {**payload, "source": "open-meteo"}

    def fetch_historical_rainfall(self, lat: float, lon: float, months: int = 12) -> Dict:
        """Monthly rainfall totals over the last ``months`` complete calendar months."""
        start_date, end_date = complete_months_window(datetime.now(self.tz).date(), months)
        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "daily": "precipitation_sum",
            "timezone": "auto",
        }
        payload = self._get_daily(self.archive_url, params, ["precipitation_sum"])
        daily = payload["daily"]
        return {
            "latitude": payload.get("latitude", lat),
            "longitude": payload.get("longitude", lon),
            "monthly": monthly_totals(daily["time"], daily["precipitation_sum"])[-months:],
            "source": "open-meteo",
        }
