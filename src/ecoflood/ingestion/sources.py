"""Live and fallback data sources.

``LiveDataSource`` calls Open-Meteo for weather data and serves the land and
hazard datasets from static data (no public API is wired for those).
``FallbackDataSource`` composes a primary and a fallback source: when the
primary raises ``DataSourceError`` the fallback's answer is returned instead.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional
import logging

from ecoflood.errors import DataSourceError
from .base import EnvironmentalDataSource
from .open_meteo import OpenMeteoClient
from .static_data import StaticDataSource

logger = logging.getLogger(__name__)


class LiveDataSource(EnvironmentalDataSource):
    name = "open-meteo"

    def __init__(self, client: Optional[OpenMeteoClient] = None,
                 static: Optional[StaticDataSource] = None):
        self.client = client or OpenMeteoClient()
        self.static = static or StaticDataSource()

    def rainfall_forecast(self, lat: float, lon: float) -> Dict:
        return self.client.fetch_rainfall_forecast(lat, lon)

    def flood_discharge(self, lat: float, lon: float) -> Dict:
        return self.client.fetch_flood_discharge(lat, lon)

    def historical_rainfall(self, lat: float, lon: float) -> Dict:
        return self.client.fetch_historical_rainfall(lat, lon)

    def tree_cover_loss(self, year: int) -> Dict:
        return self.static.tree_cover_loss(year)

    def glad_alerts(self) -> List[Dict]:
        return self.static.glad_alerts()

    def deforestation_stats(self) -> List[Dict]:
        return self.static.deforestation_stats()

    def flood_history(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]:
        return self.static.flood_history(island, year)

    def fire_hotspots(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]:
        return self.static.fire_hotspots(island, year)

    def biodiversity(self, island: Optional[str] = None) -> List[Dict]:
        return self.static.biodiversity(island)


class FallbackDataSource(EnvironmentalDataSource):
    """Serve from ``primary``; on ``DataSourceError`` serve from ``fallback``."""

    def __init__(self, primary: EnvironmentalDataSource, fallback: EnvironmentalDataSource):
        self.primary = primary
        self.fallback = fallback
        self.name = primary.name

    def _call(self, method: str, *args):
        try:
            return getattr(self.primary, method)(*args)
        except DataSourceError as e:
            logger.warning("%s unavailable (%s); using %s data", method, e, self.fallback.name)
            result = getattr(self.fallback, method)(*args)
            if isinstance(result, dict):
                result = {**result, "source": "fallback"}
            return result

    def rainfall_forecast(self, lat: float, lon: float) -> Dict:
        return self._call("rainfall_forecast", lat, lon)

    def flood_discharge(self, lat: float, lon: float) -> Dict:
        return self._call("flood_discharge", lat, lon)

    def historical_rainfall(self, lat: float, lon: float) -> Dict:
        return self._call("historical_rainfall", lat, lon)

    def tree_cover_loss(self, year: int) -> Dict:
        return self._call("tree_cover_loss", year)

    def glad_alerts(self) -> List[Dict]:
        return self._call("glad_alerts")

    def deforestation_stats(self) -> List[Dict]:
        return self._call("deforestation_stats")

    def flood_history(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]:
        return self._call("flood_history", island, year)

    def fire_hotspots(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]:
        return self._call("fire_hotspots", island, year)

    def biodiversity(self, island: Optional[str] = None) -> List[Dict]:
        return self._call("biodiversity", island)


def build_data_source(use_live: Optional[bool] = None,
                      client_factory: Callable[[], OpenMeteoClient] = OpenMeteoClient) -> EnvironmentalDataSource:
    """Data source configured by ``USE_LIVE_DATA``.

    Live mode wraps Open-Meteo in a fallback to static data; otherwise the
    static source is returned directly.
    """
    from ecoflood.config import settings

    static = StaticDataSource()
    live = settings.USE_LIVE_DATA if use_live is None else use_live
    if not live:
        return static
    return FallbackDataSource(LiveDataSource(client_factory(), static), static)
