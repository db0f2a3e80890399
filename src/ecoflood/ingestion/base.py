"""Data source interface shared by the live and static implementations."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class EnvironmentalDataSource(ABC):
    """Everything the dashboard, map and forecast views read.

    Dict payloads carry a ``source`` key naming where they came from
    (``open-meteo``, ``mock`` or ``fallback``).
    """

    name: str = "base"

    # ------------------------------ Weather ------------------------------ #
    @abstractmethod
    def rainfall_forecast(self, lat: float, lon: float) -> Dict:
        """Daily ``time``/``precipitation_sum``/``precipitation_probability_max``."""

    @abstractmethod
    def flood_discharge(self, lat: float, lon: float) -> Dict:
        """Daily ``time``/``river_discharge`` series."""

    @abstractmethod
    def historical_rainfall(self, lat: float, lon: float) -> Dict:
        """Last twelve months as ``{"monthly": [{"month", "rainfall"}, ...]}``."""

    # --------------------------- Land & hazards -------------------------- #
    @abstractmethod
    def tree_cover_loss(self, year: int) -> Dict: ...

    @abstractmethod
    def glad_alerts(self) -> List[Dict]: ...

    @abstractmethod
    def deforestation_stats(self) -> List[Dict]: ...

    @abstractmethod
    def flood_history(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]: ...

    @abstractmethod
    def fire_hotspots(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]: ...

    @abstractmethod
    def biodiversity(self, island: Optional[str] = None) -> List[Dict]: ...
