"""Static (mock) environmental datasets for Indonesia.

Stands in for data sources without a usable public API (Global Forest Watch,
BNPB flood records, FIRMS hotspots) and backs the live source when a request
fails. Random values come from a seeded generator so repeated calls with the
same arguments return the same data.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional
import random
import pytz

from .base import EnvironmentalDataSource

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

DEFORESTATION_REGIONS = [
    {"lat": -0.5, "lng": 117.0, "name": "Kalimantan Timur", "island": "kalimantan"},
    {"lat": -2.5, "lng": 113.0, "name": "Kalimantan Tengah", "island": "kalimantan"},
    {"lat": 0.5, "lng": 101.5, "name": "Riau, Sumatra", "island": "sumatra"},
    {"lat": -2.0, "lng": 103.5, "name": "Jambi, Sumatra", "island": "sumatra"},
    {"lat": -4.0, "lng": 138.0, "name": "Papua", "island": "papua"},
    {"lat": -1.5, "lng": 121.0, "name": "Sulawesi Tengah", "island": "sulawesi"},
    {"lat": -6.9, "lng": 107.6, "name": "Jawa Barat", "island": "java"},
    {"lat": -7.3, "lng": 110.4, "name": "Jawa Tengah", "island": "java"},
]

# Primary forest loss, million hectares (GFW / KLHK estimates)
DEFORESTATION_STATS = [
    {"year": 2018, "value": 0.34, "label": "340K ha"},
    {"year": 2019, "value": 0.32, "label": "324K ha"},
    {"year": 2020, "value": 0.27, "label": "270K ha"},
    {"year": 2021, "value": 0.20, "label": "203K ha"},
    {"year": 2022, "value": 0.23, "label": "230K ha"},
    {"year": 2023, "value": 0.29, "label": "292K ha"},
    {"year": 2024, "value": 0.26, "label": "261K ha"},
]

FLOOD_EVENTS = [
    {"location": "Jakarta", "lat": -6.2088, "lng": 106.8456, "island": "java", "year": 2020,
     "severity": "critical", "description": "Banjir besar awal tahun di Jabodetabek",
     "affected": 397000, "casualties": 66},
    {"location": "Semarang", "lat": -7.0051, "lng": 110.4381, "island": "java", "year": 2022,
     "severity": "high", "description": "Banjir rob dan hujan ekstrem",
     "affected": 42000, "casualties": 3},
    {"location": "Kalimantan Selatan", "lat": -3.3194, "lng": 114.5908, "island": "kalimantan", "year": 2021,
     "severity": "critical", "description": "Banjir meluas di 11 kabupaten/kota",
     "affected": 342000, "casualties": 24},
    {"location": "Sintang", "lat": 0.0692, "lng": 111.4951, "island": "kalimantan", "year": 2021,
     "severity": "high", "description": "Banjir berkepanjangan di DAS Kapuas",
     "affected": 140000, "casualties": 5},
    {"location": "Pekanbaru", "lat": 0.5071, "lng": 101.4478, "island": "sumatra", "year": 2023,
     "severity": "medium", "description": "Luapan Sungai Siak setelah hujan deras",
     "affected": 18000, "casualties": 0},
    {"location": "Padang", "lat": -0.9471, "lng": 100.4172, "island": "sumatra", "year": 2023,
     "severity": "high", "description": "Banjir bandang dan longsor",
     "affected": 26000, "casualties": 12},
    {"location": "Luwu Utara", "lat": -2.5585, "lng": 120.3298, "island": "sulawesi", "year": 2020,
     "severity": "critical", "description": "Banjir bandang Masamba",
     "affected": 15000, "casualties": 38},
    {"location": "Jayapura", "lat": -2.5337, "lng": 140.7181, "island": "papua", "year": 2022,
     "severity": "medium", "description": "Genangan setelah hujan lebat",
     "affected": 7000, "casualties": 1},
    {"location": "Sentani", "lat": -2.5646, "lng": 140.5078, "island": "papua", "year": 2020,
     "severity": "low", "description": "Banjir kiriman dari Pegunungan Cycloop",
     "affected": 2500, "casualties": 0},
]

FIRE_AREAS = [
    {"location": "Ogan Komering Ilir", "lat": -3.4, "lng": 105.4, "island": "sumatra", "type": "peatland"},
    {"location": "Pelalawan, Riau", "lat": 0.2, "lng": 102.1, "island": "sumatra", "type": "plantation"},
    {"location": "Pulang Pisau", "lat": -2.7, "lng": 114.2, "island": "kalimantan", "type": "peatland"},
    {"location": "Ketapang", "lat": -1.8, "lng": 110.0, "island": "kalimantan", "type": "forest"},
    {"location": "Merauke", "lat": -8.1, "lng": 140.3, "island": "papua", "type": "savanna"},
    {"location": "Gunung Arjuno", "lat": -7.77, "lng": 112.58, "island": "java", "type": "forest"},
]

BIODIVERSITY_HOTSPOTS = [
    {"location": "Taman Nasional Gunung Leuser", "lat": 3.7, "lng": 97.4, "island": "sumatra",
     "type": "National Park", "species": ["Orangutan Sumatra", "Harimau Sumatra", "Badak Sumatra"],
     "area_km2": 7927},
    {"location": "Taman Nasional Tanjung Puting", "lat": -2.9, "lng": 111.9, "island": "kalimantan",
     "type": "National Park", "species": ["Orangutan Kalimantan", "Bekantan"], "area_km2": 4150},
    {"location": "Taman Nasional Ujung Kulon", "lat": -6.75, "lng": 105.35, "island": "java",
     "type": "National Park", "species": ["Badak Jawa", "Banteng"], "area_km2": 1206},
    {"location": "Taman Nasional Lore Lindu", "lat": -1.5, "lng": 120.1, "island": "sulawesi",
     "type": "National Park", "species": ["Anoa", "Maleo", "Tarsius"], "area_km2": 2180},
    {"location": "Taman Nasional Lorentz", "lat": -4.75, "lng": 138.0, "island": "papua",
     "type": "World Heritage Site", "species": ["Cenderawasih", "Kanguru Pohon"], "area_km2": 25056},
]

MOCK_REPORTS = [
    {"id": "1", "location": "Kalimantan Timur", "lat": -0.9517, "lng": 116.0921, "type": "deforestation",
     "description": "Area hutan yang luas dibuka untuk perkebunan kelapa sawit", "days_ago": 2},
    {"id": "2", "location": "Jakarta", "lat": -6.2088, "lng": 106.8456, "type": "flood",
     "description": "Banjir parah di area perkotaan setelah hujan deras", "days_ago": 5},
    {"id": "3", "location": "Riau, Sumatra", "lat": 0.5071, "lng": 101.4478, "type": "deforestation",
     "description": "Aktivitas penebangan liar terdeteksi", "days_ago": 7},
    {"id": "4", "location": "Papua", "lat": -4.2699, "lng": 138.0804, "type": "deforestation",
     "description": "Pembukaan hutan untuk pertambangan", "days_ago": 10},
    {"id": "5", "location": "Semarang, Jawa Tengah", "lat": -7.0051, "lng": 110.4381, "type": "flood",
     "description": "Banjir rob dan hujan ekstrem", "days_ago": 12},
]


def _matches(record: Dict, island: Optional[str], year: Optional[int] = None) -> bool:
    if island and island != "all" and record.get("island") != island:
        return False
    if year is not None and "year" in record and record["year"] != year:
        return False
    return True


def mock_reports(now: Optional[datetime] = None) -> List[Dict]:
    """Seed community reports, newest first."""
    now = now or datetime.now(pytz.UTC)
    reports = []
    for r in MOCK_REPORTS:
        doc = {k: v for k, v in r.items() if k != "days_ago"}
        doc["imageUrl"] = ""
        doc["createdAt"] = (now - timedelta(days=r["days_ago"])).isoformat()
        reports.append(doc)
    return reports


class StaticDataSource(EnvironmentalDataSource):
    """Deterministic mock data for every dataset."""

    name = "mock"

    def __init__(self, seed: Optional[int] = None, timezone: Optional[str] = None):
        from ecoflood.config import settings

        self.seed = settings.MOCK_SEED if seed is None else seed
        self.tz = pytz.timezone(timezone or settings.TIMEZONE)

    def _rng(self, *key) -> random.Random:
        return random.Random(":".join(str(k) for k in (self.seed,) + key))

    def _today(self):
        return datetime.now(self.tz).date()

    # ------------------------------ Weather ------------------------------ #
    def rainfall_forecast(self, lat: float, lon: float) -> Dict:
        rng = self._rng("forecast", round(lat, 2), round(lon, 2))
        today = self._today()
        return {
            "latitude": lat,
            "longitude": lon,
            "daily": {
                "time": [(today + timedelta(days=i)).isoformat() for i in range(7)],
                "precipitation_sum": [round(rng.random() * 50, 1) for _ in range(7)],
                "precipitation_probability_max": [round(rng.random() * 100) for _ in range(7)],
            },
            "source": self.name,
        }

    def flood_discharge(self, lat: float, lon: float) -> Dict:
        rng = self._rng("discharge", round(lat, 2), round(lon, 2))
        today = self._today()
        return {
            "latitude": lat,
            "longitude": lon,
            "daily": {
                "time": [(today + timedelta(days=i)).isoformat() for i in range(7)],
                "river_discharge": [round(rng.random() * 100, 2) for _ in range(7)],
            },
            "source": self.name,
        }

    def historical_rainfall(self, lat: float, lon: float) -> Dict:
        rng = self._rng("monthly", round(lat, 2), round(lon, 2))
        return {
            "monthly": [{"month": m, "rainfall": round(rng.random() * 200 + 50, 1)} for m in MONTHS],
            "source": self.name,
        }

    # --------------------------- Land & hazards -------------------------- #
    def tree_cover_loss(self, year: int) -> Dict:
        rng = self._rng("treecover", year)
        hotspots = []
        for region in DEFORESTATION_REGIONS:
            for _ in range(4):
                hotspots.append({
                    "lat": round(region["lat"] + (rng.random() - 0.5) * 1.5, 4),
                    "lng": round(region["lng"] + (rng.random() - 0.5) * 1.5, 4),
                    "intensity": round(rng.random() * 100, 1),
                    "area_hectares": round(rng.random() * 5000),
                    "region": region["name"],
                    "island": region["island"],
                })
        return {"year": year, "data": hotspots, "source": self.name}

    def glad_alerts(self) -> List[Dict]:
        rng = self._rng("glad")
        now = datetime.now(pytz.UTC)
        alerts = []
        for i in range(15):
            region = DEFORESTATION_REGIONS[i % len(DEFORESTATION_REGIONS)]
            alerts.append({
                "id": i + 1,
                "date": (now - timedelta(days=3 * i)).isoformat(),
                "lat": round(region["lat"] + (rng.random() - 0.5), 4),
                "lng": round(region["lng"] + (rng.random() - 0.5), 4),
                "region": region["name"],
                "confidence": "high" if rng.random() > 0.3 else "medium",
            })
        return alerts

    def deforestation_stats(self) -> List[Dict]:
        return [dict(row) for row in DEFORESTATION_STATS]

    def flood_history(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]:
        return [dict(f) for f in FLOOD_EVENTS if _matches(f, island, year)]

    def fire_hotspots(self, island: Optional[str] = None, year: Optional[int] = None) -> List[Dict]:
        fires = []
        for area in FIRE_AREAS:
            if not _matches(area, island):
                continue
            # per-area stream: coordinates do not depend on the island filter
            rng = self._rng("fire", year, area["location"])
            for _ in range(3):
                draw = rng.random()
                fires.append({
                    **area,
                    "lat": round(area["lat"] + (rng.random() - 0.5) * 0.8, 4),
                    "lng": round(area["lng"] + (rng.random() - 0.5) * 0.8, 4),
                    "confidence": "high" if draw > 0.6 else ("medium" if draw > 0.25 else "low"),
                    "year": year,
                })
        return fires

    def biodiversity(self, island: Optional[str] = None) -> List[Dict]:
        return [dict(b, species=list(b["species"])) for b in BIODIVERSITY_HOTSPOTS if _matches(b, island)]
