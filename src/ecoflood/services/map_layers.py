"""Map layer assembly: turn fetched datasets into coloured markers.

Each layer has its own marker style. Flood markers are coloured by
severity, fire markers by detection confidence, and report markers by
report type. Points are filtered to the selected island.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional
import logging

from ecoflood.ingestion.base import EnvironmentalDataSource
from ecoflood.spatial.regions import filter_points_by_island, get_island

logger = logging.getLogger(__name__)

LAYERS = ("deforestation", "flood", "fire", "biodiversity", "reports")
DEFAULT_LAYERS = ("deforestation", "flood", "reports")

SEVERITY_COLORS = {"critical": "#dc2626", "high": "#f59e0b", "medium": "#3b82f6", "low": "#60a5fa"}
CONFIDENCE_COLORS = {"high": "#dc2626", "medium": "#f59e0b", "low": "#fbbf24"}
DEFORESTATION_COLOR = "#E07856"
BIODIVERSITY_COLOR = "#10b981"
REPORT_COLORS = {"flood": "#5B9AA9", "deforestation": "#F4A259"}


def parse_layers(raw: Optional[Iterable[str]]) -> List[str]:
    """Normalise a layer selection; unknown names raise ValueError."""
    if raw is None:
        return list(DEFAULT_LAYERS)
    names = []
    for item in raw:
        names.extend(part.strip().lower() for part in str(item).split(",") if part.strip())
    unknown = sorted(set(names) - set(LAYERS))
    if unknown:
        raise ValueError(f"Unknown map layer(s): {', '.join(unknown)}")
    return [layer for layer in LAYERS if layer in names]


def deforestation_markers(points: List[Dict]) -> List[Dict]:
    return [{
        "lat": p["lat"], "lng": p["lng"], "layer": "deforestation",
        "color": DEFORESTATION_COLOR,
        "radius": min(p["intensity"] / 10, 15),
        "title": "Hotspot Deforestasi",
        "description": f"{p['region']} - {p['area_hectares']} hektar",
        "intensity": p["intensity"], "area_hectares": p["area_hectares"], "region": p["region"],
    } for p in points]


def flood_markers(floods: List[Dict]) -> List[Dict]:
    return [{
        "lat": f["lat"], "lng": f["lng"], "layer": "flood",
        "color": SEVERITY_COLORS.get(f.get("severity"), "#3b82f6"),
        "radius": 8,
        "title": f"Banjir {f['location']}",
        "description": f"{f['description']} ({f['affected']:,} terdampak)",
        "severity": f.get("severity"), "casualties": f.get("casualties"), "affected": f["affected"],
    } for f in floods]


def fire_markers(fires: List[Dict]) -> List[Dict]:
    return [{
        "lat": f["lat"], "lng": f["lng"], "layer": "fire",
        "color": CONFIDENCE_COLORS.get(f.get("confidence"), "#f59e0b"),
        "radius": 6,
        "title": "Hotspot Kebakaran",
        "description": f"{f['location']} - {f['type']} ({f['confidence']} confidence)",
        "type": f["type"], "confidence": f["confidence"],
    } for f in fires]


def biodiversity_markers(spots: List[Dict]) -> List[Dict]:
    return [{
        "lat": s["lat"], "lng": s["lng"], "layer": "biodiversity",
        "color": BIODIVERSITY_COLOR,
        "radius": 10,
        "title": s["location"],
        "description": f"{s['type']} - {', '.join(s['species'])} ({s['area_km2']} km²)",
        "type": s["type"], "species": list(s["species"]),
    } for s in spots]


def report_markers(reports: List[Dict]) -> List[Dict]:
    # Reports without coordinates cannot be placed
    return [{
        "lat": r["lat"], "lng": r["lng"], "layer": "reports",
        "color": REPORT_COLORS.get(r.get("type"), REPORT_COLORS["deforestation"]),
        "radius": 6,
        "title": r["location"],
        "description": r["description"],
        "type": r.get("type"),
    } for r in reports if r.get("lat") is not None and r.get("lng") is not None]


def build_markers(layers: Iterable[str], deforestation: List[Dict] = (), floods: List[Dict] = (),
                  fires: List[Dict] = (), biodiversity: List[Dict] = (), reports: List[Dict] = ()) -> List[Dict]:
    """Markers for the active layers, in layer order."""
    active = set(layers)
    builders = [
        ("deforestation", deforestation_markers, deforestation),
        ("flood", flood_markers, floods),
        ("fire", fire_markers, fires),
        ("biodiversity", biodiversity_markers, biodiversity),
        ("reports", report_markers, reports),
    ]
    markers: List[Dict] = []
    for name, builder, data in builders:
        if name in active:
            markers.extend(builder(list(data)))
    return markers


def load_map(source: EnvironmentalDataSource, reports: List[Dict], island: Optional[str] = None,
             year: int = 2023, layers: Optional[Iterable[str]] = None) -> Dict:
    """Fetch the map datasets for an island/year and assemble markers."""
    preset = get_island(island)
    active = parse_layers(layers)
    island_id = preset["id"]

    markers = build_markers(
        active,
        deforestation=filter_points_by_island(source.tree_cover_loss(year).get("data", []), island_id)
        if "deforestation" in active else [],
        floods=source.flood_history(island_id, year) if "flood" in active else [],
        fires=source.fire_hotspots(island_id, year) if "fire" in active else [],
        biodiversity=source.biodiversity(island_id) if "biodiversity" in active else [],
        reports=filter_points_by_island(reports, island_id),
    )
    logger.debug("Map for island=%s year=%s layers=%s: %d markers", island_id, year, active, len(markers))
    return {
        "island": island_id,
        "center": preset["center"],
        "zoom": preset["zoom"],
        "year": year,
        "layers": active,
        "markers": markers,
    }
