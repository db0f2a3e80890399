"""Island presets and point-in-region helpers leveraging GeoPandas.

Each island carries a map centre/zoom for the web client plus a bounding
polygon (WGS84) used to filter map points by region.

Functions
---------
get_island(island_id: str) -> dict
    Island preset by id; unknown ids resolve to ``all``.

load_regions_gdf() -> GeoDataFrame
    Island bounding polygons as a GeoDataFrame (``all`` excluded).

find_island_for_point(lon: float, lat: float) -> str | None
    Id of the island whose polygon contains the point.

filter_points_by_island(points: list[dict], island_id: str) -> list[dict]
    Keep records whose ``lat``/``lng`` fall inside the island polygon.

Dependencies: geopandas, shapely
"""
from __future__ import annotations

from typing import List, Dict, Optional
import geopandas as gpd
from shapely.geometry import box, Point

# (min_lon, min_lat, max_lon, max_lat)
ISLANDS: List[Dict] = [
    {"id": "all", "name": "Seluruh Indonesia", "center": [-2.5, 118.0], "zoom": 5,
     "bounds": (94.0, -11.5, 141.5, 6.5)},
    {"id": "sumatra", "name": "Sumatra", "center": [0.5, 101.5], "zoom": 6,
     "bounds": (94.0, -6.0, 106.5, 6.5)},
    {"id": "java", "name": "Jawa & Bali", "center": [-7.5, 110.0], "zoom": 7,
     "bounds": (105.0, -9.0, 116.0, -5.8)},
    {"id": "kalimantan", "name": "Kalimantan", "center": [0.5, 114.0], "zoom": 6,
     "bounds": (108.5, -4.5, 119.0, 7.5)},
    {"id": "sulawesi", "name": "Sulawesi", "center": [-2.0, 120.5], "zoom": 6,
     "bounds": (119.0, -6.5, 125.5, 2.5)},
    {"id": "papua", "name": "Papua & Maluku", "center": [-4.0, 135.0], "zoom": 6,
     "bounds": (125.5, -9.5, 141.5, 2.5)},
]

_BY_ID = {island["id"]: island for island in ISLANDS}


def get_island(island_id: Optional[str]) -> Dict:
    return _BY_ID.get((island_id or "all").lower(), _BY_ID["all"])


def list_islands() -> List[Dict]:
    """Island presets without the internal polygon bounds."""
    return [{k: v for k, v in island.items() if k != "bounds"} for island in ISLANDS]


def load_regions_gdf() -> gpd.GeoDataFrame:
    records = [
        {"island_id": island["id"], "name": island["name"], "geometry": box(*island["bounds"])}
        for island in ISLANDS if island["id"] != "all"
    ]
    return gpd.GeoDataFrame(records, geometry="geometry", crs="EPSG:4326")


def find_island_for_point(lon: float, lat: float) -> Optional[str]:
    """Return the id of the island containing the lon/lat point.

    Parameters
    ----------
    lon, lat : float
        WGS84 coordinates.

    Returns
    -------
    str | None
        Island id, or None when the point is outside every island polygon.
    """
    gdf = load_regions_gdf()
    matches = gdf[gdf.contains(Point(lon, lat))]
    if matches.empty:
        return None
    return matches.iloc[0]["island_id"]


def filter_points_by_island(points: List[Dict], island_id: Optional[str]) -> List[Dict]:
    island = get_island(island_id)
    if island["id"] == "all":
        return list(points)
    region = box(*island["bounds"])
    kept = []
    for p in points:
        lat, lng = p.get("lat"), p.get("lng")
        if lat is None or lng is None:
            continue
        if region.contains(Point(lng, lat)):
            kept.append(p)
    return kept


__all__ = [
    "ISLANDS", "get_island", "list_islands", "load_regions_gdf",
    "find_island_for_point", "filter_points_by_island",
]
