"""Command line interface for EcoFlood.

Usage examples (from repository root):

  python -m ecoflood.cli simulate --forest 60 --rainfall 100 --soil medium
  python -m ecoflood.cli forecast-risk --lat -0.5 --lon 117.15 --forest 35 --soil low
  python -m ecoflood.cli dashboard --static-data
  python -m ecoflood.cli markers --island kalimantan --year 2021 --layers flood,fire
  python -m ecoflood.cli report-create --location Jakarta --type flood --description "Banjir" --lat -6.2 --lng 106.8
  python -m ecoflood.cli report-list --type flood
  python -m ecoflood.cli init-db
  python -m ecoflood.cli serve --port 8008
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List

from ecoflood.config import settings
from ecoflood.domain.risk_model import (
    SoilAbsorption,
    compute_risk,
    recommendations,
    risk_color,
)
from ecoflood.errors import ReportStoreError
from ecoflood.ingestion.sources import build_data_source
from ecoflood.logging_utils import configure_logging
from ecoflood.persistence.reports import ReportService
from ecoflood.services.dashboard import build_dashboard
from ecoflood.services.forecast import forecast_flood_risk, render_forecast_report
from ecoflood.services.map_layers import load_map


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _data_source(args: argparse.Namespace):
    return build_data_source(use_live=False if args.static_data else None)


# ---------------- Simulation Command Handlers -----------------


def _cmd_simulate(args: argparse.Namespace) -> int:
    # Purely computational; no network or database access.
    result = compute_risk(args.forest, args.rainfall, args.soil)
    if args.json:
        _print_json({**result.to_dict(), "color": risk_color(result.risk_level),
                     "recommendations": recommendations(result)})
        return 0
    f = result.factors
    print(f"Flood probability:    {result.flood_probability}% ({result.risk_level.value.upper()})")
    print(f"Water runoff:         {result.water_runoff}%")
    print(f"Environmental health: {result.environmental_health}%")
    print(f"Impact breakdown:     forest {f.forest_impact}% | rainfall {f.rainfall_impact}% | soil {f.soil_impact}%")
    print("Recommendations:")
    for rec in recommendations(result):
        print(f" - {rec}")
    return 0


def _cmd_forecast_risk(args: argparse.Namespace) -> int:
    assessment = forecast_flood_risk(
        _data_source(args),
        lat=args.lat if args.lat is not None else settings.DEFAULT_LAT,
        lon=args.lon if args.lon is not None else settings.DEFAULT_LON,
        forest_cover_percent=args.forest,
        soil_absorption=args.soil,
    )
    if args.json:
        _print_json(assessment)
    else:
        print(render_forecast_report(assessment, tz=settings.TIMEZONE))
    return 0


def _cmd_dashboard(args: argparse.Namespace) -> int:
    data = build_dashboard(_data_source(args), lat=args.lat, lon=args.lon)
    if args.json:
        _print_json(data)
        return 0
    m = data["metrics"]
    print(f"Avg. monthly rainfall: {m['avg_rainfall_mm']} mm ({data['rainfall_source']})")
    print(f"Forest loss (latest):  {m['latest_deforestation_label']}")
    print(f"Peak river discharge:  {data['peak_river_discharge']} m³/s ({data['river_discharge_source']})")
    print(f"Active hotspots:       {m['total_alerts']} ({m['high_confidence_alerts']} high confidence)")
    return 0


def _cmd_markers(args: argparse.Namespace) -> int:
    reports = []
    if not args.static_data:
        service = ReportService()
        try:
            reports = service.list_reports(limit=500)
        finally:
            service.close()
    try:
        data = load_map(_data_source(args), reports, island=args.island,
                        year=args.year, layers=[args.layers] if args.layers else None)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2
    if args.json:
        _print_json(data)
        return 0
    print(f"Island {data['island']} center={data['center']} zoom={data['zoom']} year={data['year']}")
    for mk in data["markers"]:
        print(f"[{mk['layer']}] ({mk['lat']:.4f},{mk['lng']:.4f}) {mk['title']} - {mk['description']}")
    print(f"{len(data['markers'])} markers")
    return 0


# ---------------- Report Command Handlers -----------------


def _cmd_init_db(_: argparse.Namespace) -> int:
    """Create the reports collection with schema validation and indexes.

    Safe to run multiple times: an existing collection has its validator
    refreshed (collMod).
    """
    service = ReportService()
    try:
        service.initialise()
        print(f"Initialized MongoDB collection: {settings.MONGODB_NAME}.reports")
        return 0
    except ReportStoreError as exc:
        print(f"Database initialization failed: {exc}")
        return 1
    finally:
        service.close()


def _cmd_report_create(args: argparse.Namespace) -> int:
    service = ReportService()
    try:
        report = service.create_report(
            location=args.location,
            report_type=args.type,
            description=args.description,
            lat=args.lat,
            lng=args.lng,
            image_url=args.image_url or "",
        )
        print(f"Created report: {report['id']}")
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2
    finally:
        service.close()
    return 0


def _cmd_report_list(args: argparse.Namespace) -> int:
    service = ReportService()
    try:
        reports = service.list_reports(report_type=args.type, limit=args.limit)
        if not reports:
            print("No reports found")
            return 0
        for r in reports:
            print(f"{r['id']} | {r['type']} | {r['location']} | {r['createdAt']}")
    finally:
        service.close()
    return 0


def _cmd_report_stats(_: argparse.Namespace) -> int:
    service = ReportService()
    try:
        print(service.statistics())
    finally:
        service.close()
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn
    from ecoflood.app import create_app

    if args.static_data:
        settings.USE_LIVE_DATA = False
    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecoflood",
        description="EcoFlood flood risk & environmental data CLI",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    soil_metavar = "{" + ",".join(s.value for s in SoilAbsorption) + "}"

    p_sim = sub.add_parser("simulate", help="Compute flood risk (no network/DB)")
    p_sim.add_argument("--forest", type=float, default=60.0, help="Forest cover (%%)")
    p_sim.add_argument("--rainfall", type=float, default=100.0, help="Rainfall (mm)")
    p_sim.add_argument("--soil", type=SoilAbsorption.parse, default=SoilAbsorption.MEDIUM,
                       metavar=soil_metavar, help="Soil absorption capacity")
    p_sim.add_argument("--json", action="store_true", help="Print JSON")
    p_sim.set_defaults(func=_cmd_simulate)

    p_fc = sub.add_parser("forecast-risk", help="Daily flood risk over the 7-day rainfall forecast")
    p_fc.add_argument("--lat", type=float, help="Latitude (default DEFAULT_LAT)")
    p_fc.add_argument("--lon", type=float, help="Longitude (default DEFAULT_LON)")
    p_fc.add_argument("--forest", type=float, default=60.0, help="Forest cover (%%)")
    p_fc.add_argument("--soil", type=SoilAbsorption.parse, default=SoilAbsorption.MEDIUM,
                      metavar=soil_metavar)
    p_fc.add_argument("--static-data", action="store_true", help="Use mock data only")
    p_fc.add_argument("--json", action="store_true", help="Print JSON")
    p_fc.set_defaults(func=_cmd_forecast_risk)

    p_dash = sub.add_parser("dashboard", help="Dashboard metrics and chart series")
    p_dash.add_argument("--lat", type=float)
    p_dash.add_argument("--lon", type=float)
    p_dash.add_argument("--static-data", action="store_true", help="Use mock data only")
    p_dash.add_argument("--json", action="store_true", help="Print JSON")
    p_dash.set_defaults(func=_cmd_dashboard)

    p_map = sub.add_parser("markers", help="Map markers for an island/year")
    p_map.add_argument("--island", default="all")
    p_map.add_argument("--year", type=int, default=2023)
    p_map.add_argument("--layers", help="Comma-separated layers (default deforestation,flood,reports)")
    p_map.add_argument("--static-data", action="store_true",
                       help="Use mock data only and skip stored reports")
    p_map.add_argument("--json", action="store_true", help="Print JSON")
    p_map.set_defaults(func=_cmd_markers)

    p_init = sub.add_parser(
        "init-db", help="Create MongoDB reports collection & indexes (idempotent)")
    p_init.set_defaults(func=_cmd_init_db)

    p_rc = sub.add_parser("report-create", help="Submit a community report")
    p_rc.add_argument("--location", required=True)
    p_rc.add_argument("--type", choices=["flood", "deforestation"], default="flood")
    p_rc.add_argument("--description", required=True)
    p_rc.add_argument("--lat", type=float)
    p_rc.add_argument("--lng", type=float)
    p_rc.add_argument("--image-url", dest="image_url")
    p_rc.set_defaults(func=_cmd_report_create)

    p_rl = sub.add_parser("report-list", help="List community reports")
    p_rl.add_argument("--type", choices=["flood", "deforestation"])
    p_rl.add_argument("--limit", type=int, default=25)
    p_rl.set_defaults(func=_cmd_report_list)

    p_rs = sub.add_parser("report-stats", help="Report counts by type")
    p_rs.set_defaults(func=_cmd_report_stats)

    p_srv = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    p_srv.add_argument("--host", default="0.0.0.0")
    p_srv.add_argument("--port", type=int, default=8008)
    p_srv.add_argument("--static-data", action="store_true", help="Use mock data only")
    p_srv.set_defaults(func=_cmd_serve)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
