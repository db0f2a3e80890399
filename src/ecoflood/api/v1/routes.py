from fastapi import APIRouter
from ecoflood.api.v1.endpoints import simulate, risk, dashboard, map_view, report

api_router = APIRouter()
api_router.include_router(simulate.router, prefix="", tags=["simulate"])
api_router.include_router(risk.router, prefix="", tags=["risk"])
api_router.include_router(dashboard.router, prefix="", tags=["dashboard"])
api_router.include_router(map_view.router, prefix="", tags=["map"])
api_router.include_router(report.router, prefix="", tags=["report"])
