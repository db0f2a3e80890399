"""Community report endpoints.

Exposes POST /reports to capture user submitted observations (flood events,
deforestation) and GET /reports to list them, newest first. Persists to
MongoDB through `ReportService`, which keeps working from memory when the
database is unreachable.

Request JSON structure (example):
{
	"location": "Samarinda, Kalimantan Timur",
	"type": "flood",
	"description": "Air setinggi lutut di jalan utama",
	"lat": -0.5022,
	"lng": 117.1536,
	"imageUrl": ""
}
"""
from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, field_validator

from ecoflood.api.deps import get_report_service
from ecoflood.auth.auth import verify_token
from ecoflood.persistence.reports import ReportService

router = APIRouter()


class ReportRequest(BaseModel):
	location: str = Field(..., min_length=1, max_length=200)
	type: Literal["flood", "deforestation"] = "flood"
	description: str = Field(..., min_length=1, max_length=2000)
	lat: Optional[float] = Field(None, ge=-90, le=90)
	lng: Optional[float] = Field(None, ge=-180, le=180)
	imageUrl: str = ""

	@field_validator("location", "description")
	def _strip(cls, v: str) -> str:  # noqa: D401
		v = v.strip()
		if not v:
			raise ValueError("must not be blank")
		return v


class ReportResponse(BaseModel):
	id: str
	location: str
	type: str
	description: str
	lat: Optional[float] = None
	lng: Optional[float] = None
	imageUrl: str = ""
	createdAt: str


@router.post("/reports", response_model=ReportResponse, status_code=201)
def create_report(req: ReportRequest, service: ReportService = Depends(get_report_service),
				  token: str = Depends(verify_token)):
	"""Create a new community report.

	Authentication: requires a valid bearer token (see `verify_token`).
	"""
	return service.create_report(
		location=req.location,
		report_type=req.type,
		description=req.description,
		lat=req.lat,
		lng=req.lng,
		image_url=req.imageUrl,
	)


@router.get("/reports", response_model=list[ReportResponse])
def list_reports(type: Optional[Literal["flood", "deforestation"]] = Query(None),
				 limit: int = Query(50, ge=1, le=500),
				 service: ReportService = Depends(get_report_service),
				 token: str = Depends(verify_token)):
	return service.list_reports(report_type=type, limit=limit)


@router.get("/reports/stats")
def report_stats(service: ReportService = Depends(get_report_service),
				 token: str = Depends(verify_token)):
	return service.statistics()
