"""Community report storage (MongoDB) with an in-process fallback.

``ReportRepository`` is the database adapter. ``ReportService`` is what the
API and CLI use: when MongoDB is unreachable it keeps new reports in memory
for the lifetime of the process and, while that store is empty, lists the
seeded mock reports instead.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional
from uuid import uuid4
import logging

import pytz
from pymongo import MongoClient, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ecoflood.errors import ReportStoreError
from ecoflood.ingestion.static_data import mock_reports
from .schemas import REPORT_TYPES, create_collections_with_validation

logger = logging.getLogger(__name__)


def _serialise(doc: Dict) -> Dict:
    out = {k: v for k, v in doc.items() if k != "_id"}
    created = out.get("createdAt")
    if isinstance(created, datetime):
        if created.tzinfo is None:
            created = pytz.UTC.localize(created)
        out["createdAt"] = created.isoformat()
    return out


def build_report(location: str, report_type: str, description: str, lat: Optional[float] = None,
                 lng: Optional[float] = None, image_url: str = "") -> Dict:
    """Validate fields and assemble a new report document."""
    if report_type not in REPORT_TYPES:
        raise ValueError(f"Unknown report type '{report_type}' (expected one of: {', '.join(REPORT_TYPES)})")
    if not location.strip() or not description.strip():
        raise ValueError("location and description are required")
    return {
        "id": uuid4().hex[:12],
        "location": location.strip(),
        "lat": float(lat) if lat is not None else None,
        "lng": float(lng) if lng is not None else None,
        "type": report_type,
        "description": description.strip(),
        "imageUrl": image_url or "",
        "createdAt": datetime.now(pytz.UTC),
    }


class ReportRepository:
    """MongoDB operations for the ``reports`` collection."""

    def __init__(self, collection: Optional[Collection] = None, connection_uri: str = None,
                 db_name: str = None):
        self.client = None
        if collection is not None:
            self.reports = collection
            return
        from ecoflood.config import settings

        self.client = MongoClient(connection_uri or settings.MONGODB_URL,
                                  serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                                  tz_aware=True)
        self.db = self.client[db_name or settings.MONGODB_NAME]
        self.reports = self.db["reports"]

    def ensure_schema(self):
        """Create the collection validator and indexes (idempotent)."""
        if self.client is not None:
            create_collections_with_validation(self.db)
        self.reports.create_index("id", unique=True)
        self.reports.create_index("type")
        self.reports.create_index([("createdAt", DESCENDING)])

    def insert(self, doc: Dict) -> Dict:
        self.reports.insert_one(dict(doc))
        return _serialise(doc)

    def get(self, report_id: str) -> Optional[Dict]:
        doc = self.reports.find_one({"id": report_id}, {"_id": 0})
        return _serialise(doc) if doc else None

    def list(self, report_type: Optional[str] = None, limit: int = 50) -> List[Dict]:
        query = {"type": report_type} if report_type else {}
        cursor = self.reports.find(query, {"_id": 0}).sort("createdAt", DESCENDING).limit(limit)
        return [_serialise(d) for d in cursor]

    def statistics(self) -> Dict:
        total = self.reports.count_documents({})
        by_type = {row["_id"]: row["count"] for row in self.reports.aggregate(
            [{"$group": {"_id": "$type", "count": {"$sum": 1}}}])}
        return {"total_reports": total, "by_type": by_type}

    def close(self):
        if self.client is not None:
            self.client.close()


def _stats_for(reports: List[Dict]) -> Dict:
    by_type: Dict[str, int] = {}
    for r in reports:
        by_type[r["type"]] = by_type.get(r["type"], 0) + 1
    return {"total_reports": len(reports), "by_type": by_type}


class ReportService:
    """Report operations with fallback to process-local storage."""

    def __init__(self, repository: Optional[ReportRepository] = None):
        self.repository = repository or ReportRepository()
        self._local: List[Dict] = []

    def _fallback_reports(self) -> List[Dict]:
        if self._local:
            return sorted(self._local, key=lambda r: r["createdAt"], reverse=True)
        return mock_reports()

    def create_report(self, location: str, report_type: str, description: str,
                      lat: Optional[float] = None, lng: Optional[float] = None,
                      image_url: str = "") -> Dict:
        doc = build_report(location, report_type, description, lat, lng, image_url)
        try:
            return self.repository.insert(doc)
        except PyMongoError as e:
            logger.warning("Report store unavailable (%s); keeping report %s in memory", e, doc["id"])
            saved = _serialise(doc)
            self._local.append(saved)
            return saved

    def list_reports(self, report_type: Optional[str] = None, limit: int = 50) -> List[Dict]:
        try:
            return self.repository.list(report_type=report_type, limit=limit)
        except PyMongoError as e:
            logger.warning("Report store unavailable (%s); listing fallback reports", e)
        reports = self._fallback_reports()
        if report_type:
            reports = [r for r in reports if r["type"] == report_type]
        return reports[:limit]

    def statistics(self) -> Dict:
        try:
            return self.repository.statistics()
        except PyMongoError as e:
            logger.warning("Report store unavailable (%s); computing stats from fallback reports", e)
        return _stats_for(self._fallback_reports())

    def initialise(self) -> None:
        """Create the schema; unlike the other operations this does not fall back."""
        try:
            self.repository.ensure_schema()
        except PyMongoError as e:
            raise ReportStoreError(f"Could not initialise report collection: {e}") from e

    def close(self):
        self.repository.close()
