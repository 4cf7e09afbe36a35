import json
import logging
from datetime import date

from ..core.config import settings
from ..core.cache import cache
from ..core.errors import BuyerRadarError, DataIntegrityError
from ..core.metrics import record_query
from ..core.utils import query_cache_key, weak_etag
from ..data.base import GeoPoint, ReferenceDataset
from ..data.store import ReferenceStore, store as default_store
from ..engine.aggregate import BuyerSummary
from ..engine.filters import normalize_category
from ..engine.geo import boundary_geojson, boundary_polygon
from ..engine.query import buyer_markers, run_query

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No active buyers found. Try increasing the radius or time window."

def _point(p: GeoPoint) -> dict:
    return {"latitude": p.latitude, "longitude": p.longitude}

def _summary(s: BuyerSummary) -> dict:
    return {
        "buyer_id": s.buyer_id,
        "name": s.name,
        "category": s.category.value,
        "contacts": [
            {"phone": c.phone, "email": c.email} for c in s.contacts
        ],
        "deal_count": s.deal_count,
        "most_recent_deal_date": s.most_recent_deal_date.isoformat(),
        "median_price": s.median_price,
    }

def _serialize(payload: dict) -> str:
    return json.dumps(payload, separators=(',',':'))

class RadarService:
    """
    Orchestrates:
      snapshot → filter → aggregate (+ boundary) → response payload
    Handles caching and ETag generation for repeat map refreshes.
    """
    def __init__(self, reference_store: ReferenceStore | None = None):
        self.store = reference_store or default_store

    def search(
        self,
        center: GeoPoint,
        radius_miles: float,
        months: int,
        category: str = "all",
        segments: int | None = None,
        today: date | None = None,
    ) -> tuple[dict, bool, str]:
        segments = settings.BOUNDARY_SEGMENTS if segments is None else segments
        today = today or date.today()
        label = category if isinstance(category, str) else str(category)

        # One read: the whole query sees a single snapshot even if a reload lands mid-way
        version, dataset = self.store.current()

        cache_key = query_cache_key(
            version, center.latitude, center.longitude, radius_miles,
            months, label, segments, today.isoformat(),
        )
        if settings.QUERY_CACHE_ENABLED:
            cached = cache.get(cache_key)
            if cached:
                payload = json.loads(cached)
                record_query(payload["category"], "cache_hit", payload["count"])
                return payload, True, weak_etag(cached.encode("utf-8"))

        try:
            payload = self._compute(dataset, center, radius_miles, months, category, segments, today)
        except DataIntegrityError as exc:
            record_query(normalize_category(category), "integrity_error")
            logger.error("reference data integrity error: %s", exc)
            raise
        except BuyerRadarError:
            record_query("invalid", "invalid")
            raise

        body = _serialize(payload)
        if settings.QUERY_CACHE_ENABLED:
            cache.set(cache_key, body)
        record_query(payload["category"], "ok", payload["count"])
        logger.info(
            "buyer query",
            extra={"fields": {
                "lat": center.latitude, "lon": center.longitude,
                "radius_miles": radius_miles, "months": months,
                "category": payload["category"], "buyers": payload["count"],
                "reference_version": version,
            }},
        )
        return payload, False, weak_etag(body.encode("utf-8"))

    def _compute(
        self,
        dataset: ReferenceDataset,
        center: GeoPoint,
        radius_miles: float,
        months: int,
        category: str,
        segments: int,
        today: date,
    ) -> dict:
        result = run_query(
            dataset, center, radius_miles, months, category, today=today, segments=segments
        )
        summaries = [_summary(s) for s in result.summaries]
        return {
            "center": _point(center),
            "radius_miles": radius_miles,
            "months": months,
            "category": normalize_category(category),
            "since_date": result.since_date.isoformat(),
            "count": len(summaries),
            "buyers": summaries,
            "boundary": [_point(p) for p in result.boundary],
            "boundary_geojson": boundary_geojson(result.boundary),
            "markers": buyer_markers(result.summaries, dataset, center),
            "message": None if summaries else EMPTY_MESSAGE,
            "cached": False,
        }

    def boundary(self, center: GeoPoint, radius_miles: float, segments: int | None = None) -> dict:
        segments = settings.BOUNDARY_SEGMENTS if segments is None else segments
        ring = boundary_polygon(center, radius_miles, segments)
        return {
            "center": _point(center),
            "radius_miles": radius_miles,
            "segments": segments,
            "boundary": [_point(p) for p in ring],
            "boundary_geojson": boundary_geojson(ring),
        }
