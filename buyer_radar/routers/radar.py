from fastapi import APIRouter, Depends, Header, Query, Response
from ..schemas import BoundaryResponse, BuyerQuery, BuyersResponse, ReloadResponse
from ..core.config import settings
from ..data.base import GeoPoint
from ..data.store import store
from ..services.radar_service import RadarService

router = APIRouter()

def service_dep() -> RadarService:
    # Cheap: the service only wraps the shared reference store.
    return RadarService(store)

def _respond(payload: dict, from_cache: bool, etag: str, response: Response, if_none_match: str | None):
    if if_none_match and if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})
    payload["cached"] = from_cache
    payload["etag"] = etag
    response.headers["ETag"] = etag
    return payload

@router.get("/buyers", response_model=BuyersResponse)
def get_buyers(
    response: Response,
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    radius_miles: float = Query(default=settings.DEFAULT_RADIUS_MILES),
    months: int = Query(default=settings.DEFAULT_MONTHS),
    category: str = Query(default="all"),
    segments: int = Query(default=settings.BOUNDARY_SEGMENTS),
    if_none_match: str | None = Header(default=None),
    svc: RadarService = Depends(service_dep),
):
    payload, from_cache, etag = svc.search(
        GeoPoint(latitude=lat, longitude=lon), radius_miles, months, category, segments
    )
    return _respond(payload, from_cache, etag, response, if_none_match)

@router.post("/buyers", response_model=BuyersResponse)
def post_buyers(
    body: BuyerQuery,
    response: Response,
    if_none_match: str | None = Header(default=None),
    svc: RadarService = Depends(service_dep),
):
    payload, from_cache, etag = svc.search(
        GeoPoint(latitude=body.lat, longitude=body.lon),
        body.radius_miles, body.months, body.category, body.segments,
    )
    return _respond(payload, from_cache, etag, response, if_none_match)

@router.get("/boundary", response_model=BoundaryResponse)
def get_boundary(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    radius_miles: float = Query(default=settings.DEFAULT_RADIUS_MILES),
    segments: int = Query(default=settings.BOUNDARY_SEGMENTS),
    svc: RadarService = Depends(service_dep),
):
    return svc.boundary(GeoPoint(latitude=lat, longitude=lon), radius_miles, segments)

@router.post("/reference-data/reload", response_model=ReloadResponse)
async def reload_reference_data():
    dataset = await store.reload()
    return {"version": store.version, **dataset.counts()}
