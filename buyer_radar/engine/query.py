from dataclasses import dataclass
from datetime import date
from typing import List

from ..data.base import ALL_CATEGORIES, GeoPoint, ReferenceDataset
from .aggregate import BuyerSummary, aggregate
from .filters import CategoryFilter, filter_events, normalize_category, since_date
from .geo import DEFAULT_SEGMENTS, BoundaryPolygon, boundary_polygon


@dataclass(frozen=True)
class QueryResult:
    summaries: List[BuyerSummary]
    boundary: BoundaryPolygon
    since_date: date


def run_query(
    dataset: ReferenceDataset,
    center: GeoPoint,
    radius_miles: float,
    months: int,
    category: CategoryFilter = ALL_CATEGORIES,
    today: date | None = None,
    segments: int = DEFAULT_SEGMENTS,
) -> QueryResult:
    """
    Ranked buyer activity around `center` plus the search boundary.

    `today` anchors the lookback window; it is required so results don't
    drift with the wall clock. Arguments are all validated before any
    work is done, so a bad request never yields a partial result.
    """
    if today is None:
        raise TypeError("run_query() requires an explicit 'today'")
    since = since_date(today, months)
    wanted = normalize_category(category)
    boundary = boundary_polygon(center, radius_miles, segments)

    matched = filter_events(dataset, center, radius_miles, since, wanted)
    return QueryResult(
        summaries=aggregate(matched, dataset),
        boundary=boundary,
        since_date=since,
    )


def buyer_markers(summaries: List[BuyerSummary], dataset: ReferenceDataset, center: GeoPoint) -> dict:
    """
    GeoJSON FeatureCollection with one point per buyer, placed at the
    property of the buyer's most recent matched deal.
    """
    features = []
    for s in summaries:
        prop = dataset.properties.get(s.latest_property_id)
        loc = prop.location if prop is not None else center
        features.append({
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [loc.longitude, loc.latitude]},
            "properties": {"id": s.buyer_id, "name": s.name, "type": s.category.value},
        })
    return {"type": "FeatureCollection", "features": features}
