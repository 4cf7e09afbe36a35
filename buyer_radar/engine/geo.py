"""Spherical geometry for radius searches.

Distances and circle boundaries both use a sphere of Earth's mean radius.
That is accurate enough for drawing and filtering at city scale; nothing here
tries to be ellipsoidal.
"""

import math
from typing import Tuple

from ..core.errors import InvalidArgument
from ..data.base import GeoPoint

EARTH_RADIUS_MILES = 3958.8
DEFAULT_SEGMENTS = 64
MIN_SEGMENTS = 3
MAX_SEGMENTS = 1024

BoundaryPolygon = Tuple[GeoPoint, ...]


def distance_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in miles (haversine)."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(min(1.0, h)))


def _normalize_lon(lon: float) -> float:
    """Wrap a longitude in degrees into [-180, 180)."""
    if -180.0 <= lon < 180.0:
        return lon
    return (lon + 540.0) % 360.0 - 180.0


def destination_point(origin: GeoPoint, bearing_rad: float, distance: float) -> GeoPoint:
    """
    Point reached travelling `distance` miles from `origin` along the initial
    bearing `bearing_rad` (radians clockwise from north) on the sphere.
    """
    ang = distance / EARTH_RADIUS_MILES
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)

    sin_lat2 = math.sin(lat1) * math.cos(ang) + math.cos(lat1) * math.sin(ang) * math.cos(bearing_rad)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + math.atan2(
        math.sin(bearing_rad) * math.sin(ang) * math.cos(lat1),
        math.cos(ang) - math.sin(lat1) * math.sin(lat2),
    )
    return GeoPoint(latitude=math.degrees(lat2), longitude=_normalize_lon(math.degrees(lon2)))


def boundary_polygon(
    center: GeoPoint, radius_miles: float, segments: int = DEFAULT_SEGMENTS
) -> BoundaryPolygon:
    """
    Closed ring of `segments + 1` points approximating the circle of
    `radius_miles` around `center`. The last point is the first point.
    """
    if radius_miles is None or not (math.isfinite(radius_miles) and radius_miles > 0):
        raise InvalidArgument("radius_miles must be a positive finite number", {"radius_miles": radius_miles})
    if not MIN_SEGMENTS <= segments <= MAX_SEGMENTS:
        raise InvalidArgument(
            f"segments must be between {MIN_SEGMENTS} and {MAX_SEGMENTS}", {"segments": segments}
        )

    ring = [
        destination_point(center, (i / segments) * 2 * math.pi, radius_miles)
        for i in range(segments)
    ]
    # Bearing 2π lands on the first point up to float noise; reuse it exactly
    ring.append(ring[0])
    return tuple(ring)


def boundary_geojson(polygon: BoundaryPolygon) -> dict:
    """GeoJSON Feature for a boundary ring ([lon, lat] axis order)."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[p.longitude, p.latitude] for p in polygon]],
        },
        "properties": {},
    }
