import hashlib

def round_coord(value: float, places: int = 6) -> float:
    """
    Round a coordinate for cache keys so float noise from clients
    (29.42410000001 vs 29.4241) doesn't fragment the cache.
    """
    return round(float(value), places)

def query_cache_key(
    version: int,
    lat: float,
    lon: float,
    radius_miles: float,
    months: int,
    category: str,
    segments: int,
    today_iso: str,
) -> str:
    """
    Cache key for a buyer query. The snapshot version is part of the key,
    so reloading reference data orphans every older entry.
    """
    return (
        f"buyers:v{version}:{round_coord(lat)},{round_coord(lon)}"
        f":r{float(radius_miles)}:m{int(months)}:{category}:s{int(segments)}:{today_iso}"
    )

def weak_etag(payload_bytes: bytes) -> str:
    """Weak ETag for client-side conditional requests."""
    h = hashlib.sha256(payload_bytes).hexdigest()[:24]
    return f'W/"{h}"'
