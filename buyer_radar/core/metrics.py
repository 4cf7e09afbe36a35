import time
from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# HTTP metrics (names follow Prometheus conventions)
REQ_COUNT = Counter("http_requests_total", "Total HTTP requests", ["path","method","code"])
REQ_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["path","method"])

# Domain metrics
QUERY_COUNT = Counter(
    "buyer_radar_queries_total", "Buyer radar queries", ["category", "outcome"]
)
QUERY_RESULTS = Histogram(
    "buyer_radar_query_result_buyers", "Buyers returned per query",
    buckets=(0, 1, 2, 5, 10, 25, 50, 100, 250),
)
RELOAD_COUNT = Counter(
    "buyer_radar_reference_reloads_total", "Reference data reloads", ["outcome"]
)
SNAPSHOT_VERSION = Gauge(
    "buyer_radar_reference_version", "Version of the reference data snapshot in use"
)

class PromMiddleware(BaseHTTPMiddleware):
    """
    Measures latency and counts requests.
    """
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Route template keeps label cardinality bounded
        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)
        method = request.method
        code = str(response.status_code)

        REQ_COUNT.labels(path=path, method=method, code=code).inc()
        REQ_LATENCY.labels(path=path, method=method).observe(elapsed)
        return response

def record_query(category: str, outcome: str, result_size: int | None = None) -> None:
    QUERY_COUNT.labels(category=category, outcome=outcome).inc()
    if result_size is not None:
        QUERY_RESULTS.observe(result_size)

async def metrics_endpoint(request: Request):
    """
    GET /v1/metrics — scraped by Prometheus.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
