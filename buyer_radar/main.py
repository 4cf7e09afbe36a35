import logging
import math
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from .routers.radar import router as radar_router

# Core modules
from .core.config import settings
from .core.errors import DataIntegrityError, InvalidArgument, ReferenceDataError
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint
from .data.store import store

logger = logging.getLogger(__name__)

def _json_safe(context: dict) -> dict:
    # JSONResponse refuses inf/nan; echo such values back as strings
    return {
        k: str(v) if isinstance(v, float) and not math.isfinite(v) else v
        for k, v in context.items()
    }

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Reference data is loaded once; later refreshes go through the reload route
    if not store.loaded:
        await store.reload()
    yield

def create_app() -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    """
    configure_logging()  # Set up JSON logs + correlation-id filter

    app = FastAPI(
        title="Buyer Radar API",
        version="1.0.0",
        description="Active real-estate buyers within a radius and time window, with the search boundary.",
        lifespan=lifespan,
    )

    # CORS: allow the map front-end to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag","X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    # Error taxonomy → HTTP
    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Request, exc: InvalidArgument):
        return JSONResponse(
            status_code=400,
            content={"error": "invalid_argument", "detail": exc.message, "context": _json_safe(exc.context)},
        )

    @app.exception_handler(DataIntegrityError)
    async def data_integrity_handler(request: Request, exc: DataIntegrityError):
        logger.error("data integrity error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "data_integrity", "detail": exc.message, "context": _json_safe(exc.context)},
        )

    @app.exception_handler(ReferenceDataError)
    async def reference_data_handler(request: Request, exc: ReferenceDataError):
        return JSONResponse(
            status_code=503,
            content={"error": "reference_data_unavailable", "detail": exc.message},
        )

    # Meta routes
    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok", "reference_loaded": store.loaded, "reference_version": store.version}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(radar_router, prefix="/v1", tags=["buyers"])

    return app

app = create_app()
