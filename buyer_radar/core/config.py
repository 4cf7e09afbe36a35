import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "900"))
    QUERY_CACHE_ENABLED: bool = os.getenv("QUERY_CACHE_ENABLED", "true").lower() == "true"

    # Reference data
    REFERENCE_PROVIDER: str = os.getenv("REFERENCE_PROVIDER", "seed")   # seed | json | http
    REFERENCE_PATH: str | None = os.getenv("REFERENCE_PATH")
    REFERENCE_BASE_URL: str | None = os.getenv("REFERENCE_BASE_URL")
    REFERENCE_TIMEOUT_SECONDS: float = float(os.getenv("REFERENCE_TIMEOUT_SECONDS", "15"))

    # Query defaults
    BOUNDARY_SEGMENTS: int = int(os.getenv("BOUNDARY_SEGMENTS", "64"))
    DEFAULT_RADIUS_MILES: float = float(os.getenv("DEFAULT_RADIUS_MILES", "2"))
    DEFAULT_MONTHS: int = int(os.getenv("DEFAULT_MONTHS", "12"))

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Cache
    USE_REDIS: bool = os.getenv("USE_REDIS", "false").lower() == "true"
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
