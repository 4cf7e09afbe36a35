import json
import logging
from pathlib import Path

import httpx

from .base import ReferenceDataClient, ReferenceDataset, parse_dataset
from .seed import SEED_DOCUMENT
from ..core.config import settings
from ..core.errors import ReferenceDataError

logger = logging.getLogger(__name__)

class SeedReferenceData(ReferenceDataClient):
    """
    Bundled demo dataset. Deterministic and free of external dependencies.
    """
    async def load(self) -> ReferenceDataset:
        return parse_dataset(SEED_DOCUMENT)

class JsonFileReferenceData(ReferenceDataClient):
    """
    Reads {"buyers": [...], "properties": [...], "events": [...]} from disk.
    """
    def __init__(self, path: str):
        self.path = Path(path)

    async def load(self) -> ReferenceDataset:
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ReferenceDataError(
                "could not read reference data file", {"path": str(self.path), "error": str(exc)}
            ) from exc
        return parse_dataset(doc)

class HttpReferenceData(ReferenceDataClient):
    """
    Pulls the reference document from an upstream service that exposes
    GET /reference-data with the same JSON shape as the file loader.
    """
    def __init__(self, base_url: str, timeout: float = 15):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def load(self) -> ReferenceDataset:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.get(f"{self.base_url}/reference-data")
                r.raise_for_status()
                doc = r.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ReferenceDataError(
                "could not fetch reference data", {"url": self.base_url, "error": str(exc)}
            ) from exc
        return parse_dataset(doc)

def reference_client() -> ReferenceDataClient:
    """
    Factory picks seed, json or http based on env flags.
    """
    provider = settings.REFERENCE_PROVIDER
    if provider == "http" and settings.REFERENCE_BASE_URL:
        return HttpReferenceData(settings.REFERENCE_BASE_URL, settings.REFERENCE_TIMEOUT_SECONDS)
    if provider == "json" and settings.REFERENCE_PATH:
        return JsonFileReferenceData(settings.REFERENCE_PATH)
    if provider != "seed":
        logger.warning("reference provider %r not usable, falling back to seed data", provider)
    return SeedReferenceData()
