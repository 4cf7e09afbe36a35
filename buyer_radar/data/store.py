import asyncio
import logging
from typing import Optional

from .base import ReferenceDataClient, ReferenceDataset
from .reference_client import reference_client
from ..core.errors import ReferenceDataError
from ..core.metrics import RELOAD_COUNT, SNAPSHOT_VERSION

logger = logging.getLogger(__name__)

class ReferenceStore:
    """
    Holds the reference data snapshot queries read from.

    A reload builds the complete new dataset before publishing it, together
    with its version, in a single reference assignment. A query that already
    grabbed the snapshot keeps working against the old one.
    """
    def __init__(self, client: Optional[ReferenceDataClient] = None):
        self.client = client or reference_client()
        self._state: Optional[tuple[int, ReferenceDataset]] = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._state is not None

    def current(self) -> tuple[int, ReferenceDataset]:
        """Version and snapshot, read together so they always agree."""
        state = self._state
        if state is None:
            raise ReferenceDataError("reference data not loaded")
        return state

    @property
    def snapshot(self) -> ReferenceDataset:
        return self.current()[1]

    @property
    def version(self) -> int:
        state = self._state
        return state[0] if state else 0

    async def reload(self) -> ReferenceDataset:
        async with self._lock:
            try:
                dataset = await self.client.load()
            except ReferenceDataError:
                RELOAD_COUNT.labels(outcome="error").inc()
                logger.exception("reference data reload failed; keeping version %d", self.version)
                raise
            version = self.version + 1
            self._state = (version, dataset)
            RELOAD_COUNT.labels(outcome="ok").inc()
            SNAPSHOT_VERSION.set(version)
            logger.info(
                "reference data loaded",
                extra={"fields": {"version": version, **dataset.counts()}},
            )
            return dataset

store = ReferenceStore()
