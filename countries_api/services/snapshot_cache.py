import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Tuple

from cachetools import TTLCache

from countries_api.core.config import settings
from countries_api.schemas.country import Country
from countries_api.services.restcountries_client import RestCountriesClient

logger = logging.getLogger(__name__)

CACHE_KEY = "countries"


@dataclass(frozen=True)
class Snapshot:
    countries: Tuple[Country, ...]
    fetched_at: float
    fetched_at_utc: datetime


def _consume_result(task: asyncio.Task):
    # every waiter may have been cancelled; mark the failure as retrieved
    if not task.cancelled():
        task.exception()


class SnapshotCache:
    """
    Single-key TTL cache over the full REST Countries list.

    Freshness is held by a ``cachetools.TTLCache``; the last snapshot is
    kept aside only to report the stale state. Concurrent callers that
    miss share one in-flight refetch. A failed refetch is raised to every
    waiter and leaves the previous snapshot as it was.
    """

    def __init__(
        self,
        client: RestCountriesClient,
        ttl: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.ttl = ttl if ttl is not None else settings.CACHE_TTL
        self.max_entries = max_entries if max_entries is not None else settings.CACHE_MAX_ENTRIES
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._clock = clock
        self._entries: TTLCache = TTLCache(maxsize=self.max_entries, ttl=self.ttl, timer=clock)
        self._last: Optional[Snapshot] = None
        self._inflight: Optional[asyncio.Task] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._last

    @property
    def state(self) -> str:
        if self._entries.get(CACHE_KEY) is not None:
            return "fresh"
        return "empty" if self._last is None else "stale"

    def invalidate(self):
        self._entries.clear()
        self._last = None

    async def get_snapshot(self) -> Sequence[Country]:
        snapshot = self._entries.get(CACHE_KEY)
        if snapshot is not None:
            logger.debug("Returning cached data")
            return snapshot.countries

        if self._inflight is None:
            logger.debug("Cache %s, starting refetch", self.state)
            self._inflight = asyncio.ensure_future(self._refresh())
            self._inflight.add_done_callback(_consume_result)
        else:
            logger.debug("Joining in-flight refetch")

        # shield: a cancelled request must not cancel the fetch other callers await
        snapshot = await asyncio.shield(self._inflight)
        return snapshot.countries

    async def _refresh(self) -> Snapshot:
        try:
            countries = await self.client.fetch_all()
            snapshot = Snapshot(
                countries=tuple(countries),
                fetched_at=self._clock(),
                fetched_at_utc=datetime.now(timezone.utc),
            )
            logger.debug("Storing data in cache")
            self._entries[CACHE_KEY] = snapshot
            self._last = snapshot
            return snapshot
        finally:
            self._inflight = None
