from typing import Optional

from countries_api.core.config import settings
from countries_api.services.country_service import CountryService
from countries_api.services.restcountries_client import RestCountriesClient
from countries_api.services.snapshot_cache import SnapshotCache

_service: Optional[CountryService] = None


def get_country_service() -> CountryService:
    """One client, cache and service per process, built on first use."""
    global _service
    if _service is None:
        client = RestCountriesClient(
            base_url=settings.REST_COUNTRIES_API_URL,
            timeout_ms=settings.REST_CALL_TIME_OUT,
        )
        cache = SnapshotCache(
            client,
            ttl=settings.CACHE_TTL,
            max_entries=settings.CACHE_MAX_ENTRIES,
        )
        _service = CountryService(cache)
    return _service


async def close_country_service():
    global _service
    if _service is not None:
        await _service.cache.client.aclose()
        _service = None
