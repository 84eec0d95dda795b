import logging
from typing import Dict, Optional

from countries_api.core.exceptions import CountryNotFound
from countries_api.schemas.country import (
    CountryDetails,
    CountryQuery,
    LanguageSummary,
    RegionSummary,
    SearchCountryResponse,
    Statistics,
)
from countries_api.services import aggregation
from countries_api.services.snapshot_cache import SnapshotCache

logger = logging.getLogger(__name__)


class CountryService:
    """Serves the derived country views from the current cache snapshot."""

    def __init__(self, cache: SnapshotCache):
        self.cache = cache

    async def get_countries(self, query: Optional[CountryQuery] = None) -> SearchCountryResponse:
        query = query or CountryQuery()
        logger.debug("Fetching countries for search query %s", query.model_dump(exclude_none=True))
        countries = await self.cache.get_snapshot()
        return aggregation.search_countries(
            countries,
            region=query.region,
            min_population=query.minPopulation,
            page=query.page,
            limit=query.limit,
        )

    async def get_country_by_name(self, name: str) -> CountryDetails:
        logger.debug("Fetching country by name: %s", name)
        countries = await self.cache.get_snapshot()
        try:
            return aggregation.find_by_name(countries, name)
        except CountryNotFound:
            logger.warning("Country not found: %s", name)
            raise

    async def get_regions(self) -> Dict[str, RegionSummary]:
        logger.debug("Fetching regions")
        return aggregation.group_by_region(await self.cache.get_snapshot())

    async def get_languages(self) -> Dict[str, LanguageSummary]:
        logger.debug("Fetching languages")
        return aggregation.group_by_language(await self.cache.get_snapshot())

    async def get_statistics(self) -> Statistics:
        logger.debug("Fetching statistics")
        return aggregation.compute_statistics(await self.cache.get_snapshot())
