import asyncio
import logging
from numbers import Real
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from countries_api.core.config import settings
from countries_api.core.exceptions import InvalidDataFormat, UpstreamUnavailable
from countries_api.schemas.country import Country

logger = logging.getLogger(__name__)

RESTCOUNTRIES_FIELDS = "name,region,population,area,languages,borders,latlng"


def is_valid_country(record: Any) -> bool:
    """Check the fields every record must carry before it is parsed."""
    if not isinstance(record, dict):
        return False
    name = record.get("name")
    population = record.get("population")
    return (
        isinstance(name, dict)
        and isinstance(name.get("common"), str)
        and isinstance(record.get("region"), str)
        and isinstance(population, Real)
        and not isinstance(population, bool)
    )


def parse_countries(payload: Any) -> List[Country]:
    """Validate a whole `/all` payload; any bad record fails the batch."""
    if not isinstance(payload, list):
        raise InvalidDataFormat("Invalid data format from API: expected a list of countries")

    for index, record in enumerate(payload):
        if not is_valid_country(record):
            raise InvalidDataFormat(f"Invalid data format from API: bad country record at index {index}")

    try:
        return [Country.model_validate(record) for record in payload]
    except ValidationError as e:
        raise InvalidDataFormat(f"Invalid data format from API: {e.error_count()} field error(s)") from e


class RestCountriesClient:
    """Fetches the full country list from REST Countries in one call."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.REST_COUNTRIES_API_URL).rstrip("/")
        self.timeout_ms = timeout_ms or settings.REST_CALL_TIME_OUT
        self._client = client or httpx.AsyncClient(
            timeout=self.timeout_ms / 1000,
            headers={"Accept": "application/json"},
            follow_redirects=True,
        )

    def _all_url(self) -> str:
        return f"{self.base_url}/all"

    async def fetch_all(self) -> List[Country]:
        url = self._all_url()
        logger.debug("Fetching countries from %s", url)
        try:
            # httpx timeouts are per phase; wait_for caps the whole request and body read
            r = await asyncio.wait_for(
                self._client.get(
                    url,
                    params={"fields": RESTCOUNTRIES_FIELDS},
                    timeout=self.timeout_ms / 1000,
                ),
                timeout=self.timeout_ms / 1000,
            )
            r.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error("REST Countries timed out after %sms", self.timeout_ms)
            raise UpstreamUnavailable(f"REST Countries timed out after {self.timeout_ms}ms") from e
        except httpx.HTTPStatusError as e:
            logger.error("REST Countries HTTP %s: %s", e.response.status_code, e.response.text[:200])
            raise UpstreamUnavailable(f"REST Countries answered HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("REST Countries request failed: %r", e)
            raise UpstreamUnavailable(f"REST Countries unreachable: {e}") from e

        try:
            payload = r.json()
        except ValueError as e:
            logger.error("REST Countries returned a non-JSON body")
            raise InvalidDataFormat("Invalid data format from API: body is not JSON") from e

        try:
            countries = parse_countries(payload)
        except InvalidDataFormat as e:
            logger.error("Rejected REST Countries payload: %s", e)
            raise

        logger.info("Fetched %d countries from REST Countries", len(countries))
        return countries

    async def aclose(self):
        await self._client.aclose()
