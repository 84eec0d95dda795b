from typing import Annotated, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from countries_api.api.v1.di import get_country_service
from countries_api.core.config import settings
from countries_api.core.exceptions import (
    CountriesAPIError,
    CountryNotFound,
)
from countries_api.core.rate_limit import limiter
from countries_api.schemas.country import (
    CountryDetails,
    CountryQuery,
    LanguageSummary,
    RegionSummary,
    SearchCountryResponse,
    Statistics,
)
from countries_api.services.country_service import CountryService

router = APIRouter()

Service = Annotated[CountryService, Depends(get_country_service)]


def _to_http(e: CountriesAPIError) -> HTTPException:
    """Map service errors onto HTTP responses."""
    if isinstance(e, CountryNotFound):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.get("/countries", response_model=SearchCountryResponse)
@limiter.limit(settings.RATE_LIMIT)
async def get_countries(request: Request, query: Annotated[CountryQuery, Query()], service: Service):
    """List countries sorted by name, filtered by region and minimum population."""
    try:
        return await service.get_countries(query)
    except CountriesAPIError as e:
        raise _to_http(e) from e


@router.get("/countries/{name}", response_model=CountryDetails)
@limiter.limit(settings.RATE_LIMIT)
async def get_country_by_name(request: Request, name: str, service: Service):
    try:
        return await service.get_country_by_name(name)
    except CountriesAPIError as e:
        raise _to_http(e) from e


@router.get("/regions", response_model=Dict[str, RegionSummary])
@limiter.limit(settings.RATE_LIMIT)
async def get_regions(request: Request, service: Service):
    """Countries and total population per region."""
    try:
        return await service.get_regions()
    except CountriesAPIError as e:
        raise _to_http(e) from e


@router.get("/languages", response_model=Dict[str, LanguageSummary])
@limiter.limit(settings.RATE_LIMIT)
async def get_languages(request: Request, service: Service):
    """Countries and total speakers per language."""
    try:
        return await service.get_languages()
    except CountriesAPIError as e:
        raise _to_http(e) from e


@router.get("/statistics", response_model=Statistics)
@limiter.limit(settings.RATE_LIMIT)
async def get_statistics(request: Request, service: Service):
    try:
        return await service.get_statistics()
    except CountriesAPIError as e:
        raise _to_http(e) from e
