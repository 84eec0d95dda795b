"""
Derived views over a country snapshot.

Every function here is pure: it takes the snapshot's country sequence and
returns a fresh structure, so nothing computed here outlives the snapshot
it was built from.
"""
import unicodedata
from typing import Dict, List, Optional, Sequence, Tuple

from countries_api.core.exceptions import CountryNotFound
from countries_api.schemas.country import (
    Country,
    CountryDetails,
    LanguageSummary,
    RegionSummary,
    SearchCountryResponse,
    Statistics,
)


def format_country(country: Country) -> CountryDetails:
    return CountryDetails(
        commonName=country.common_name,
        population=country.population,
        languages=dict(country.languages),
        borders=list(country.borders),
        latlng=list(country.latlng),
    )


def name_sort_key(name: str) -> Tuple[str, str, str]:
    """
    Collation key approximating a locale-aware compare.

    Accents are ignored first ("Åland" sorts with "Aland"), then case,
    then the raw string keeps the order total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name.casefold(), name


def filter_countries(
    countries: Sequence[Country],
    region: Optional[str] = None,
    min_population: Optional[int] = None,
) -> List[Country]:
    filtered = list(countries)
    if region:
        wanted = region.lower()
        filtered = [c for c in filtered if c.region.lower() == wanted]
    if min_population is not None:
        filtered = [c for c in filtered if c.population >= min_population]
    return filtered


def search_countries(
    countries: Sequence[Country],
    region: Optional[str] = None,
    min_population: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
) -> SearchCountryResponse:
    filtered = filter_countries(countries, region, min_population)
    filtered.sort(key=lambda c: name_sort_key(c.common_name))

    start = (page - 1) * limit
    page_items = filtered[start : start + limit]

    return SearchCountryResponse(
        total=len(filtered),
        page=page,
        limit=limit,
        data=[format_country(c) for c in page_items],
    )


def find_by_name(countries: Sequence[Country], name: str) -> CountryDetails:
    wanted = name.lower()
    for country in countries:
        if country.common_name.lower() == wanted:
            return format_country(country)
    raise CountryNotFound(name)


def group_by_region(countries: Sequence[Country]) -> Dict[str, RegionSummary]:
    regions: Dict[str, RegionSummary] = {}
    for country in countries:
        summary = regions.setdefault(country.region, RegionSummary())
        summary.countries.append(country.common_name)
        summary.totalPopulation += country.population
    return regions


def group_by_language(countries: Sequence[Country]) -> Dict[str, LanguageSummary]:
    # each country counts its whole population once per language it lists
    languages: Dict[str, LanguageSummary] = {}
    for country in countries:
        for _code, language in country.languages.items():
            if not language:
                continue
            summary = languages.setdefault(language, LanguageSummary())
            summary.countries.append(country.common_name)
            summary.totalSpeakers += country.population
    return languages


def most_spoken_language(languages: Dict[str, LanguageSummary]) -> Optional[str]:
    best = None
    for language, summary in languages.items():
        if best is None or summary.totalSpeakers > languages[best].totalSpeakers:
            best = language
    return best


def compute_statistics(countries: Sequence[Country]) -> Statistics:
    if not countries:
        return Statistics(totalCountries=0)

    # strict comparisons keep the first occurrence on ties
    largest = countries[0]
    smallest = countries[0]
    for country in countries[1:]:
        if country.area > largest.area:
            largest = country
        if country.population < smallest.population:
            smallest = country

    return Statistics(
        totalCountries=len(countries),
        largestCountryByArea=largest.common_name,
        smallestCountryByPopulation=smallest.common_name,
        mostSpokenLanguage=most_spoken_language(group_by_language(countries)),
    )
