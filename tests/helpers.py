import asyncio
from typing import Any, Dict, List, Optional

from countries_api.schemas.country import Country


def make_record(
    name: str,
    region: str,
    population: int,
    area: Optional[float] = None,
    languages: Optional[Dict[str, str]] = None,
    borders: Optional[List[str]] = None,
    latlng: Optional[List[float]] = None,
) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "name": {"common": name, "official": f"Official {name}"},
        "region": region,
        "population": population,
    }
    if area is not None:
        record["area"] = area
    if languages is not None:
        record["languages"] = languages
    if borders is not None:
        record["borders"] = borders
    if latlng is not None:
        record["latlng"] = latlng
    return record


FRANCE = make_record("France", "Europe", 67000000, 551695, {"fra": "French"}, ["DEU", "ESP"], [46, 2])
GERMANY = make_record("Germany", "Europe", 83000000, 357022, {"deu": "German"}, ["FRA"], [51, 9])

WORLD = [
    FRANCE,
    GERMANY,
    make_record("Niger", "Africa", 24206636, 1267000, {"fra": "French"}, ["DZA", "BEN", "NGA"], [16, 8]),
    make_record("Albania", "Europe", 2837743, 28748, {"sqi": "Albanian"}, ["MNE", "GRC"], [41, 20]),
    make_record("Åland Islands", "Europe", 29458, 1580, {"swe": "Swedish"}, [], [60.116667, 19.9]),
    make_record("Canada", "Americas", 38005238, 9984670, {"eng": "English", "fra": "French"}, ["USA"], [60, -95]),
    make_record("Switzerland", "Europe", 8654622, 41284, {"fra": "French", "gsw": "Swiss German", "ita": "Italian", "roh": "Romansh"}, ["AUT", "FRA", "ITA"], [47, 8]),
    make_record("Heard Island and McDonald Islands", "Antarctic", 0, 412, {}, [], [-53.1, 72.5]),
    make_record("Kenya", "Africa", 53771300, 580367, {"eng": "English", "swa": "Swahili"}, ["ETH", "SOM"], [1, 38]),
]


def to_countries(records: List[Dict[str, Any]]) -> List[Country]:
    return [Country.model_validate(r) for r in records]


class FakeRestCountriesClient:
    """Stands in for RestCountriesClient and counts upstream calls."""

    def __init__(self, records=None, error: Optional[Exception] = None, delay: float = 0):
        self.records = WORLD if records is None else records
        self.error = error
        self.delay = delay
        self.calls = 0

    async def fetch_all(self) -> List[Country]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return to_countries(self.records)

    async def aclose(self):
        pass


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

