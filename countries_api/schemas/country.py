from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Union

_EMPTY_VALUES = {"area": float, "languages": dict, "borders": list, "latlng": list}


class CountryName(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    common: str
    official: Optional[str] = None


class Country(BaseModel):
    """One REST Countries record, restricted to the fields the API serves."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: CountryName
    region: str
    population: Union[int, float]
    area: float = 0
    languages: Dict[str, str] = Field(default_factory=dict)
    borders: List[str] = Field(default_factory=list)
    latlng: List[float] = Field(default_factory=list)

    @field_validator("area", "languages", "borders", "latlng", mode="before")
    @classmethod
    def _null_as_default(cls, value, info):
        # REST Countries sends null for some territories
        if value is None:
            return _EMPTY_VALUES[info.field_name]()
        return value

    @property
    def common_name(self) -> str:
        return self.name.common


class CountryDetails(BaseModel):
    commonName: str
    population: Union[int, float]
    languages: Dict[str, str] = {}
    borders: List[str] = []
    latlng: List[float] = []


class CountryQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    region: Optional[str] = None
    minPopulation: Optional[int] = Field(default=None, ge=0)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)


class SearchCountryResponse(BaseModel):
    total: int
    page: int
    limit: int
    data: List[CountryDetails] = []


class RegionSummary(BaseModel):
    countries: List[str] = []
    totalPopulation: Union[int, float] = 0


class LanguageSummary(BaseModel):
    countries: List[str] = []
    totalSpeakers: Union[int, float] = 0


class Statistics(BaseModel):
    totalCountries: int
    largestCountryByArea: Optional[str] = None
    smallestCountryByPopulation: Optional[str] = None
    mostSpokenLanguage: Optional[str] = None
