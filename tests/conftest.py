from typing import Callable, List

import httpx
import pytest

from countries_api.schemas.country import Country
from countries_api.services.restcountries_client import RestCountriesClient

from tests.helpers import WORLD, FakeClock, to_countries


@pytest.fixture
def world_countries() -> List[Country]:
    return to_countries(WORLD)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_rest_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], RestCountriesClient]:
    """Build a RestCountriesClient whose HTTP traffic goes to `handler`."""

    def build(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return RestCountriesClient(
            base_url="https://countries.test/v3.1/",
            timeout_ms=500,
            client=http_client,
        )

    return build
