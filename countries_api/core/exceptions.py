class CountriesAPIError(Exception):
    """Base class for errors raised by the countries service."""


class InvalidDataFormat(CountriesAPIError):
    """The upstream payload did not have the expected shape."""


class UpstreamUnavailable(CountriesAPIError):
    """The upstream source could not be reached, timed out or answered with an error status."""


class CountryNotFound(CountriesAPIError):
    def __init__(self, name: str):
        super().__init__("Not Found: The specified country could not be found")
        self.name = name
