"""
Nominatim Geocoding Client Library

This module provides a Python client for Nominatim-compatible geocoding
services (address search, reverse geocoding and OSM lookup) built on httpx.

Example usage:
    from geoclient.nominatim import NominatimClient

    client = NominatimClient("https://nominatim.openstreetmap.org", acceptLanguage="en")

    # Forward geocoding
    results = client.find(client.newSearch().query("Angarsk, Russia").limit(5))

    # Reverse geocoding, as XML
    root = client.find(client.newReverse().latLon(52.5443, 103.8882).format("xml"))

    # OSM lookup
    places = client.find(client.newLookup().osmIds(["R2623018"]))
"""

from geoclient.nominatim.client import NominatimClient
from geoclient.nominatim.constants import OsmType, PolygonType, ResponseFormat
from geoclient.nominatim.exceptions import (
    ConfigurationError,
    InvalidParameterError,
    NominatimError,
    ResponseDecodeError,
    UnsupportedFormatError,
)
from geoclient.nominatim.query import (
    BaseQuery,
    LookupQuery,
    QueryInterface,
    ReverseQuery,
    SearchQuery,
)

__all__ = [
    "NominatimClient",
    "QueryInterface",
    "BaseQuery",
    "SearchQuery",
    "ReverseQuery",
    "LookupQuery",
    "ResponseFormat",
    "PolygonType",
    "OsmType",
    "NominatimError",
    "ConfigurationError",
    "InvalidParameterError",
    "UnsupportedFormatError",
    "ResponseDecodeError",
]
