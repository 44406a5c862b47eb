"""
Nominatim Client Constants

This module contains all constants and enums for the Nominatim geocoding client.
"""

from enum import StrEnum
from typing import Final, FrozenSet

VERSION: Final[str] = "0.1.0"

# HTTP Configuration
DEFAULT_CONNECT_TIMEOUT: Final[float] = 5.0
DEFAULT_TIMEOUT: Final[float] = 30.0
DEFAULT_USER_AGENT: Final[str] = f"geoclient-nominatim/{VERSION}"

# Endpoint paths
PATH_SEARCH: Final[str] = "search"
PATH_REVERSE: Final[str] = "reverse"
PATH_LOOKUP: Final[str] = "lookup"

# Limits
MAX_SEARCH_LIMIT: Final[int] = 40
MAX_ZOOM: Final[int] = 18


class ResponseFormat(StrEnum):
    """Output formats understood by the service, dood!"""

    JSON = "json"
    JSONV2 = "jsonv2"
    GEOJSON = "geojson"
    GEOCODEJSON = "geocodejson"
    XML = "xml"


class PolygonType(StrEnum):
    """Polygon output variants, each enabled with a `polygon_<type>=1` parameter."""

    GEOJSON = "geojson"
    KML = "kml"
    SVG = "svg"
    TEXT = "text"


class OsmType(StrEnum):
    """OSM object type prefixes"""

    NODE = "N"
    WAY = "W"
    RELATION = "R"


DEFAULT_FORMAT: Final[str] = ResponseFormat.JSON.value

# Formats decoded with json.loads()
JSON_FORMATS: Final[FrozenSet[str]] = frozenset(
    {
        ResponseFormat.JSON.value,
        ResponseFormat.JSONV2.value,
        ResponseFormat.GEOJSON.value,
        ResponseFormat.GEOCODEJSON.value,
    }
)
# Formats decoded into an ElementTree element
XML_FORMATS: Final[FrozenSet[str]] = frozenset({ResponseFormat.XML.value})
