"""
Nominatim query builders

This module defines the QueryInterface that NominatimClient.find() consumes and
the three concrete builders for the /search, /reverse and /lookup endpoints.
Every setter stores its value as a string parameter and returns the query
itself, so calls can be chained:

    >>> query = client.newSearch().query("Angarsk, Russia").limit(5).addressDetails()
    >>> results = client.find(query)
"""

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Self, Union

from .constants import (
    DEFAULT_FORMAT,
    MAX_SEARCH_LIMIT,
    MAX_ZOOM,
    PATH_LOOKUP,
    PATH_REVERSE,
    PATH_SEARCH,
    OsmType,
    PolygonType,
)
from .exceptions import InvalidParameterError

OSM_ID_PATTERN = re.compile(r"^[NWR]\d+$")


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _toNumber(name: str, value: Any) -> float:
    """Parse value as a finite number; bools are rejected even though they are ints"""
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from e
    if math.isnan(number) or math.isinf(number):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return number


def _toInteger(name: str, value: Any, minimum: int, maximum: Optional[int] = None) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        number = _toNumber(name, value)
        if not number.is_integer():
            raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if number < minimum or (maximum is not None and number > maximum):
        bounds = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        raise InvalidParameterError(f"{name} must be {bounds}, got {value!r}")
    return int(number)


def _toCoordinate(name: str, value: Any, limit: float) -> float:
    number = _toNumber(name, value)
    if not -limit <= number <= limit:
        raise InvalidParameterError(f"{name} must be between {-limit:g} and {limit:g}, got {value!r}")
    return number


def _joinValues(values: Union[str, Iterable[Union[str, int]]]) -> str:
    if isinstance(values, str):
        return values
    return ",".join(str(value) for value in values)


class QueryInterface(ABC):
    """
    Contract between query builders and NominatimClient.find(), dood!

    Any object providing these three methods can be passed to find().
    """

    @abstractmethod
    def getPath(self) -> str:
        """Endpoint path relative to the service base URL (e.g. "search")"""
        pass

    @abstractmethod
    def getQuery(self) -> Dict[str, str]:
        """Parameters to be URL-encoded into the query string"""
        pass

    @abstractmethod
    def getFormat(self) -> str:
        """Requested response format (e.g. "json" or "xml")"""
        pass


class BaseQuery(QueryInterface):
    """Common parameters shared by all endpoints.

    Subclasses only have to set PATH and add endpoint specific setters.
    """

    PATH: str = ""

    def __init__(self, params: Optional[Dict[str, str]] = None):
        self._query: Dict[str, str] = {"format": DEFAULT_FORMAT}
        if params:
            self._query.update(params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._query!r})"

    def getPath(self) -> str:
        return self.PATH

    def getQuery(self) -> Dict[str, str]:
        # Copy, so callers can't mutate the builder behind its back
        return dict(self._query)

    def getFormat(self) -> str:
        return self._query.get("format", DEFAULT_FORMAT)

    def format(self, format: str) -> Self:
        """Set the response format.

        The value is not checked here: NominatimClient.decodeResponse() raises
        UnsupportedFormatError for formats it can't decode.
        """
        self._query["format"] = str(format)
        return self

    def acceptLanguage(self, language: str) -> Self:
        """Preferred language(s) for results, e.g. "en" or "ru,en;q=0.5" """
        self._query["accept-language"] = language
        return self

    def email(self, address: str) -> Self:
        """Contact address sent along with the request, as the usage policy asks."""
        self._query["email"] = address
        return self

    def addressDetails(self, enabled: bool = True) -> Self:
        self._query["addressdetails"] = _flag(enabled)
        return self

    def extraTags(self, enabled: bool = True) -> Self:
        self._query["extratags"] = _flag(enabled)
        return self

    def nameDetails(self, enabled: bool = True) -> Self:
        self._query["namedetails"] = _flag(enabled)
        return self

    def polygon(self, polygonType: Union[str, PolygonType]) -> Self:
        """Include the place outline in the given geometry format.

        Args:
            polygonType: One of "geojson", "kml", "svg" or "text"

        Raises:
            InvalidParameterError: If polygonType is unknown
        """
        try:
            value = PolygonType(polygonType)
        except ValueError:
            raise InvalidParameterError(f"Unknown polygon type: {polygonType!r}")
        self._query[f"polygon_{value.value}"] = "1"
        return self


class SearchQuery(BaseQuery):
    """Forward geocoding: free-form or structured address search."""

    PATH = PATH_SEARCH

    def query(self, text: str) -> Self:
        """Free-form query string, e.g. "Angarsk, Russia" """
        self._query["q"] = text
        return self

    def street(self, street: str) -> Self:
        """House number and street name"""
        self._query["street"] = street
        return self

    def city(self, city: str) -> Self:
        self._query["city"] = city
        return self

    def county(self, county: str) -> Self:
        self._query["county"] = county
        return self

    def state(self, state: str) -> Self:
        self._query["state"] = state
        return self

    def country(self, country: str) -> Self:
        self._query["country"] = country
        return self

    def postalCode(self, postalCode: str) -> Self:
        self._query["postalcode"] = postalCode
        return self

    def countryCodes(self, codes: Union[str, Iterable[str]]) -> Self:
        """Restrict results to the given ISO 3166-1 alpha-2 codes (e.g. ["ru", "us"])"""
        self._query["countrycodes"] = _joinValues(codes).lower()
        return self

    def viewBox(self, left: float, top: float, right: float, bottom: float) -> Self:
        """Preferred area to search in, as two opposite corners (lon, lat)."""
        corners = [
            _toCoordinate("viewbox left", left, 180.0),
            _toCoordinate("viewbox top", top, 90.0),
            _toCoordinate("viewbox right", right, 180.0),
            _toCoordinate("viewbox bottom", bottom, 90.0),
        ]
        self._query["viewbox"] = _joinValues(corners)
        return self

    def bounded(self, enabled: bool = True) -> Self:
        """Only return results inside the viewbox"""
        self._query["bounded"] = _flag(enabled)
        return self

    def excludePlaceIds(self, placeIds: Union[str, Iterable[Union[str, int]]]) -> Self:
        self._query["exclude_place_ids"] = _joinValues(placeIds)
        return self

    def limit(self, limit: int) -> Self:
        """Maximum number of results (1-40)

        Raises:
            InvalidParameterError: If limit is not an integer in range
        """
        self._query["limit"] = str(_toInteger("limit", limit, 1, MAX_SEARCH_LIMIT))
        return self

    def dedupe(self, enabled: bool = True) -> Self:
        self._query["dedupe"] = _flag(enabled)
        return self


class ReverseQuery(BaseQuery):
    """Reverse geocoding: find the nearest place to a coordinate or OSM object."""

    PATH = PATH_REVERSE

    def latLon(self, lat: float, lon: float) -> Self:
        """Coordinate to look up, in WGS84 degrees.

        Raises:
            InvalidParameterError: If coordinates are not numbers or out of range
        """
        latitude = _toCoordinate("Latitude", lat, 90.0)
        longitude = _toCoordinate("Longitude", lon, 180.0)
        self._query["lat"] = str(latitude)
        self._query["lon"] = str(longitude)
        return self

    def osmType(self, osmType: Union[str, OsmType]) -> Self:
        """OSM object type: "N" (node), "W" (way) or "R" (relation)"""
        try:
            value = OsmType(str(osmType).upper())
        except ValueError:
            raise InvalidParameterError(f"Unknown OSM type: {osmType!r}")
        self._query["osm_type"] = value.value
        return self

    def osmId(self, osmId: int) -> Self:
        self._query["osm_id"] = str(_toInteger("osm_id", osmId, 1))
        return self

    def zoom(self, zoom: int) -> Self:
        """Level of detail, 0 (country) to 18 (building)"""
        self._query["zoom"] = str(_toInteger("zoom", zoom, 0, MAX_ZOOM))
        return self


class LookupQuery(BaseQuery):
    """Look places up by their OSM ids."""

    PATH = PATH_LOOKUP

    def osmIds(self, osmIds: Union[str, Iterable[str]]) -> Self:
        """
        Args:
            osmIds: Ids with type prefix, e.g. ["R2623018", "N107775"] or "R2623018,N107775"

        Raises:
            InvalidParameterError: If any id lacks a N/W/R prefix or numeric part
        """
        if isinstance(osmIds, str):
            osmIds = osmIds.split(",")
        ids = [osmId.strip().upper() for osmId in osmIds]
        if not ids:
            raise InvalidParameterError("At least one OSM id is required")
        for osmId in ids:
            if not OSM_ID_PATTERN.match(osmId):
                raise InvalidParameterError(f"Invalid OSM id: {osmId!r}")
        self._query["osm_ids"] = ",".join(ids)
        return self
