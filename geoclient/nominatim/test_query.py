"""Tests for Nominatim query builders.

Covers default values, parameter encoding of every setter, chaining and
rejection of invalid values.
"""

import unittest

from .constants import OsmType, PolygonType
from .exceptions import InvalidParameterError
from .query import BaseQuery, LookupQuery, QueryInterface, ReverseQuery, SearchQuery


class TestBaseQuery(unittest.TestCase):
    """Test cases for parameters shared by all endpoints."""

    def testDefaults(self):
        """Every variant starts with json format and its own path."""
        for queryClass, path in ((SearchQuery, "search"), (ReverseQuery, "reverse"), (LookupQuery, "lookup")):
            query = queryClass()
            self.assertIsInstance(query, QueryInterface)
            self.assertEqual(query.getPath(), path)
            self.assertEqual(query.getFormat(), "json")
            self.assertEqual(query.getQuery(), {"format": "json"})

    def testInitialParams(self):
        query = SearchQuery({"q": "Angarsk", "format": "xml"})
        self.assertEqual(query.getFormat(), "xml")
        self.assertEqual(query.getQuery()["q"], "Angarsk")

    def testFormat(self):
        query = SearchQuery().format("xml")
        self.assertEqual(query.getFormat(), "xml")
        self.assertEqual(query.getQuery()["format"], "xml")

        # Not validated until decoding
        self.assertEqual(SearchQuery().format("csv").getFormat(), "csv")

    def testBaseSettersKeepSubclass(self):
        """Common setters return the concrete builder, so endpoint setters can follow"""
        query = SearchQuery().format("jsonv2").acceptLanguage("en").addressDetails().limit(3)
        self.assertIsInstance(query, SearchQuery)
        self.assertEqual(query.getQuery()["limit"], "3")

        reverse = ReverseQuery().polygon("geojson").zoom(5)
        self.assertIsInstance(reverse, ReverseQuery)

    def testGetQueryReturnsCopy(self):
        query = SearchQuery()
        params = query.getQuery()
        params["q"] = "changed"
        self.assertNotIn("q", query.getQuery())

    def testFlags(self):
        query = ReverseQuery().addressDetails().extraTags(False).nameDetails(True)
        params = query.getQuery()
        self.assertEqual(params["addressdetails"], "1")
        self.assertEqual(params["extratags"], "0")
        self.assertEqual(params["namedetails"], "1")

    def testLanguageAndEmail(self):
        params = LookupQuery().acceptLanguage("ru,en;q=0.5").email("ops@example.com").getQuery()
        self.assertEqual(params["accept-language"], "ru,en;q=0.5")
        self.assertEqual(params["email"], "ops@example.com")

    def testPolygon(self):
        query = SearchQuery().polygon("geojson").polygon(PolygonType.KML)
        params = query.getQuery()
        self.assertEqual(params["polygon_geojson"], "1")
        self.assertEqual(params["polygon_kml"], "1")

        with self.assertRaises(InvalidParameterError):
            SearchQuery().polygon("wkb")

    def testRepr(self):
        self.assertEqual(repr(SearchQuery()), "SearchQuery({'format': 'json'})")

    def testBaseQueryHasNoPath(self):
        self.assertEqual(BaseQuery().getPath(), "")


class TestSearchQuery(unittest.TestCase):
    """Test cases for /search parameters."""

    def testFreeFormQuery(self):
        query = SearchQuery().query("Angarsk, Russia").limit(5).dedupe()
        self.assertEqual(
            query.getQuery(),
            {"format": "json", "q": "Angarsk, Russia", "limit": "5", "dedupe": "1"},
        )

    def testStructuredQuery(self):
        params = (
            SearchQuery()
            .street("10 Downing Street")
            .city("London")
            .county("Greater London")
            .state("England")
            .country("United Kingdom")
            .postalCode("SW1A 2AA")
            .getQuery()
        )
        self.assertEqual(params["street"], "10 Downing Street")
        self.assertEqual(params["city"], "London")
        self.assertEqual(params["county"], "Greater London")
        self.assertEqual(params["state"], "England")
        self.assertEqual(params["country"], "United Kingdom")
        self.assertEqual(params["postalcode"], "SW1A 2AA")

    def testCountryCodes(self):
        self.assertEqual(SearchQuery().countryCodes(["RU", "us"]).getQuery()["countrycodes"], "ru,us")
        self.assertEqual(SearchQuery().countryCodes("gb").getQuery()["countrycodes"], "gb")

    def testViewBox(self):
        params = SearchQuery().viewBox(103.0, 53.0, 104.0, 52.0).bounded().getQuery()
        self.assertEqual(params["viewbox"], "103.0,53.0,104.0,52.0")
        self.assertEqual(params["bounded"], "1")

    def testExcludePlaceIds(self):
        params = SearchQuery().excludePlaceIds([123, 456]).getQuery()
        self.assertEqual(params["exclude_place_ids"], "123,456")

    def testLimitRange(self):
        self.assertEqual(SearchQuery().limit(40).getQuery()["limit"], "40")
        with self.assertRaises(InvalidParameterError):
            SearchQuery().limit(0)
        with self.assertRaises(InvalidParameterError):
            SearchQuery().limit(41)

    def testLimitRejectsNonIntegers(self):
        self.assertEqual(SearchQuery().limit("5").getQuery()["limit"], "5")
        self.assertEqual(SearchQuery().limit(5.0).getQuery()["limit"], "5")
        for limit in ("abc", None, 2.9, True, float("nan")):
            with self.assertRaises(InvalidParameterError):
                SearchQuery().limit(limit)

    def testViewBoxRejectsBadCorners(self):
        with self.assertRaises(InvalidParameterError):
            SearchQuery().viewBox("left", 53.0, 104.0, 52.0)
        with self.assertRaises(InvalidParameterError):
            SearchQuery().viewBox(103.0, 95.0, 104.0, 52.0)


class TestReverseQuery(unittest.TestCase):
    """Test cases for /reverse parameters."""

    def testLatLon(self):
        params = ReverseQuery().latLon(52.5443, 103.8882).zoom(18).getQuery()
        self.assertEqual(params["lat"], "52.5443")
        self.assertEqual(params["lon"], "103.8882")
        self.assertEqual(params["zoom"], "18")

    def testLatLonRange(self):
        with self.assertRaises(InvalidParameterError):
            ReverseQuery().latLon(91, 0)
        with self.assertRaises(InvalidParameterError):
            ReverseQuery().latLon(0, -181)

    def testLatLonRejectsNonNumbers(self):
        self.assertEqual(ReverseQuery().latLon("52.5", 0).getQuery()["lat"], "52.5")
        for lat, lon in (("x", 0), (None, 0), (0, "y"), (float("nan"), 0), (0, float("inf"))):
            with self.assertRaises(InvalidParameterError):
                ReverseQuery().latLon(lat, lon)

    def testZoomRange(self):
        with self.assertRaises(InvalidParameterError):
            ReverseQuery().zoom(19)
        with self.assertRaises(InvalidParameterError):
            ReverseQuery().zoom(-1)

    def testZoomRejectsNonIntegers(self):
        self.assertEqual(ReverseQuery().zoom(10.0).getQuery()["zoom"], "10")
        for zoom in (2.5, "high", None):
            with self.assertRaises(InvalidParameterError):
                ReverseQuery().zoom(zoom)

    def testOsmIdRejectsNonIntegers(self):
        for osmId in ("abc", 0, 1.5, None):
            with self.assertRaises(InvalidParameterError):
                ReverseQuery().osmId(osmId)

    def testOsmObject(self):
        params = ReverseQuery().osmType("w").osmId(123456).getQuery()
        self.assertEqual(params["osm_type"], "W")
        self.assertEqual(params["osm_id"], "123456")
        self.assertEqual(ReverseQuery().osmType(OsmType.RELATION).getQuery()["osm_type"], "R")

        with self.assertRaises(InvalidParameterError):
            ReverseQuery().osmType("X")


class TestLookupQuery(unittest.TestCase):
    """Test cases for /lookup parameters."""

    def testOsmIds(self):
        self.assertEqual(LookupQuery().osmIds(["R2623018", "n107775"]).getQuery()["osm_ids"], "R2623018,N107775")
        self.assertEqual(LookupQuery().osmIds("R2623018, W50637691").getQuery()["osm_ids"], "R2623018,W50637691")

    def testInvalidOsmIds(self):
        for osmIds in ([], ["2623018"], ["X123"], ["R12a"]):
            with self.assertRaises(InvalidParameterError):
                LookupQuery().osmIds(osmIds)


if __name__ == "__main__":
    unittest.main()
