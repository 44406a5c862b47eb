"""
Nominatim Client

This module provides the NominatimClient class: it turns query builders into
GET requests against a Nominatim-compatible service and decodes the responses
as JSON or XML.
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    JSON_FORMATS,
    XML_FORMATS,
)
from .exceptions import ConfigurationError, ResponseDecodeError, UnsupportedFormatError
from .query import BaseQuery, LookupQuery, QueryInterface, ReverseQuery, SearchQuery

logger = logging.getLogger(__name__)


def _normalizeUrl(url: Any) -> str:
    """Normalize URL for comparison: lowercase scheme and host, no trailing slash"""
    return str(httpx.URL(str(url))).rstrip("/")


class NominatimClient:
    """Client for Nominatim-compatible geocoding services, dood!

    Builds GET requests from query objects, sends them with httpx and decodes
    the body according to the query format. Errors are never retried or
    swallowed: transport failures and non-2xx responses surface as httpx
    exceptions.

    Example:
        >>> from geoclient.nominatim import NominatimClient
        >>>
        >>> with NominatimClient("https://nominatim.openstreetmap.org") as client:
        ...     search = client.newSearch().query("Angarsk, Russia").limit(1)
        ...     results = client.find(search)
        ...     print(results[0]["display_name"])

    A preconfigured httpx.Client may be injected (e.g. for proxies or tests),
    as long as its base_url matches the application URL:
        >>> httpClient = httpx.Client(base_url="https://nominatim.openstreetmap.org")
        >>> client = NominatimClient("https://nominatim.openstreetmap.org", httpClient)

    Attributes:
        baseUrl: Service base URL without trailing slash
        acceptLanguage: Default accept-language applied to new queries
        emailAddress: Default contact email applied to new queries
    """

    __slots__ = (
        "baseUrl",
        "acceptLanguage",
        "emailAddress",
        "_httpClient",
        "_ownsHttpClient",
    )

    def __init__(
        self,
        baseUrl: str,
        httpClient: Optional[httpx.Client] = None,
        *,
        connectTimeout: float = DEFAULT_CONNECT_TIMEOUT,
        timeout: float = DEFAULT_TIMEOUT,
        acceptLanguage: Optional[str] = None,
        email: Optional[str] = None,
        userAgent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize the Nominatim client.

        Args:
            baseUrl: Application base URL (e.g. "https://nominatim.openstreetmap.org")
            httpClient: Optional preconfigured httpx.Client. Its base_url must match baseUrl
            connectTimeout: Connect timeout in seconds, used only when httpClient is not given (default: 5)
            timeout: Read/write/pool timeout in seconds, used only when httpClient is not given (default: 30)
            acceptLanguage: Optional language for results applied to every new query (default: None)
            email: Optional contact email applied to every new query (default: None)
            userAgent: User-Agent header, used only when httpClient is not given

        Raises:
            ConfigurationError: If baseUrl is empty, malformed or relative,
                or httpClient has no or a different base_url
        """
        if not baseUrl or not baseUrl.strip():
            raise ConfigurationError("Application URL cannot be empty")

        self.baseUrl = baseUrl.strip().rstrip("/")
        try:
            normalizedUrl = _normalizeUrl(self.baseUrl)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Malformed application URL {self.baseUrl!r}: {e}") from e
        if not httpx.URL(normalizedUrl).host:
            raise ConfigurationError(f"Application URL {self.baseUrl!r} must be absolute")
        self.acceptLanguage = acceptLanguage
        self.emailAddress = email

        if httpClient is None:
            self._httpClient = httpx.Client(
                base_url=self.baseUrl,
                timeout=httpx.Timeout(timeout, connect=connectTimeout),
                headers={"User-Agent": userAgent},
            )
            self._ownsHttpClient = True
            logger.debug(f"Created HTTP client for {self.baseUrl}")
        else:
            if not httpClient.base_url.host:
                raise ConfigurationError("HTTP client must be configured with a base_url")
            if _normalizeUrl(httpClient.base_url) != normalizedUrl:
                raise ConfigurationError(
                    f"HTTP client base_url {str(httpClient.base_url)!r} "
                    f"does not match application URL {self.baseUrl!r}"
                )
            self._httpClient = httpClient
            self._ownsHttpClient = False

        logger.debug(f"NominatimClient initialized for {self.baseUrl}")

    def __enter__(self) -> "NominatimClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if it was created by this instance.

        Injected clients belong to the caller and are left open.
        """
        if self._ownsHttpClient and not self._httpClient.is_closed:
            self._httpClient.close()
            logger.debug("HTTP client closed")

    def getClient(self) -> httpx.Client:
        """Underlying httpx.Client, for requests this class doesn't cover"""
        return self._httpClient

    def _applyDefaults(self, query: BaseQuery) -> None:
        if self.acceptLanguage:
            query.acceptLanguage(self.acceptLanguage)
        if self.emailAddress:
            query.email(self.emailAddress)

    def newSearch(self) -> SearchQuery:
        """Fresh /search query with client defaults applied"""
        query = SearchQuery()
        self._applyDefaults(query)
        return query

    def newReverse(self) -> ReverseQuery:
        """Fresh /reverse query with client defaults applied"""
        query = ReverseQuery()
        self._applyDefaults(query)
        return query

    def newLookup(self) -> LookupQuery:
        """Fresh /lookup query with client defaults applied"""
        query = LookupQuery()
        self._applyDefaults(query)
        return query

    def buildUrl(self, query: QueryInterface) -> str:
        """Full request URL: base URL, "/", path and form-encoded query string.

        Spaces are encoded as "+", as urlencode() does by default.
        """
        url = f"{self.baseUrl}/{query.getPath()}"
        params = query.getQuery()
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def find(self, query: QueryInterface) -> Any:
        """Send the query and return the decoded response, dood!

        Args:
            query: Any object implementing getPath(), getQuery() and getFormat()

        Returns:
            dict or list for JSON formats, xml.etree.ElementTree.Element for XML

        Raises:
            httpx.RequestError: On connection failure or timeout
            httpx.HTTPStatusError: On non-2xx response
            UnsupportedFormatError: If the query format can't be decoded
            ResponseDecodeError: If the body is malformed
        """
        url = self.buildUrl(query)
        logger.debug(f"Making request to {url}")

        request = self._httpClient.build_request("GET", url)
        response = self._httpClient.send(request)
        response.raise_for_status()
        logger.debug(f"API request successful: {response.status_code}")

        return self.decodeResponse(query.getFormat(), request, response)

    def decodeResponse(self, format: str, request: httpx.Request, response: httpx.Response) -> Any:
        """Decode response body according to the requested format.

        Args:
            format: Requested response format
            request: Request that was sent, kept for error reporting
            response: Received response

        Returns:
            Parsed JSON (dict or list) or the root XML element

        Raises:
            UnsupportedFormatError: If format is neither a JSON format nor "xml"
            ResponseDecodeError: If the body can't be parsed
        """
        if format in JSON_FORMATS:
            try:
                return json.loads(response.text)
            except json.JSONDecodeError as e:
                raise ResponseDecodeError(format, response.text, f"Failed to parse JSON response: {e}") from e

        if format in XML_FORMATS:
            try:
                return ET.fromstring(response.content)
            except ET.ParseError as e:
                raise ResponseDecodeError(format, response.text, f"Failed to parse XML response: {e}") from e

        raise UnsupportedFormatError(format, request, response)
