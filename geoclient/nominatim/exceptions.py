"""
Nominatim Client Exceptions

This module contains custom exception classes raised by the Nominatim client.
Transport failures are not wrapped: httpx exceptions reach the caller as is.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class NominatimError(Exception):
    """Base exception class for all Nominatim client errors, dood!

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        logger.debug(f"{type(self).__name__}: {message}")

    def __str__(self) -> str:
        return self.message


class ConfigurationError(NominatimError):
    """Raised when the client cannot be constructed from the given settings.

    This occurs when:
    - The base URL is empty
    - An injected HTTP client has no base URL, or a different one
    - A configuration file is missing or malformed
    """


class InvalidParameterError(NominatimError, ValueError):
    """Raised when a query setter receives a value outside its domain."""


class UnsupportedFormatError(NominatimError):
    """Raised when a response is requested in a format the client can't decode.

    The offending request and response are kept for diagnostics.

    Attributes:
        format: The requested response format
        request: The HTTP request that was sent
        response: The HTTP response that was received
    """

    def __init__(
        self,
        format: str,
        request: Optional[httpx.Request] = None,
        response: Optional[httpx.Response] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message or f"Format is not supported: {format!r}")
        self.format = format
        self.request = request
        self.response = response


class ResponseDecodeError(NominatimError, ValueError):
    """Raised when a response body can't be parsed in the requested format.

    The parser's own exception is available as `__cause__`.

    Attributes:
        format: The requested response format
        body: Raw response body
    """

    def __init__(self, format: str, body: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Failed to decode {format} response")
        self.format = format
        self.body = body
