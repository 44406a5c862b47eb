"""
Configuration management for geoclient.

Settings are read from a TOML file:

    [nominatim]
    base-url = "https://nominatim.openstreetmap.org"
    connect-timeout = 5
    timeout = 30
    accept-language = "en"
    email = "ops@example.com"
    user-agent = "my-app/1.0"

    [logging]
    level = "INFO"
    console = true
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import tomli

from geoclient.logging_utils import initLogging
from geoclient.nominatim import ConfigurationError, NominatimClient
from geoclient.nominatim.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads and validates geoclient configuration from a TOML file."""

    def __init__(self, configPath: str = "geoclient.toml"):
        """Load configuration from configPath.

        Raises:
            ConfigurationError: If the file is missing, isn't valid TOML or lacks nominatim.base-url
        """
        self.configPath = configPath
        self.config = self._loadConfig()

    def _loadConfig(self) -> Dict[str, Any]:
        configFile = Path(self.configPath)
        if not configFile.exists():
            raise ConfigurationError(f"Configuration file {self.configPath} not found")

        try:
            with open(configFile, "rb") as f:
                config = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration {self.configPath}: {e}") from e

        if not str(config.get("nominatim", {}).get("base-url", "")).strip():
            raise ConfigurationError("nominatim.base-url not found in configuration")

        logger.info(f"Configuration loaded from {self.configPath}")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get top level configuration value by key."""
        return self.config.get(key, default)

    def getNominatimConfig(self) -> Dict[str, Any]:
        return self.get("nominatim", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        return self.get("logging", {})

    def initLogging(self) -> logging.Logger:
        """Apply the [logging] table to the geoclient loggers.

        Raises:
            ConfigurationError: On invalid log levels or an unusable log file
        """
        return initLogging(self.getLoggingConfig())

    def getBaseUrl(self) -> str:
        return str(self.getNominatimConfig()["base-url"]).strip()

    def createClient(self, httpClient: Optional[httpx.Client] = None) -> NominatimClient:
        """Build NominatimClient from the [nominatim] section, dood!

        Args:
            httpClient: Optional preconfigured httpx.Client passed through to NominatimClient

        Raises:
            ConfigurationError: If the settings are rejected by NominatimClient
        """
        nominatimConfig = self.getNominatimConfig()
        return NominatimClient(
            self.getBaseUrl(),
            httpClient,
            connectTimeout=float(nominatimConfig.get("connect-timeout", DEFAULT_CONNECT_TIMEOUT)),
            timeout=float(nominatimConfig.get("timeout", DEFAULT_TIMEOUT)),
            acceptLanguage=nominatimConfig.get("accept-language"),
            email=nominatimConfig.get("email"),
            userAgent=nominatimConfig.get("user-agent", DEFAULT_USER_AGENT),
        )
