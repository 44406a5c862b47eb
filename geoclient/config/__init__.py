"""Configuration loading for geoclient."""

from geoclient.config.manager import ConfigManager

__all__ = ["ConfigManager"]
