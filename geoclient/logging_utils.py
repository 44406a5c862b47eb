"""
Logging setup for geoclient.

The library emits records through module level loggers under the
``geoclient`` namespace and never touches the root logger. Applications can
route those records with a ``[logging]`` config table, usually through
``ConfigManager.initLogging()``:

    [logging]
    level = "INFO"            # level of the "geoclient" logger
    console = true
    file = "logs/geoclient.log"
    rotate = true
    httpx-level = "WARNING"   # level of the httpx/httpcore loggers

    [logging.logger."geoclient.nominatim"]
    level = "DEBUG"
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List

from geoclient.nominatim.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LIBRARY_LOGGER_NAME = "geoclient"
DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TRANSPORT_LOGGER_NAMES = ("httpx", "httpcore")

# Marks handlers installed by configureLogger(), so reconfiguring leaves application handlers alone
HANDLER_MARKER = "_geoclientHandler"


def getLogLevelByStr(levelStr: Any) -> int:
    """Get log level by name ("debug", "INFO", ...).

    Raises:
        ConfigurationError: If levelStr doesn't name a logging level
    """
    if isinstance(levelStr, int) and not isinstance(levelStr, bool):
        return levelStr
    level = logging.getLevelName(str(levelStr).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Invalid log level {levelStr!r}")
    return level


def _buildHandlers(config: Dict[str, Any], defaultLevel: int) -> List[logging.Handler]:
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))
    handlers: List[logging.Handler] = []

    if config.get("console", False):
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(getLogLevelByStr(config["console-level"]) if "console-level" in config else defaultLevel)
        handlers.append(consoleHandler)

    if "file" in config:
        logPath = Path(config["file"])
        try:
            logPath.parent.mkdir(parents=True, exist_ok=True)
            fileHandler: logging.Handler
            if config.get("rotate", False):
                fileHandler = TimedRotatingFileHandler(
                    filename=logPath,
                    when="midnight",
                    interval=1,
                    backupCount=int(config.get("backup-count", 7)),
                    encoding="utf-8",
                )
            else:
                fileHandler = logging.FileHandler(logPath, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Can't open log file {logPath}: {e}") from e
        fileHandler.setLevel(getLogLevelByStr(config["file-level"]) if "file-level" in config else defaultLevel)
        handlers.append(fileHandler)

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, HANDLER_MARKER, True)
    return handlers


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure a single logger: level, propagation and console/file handlers.

    Recognized keys: level, propagate, format, console, console-level,
    file, file-level, rotate, backup-count. Handlers from a previous call are
    replaced; handlers added by anything else are kept.

    Raises:
        ConfigurationError: On unknown level names or an unusable log file
    """
    if "level" in config:
        localLogger.setLevel(getLogLevelByStr(config["level"]))
    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    handlers = _buildHandlers(config, localLogger.getEffectiveLevel())

    for handler in localLogger.handlers[:]:
        if getattr(handler, HANDLER_MARKER, False):
            localLogger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        localLogger.addHandler(handler)

    logger.debug(f"Configured logger {localLogger.name}: level={localLogger.level}, handlers={len(handlers)}")


def initLogging(config: Dict[str, Any]) -> logging.Logger:
    """Configure the geoclient logger tree from a [logging] table, dood!

    The "geoclient" logger gets WARNING unless the table says otherwise;
    httpx and httpcore, which log every request at INFO, get "httpx-level".
    Per-logger overrides come from the "logger" sub-table.

    Returns:
        The configured "geoclient" logger
    """
    libraryLogger = logging.getLogger(LIBRARY_LOGGER_NAME)
    libraryConfig = {key: value for key, value in config.items() if key not in ("logger", "httpx-level")}
    libraryConfig.setdefault("level", logging.getLevelName(DEFAULT_LOG_LEVEL))
    configureLogger(libraryLogger, libraryConfig)

    transportLevel = getLogLevelByStr(config.get("httpx-level", "WARNING"))
    for loggerName in TRANSPORT_LOGGER_NAMES:
        logging.getLogger(loggerName).setLevel(transportLevel)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.debug(f"Logging configured: {LIBRARY_LOGGER_NAME} level={libraryLogger.level}")
    return libraryLogger
