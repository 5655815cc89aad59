"""
Runtime settings read from the environment.

BROWSER_FINDER_COMMAND_TIMEOUT - seconds allowed for each OS query (default 30)
BROWSER_FINDER_LOG_LEVEL       - log level used by the MCP server (default INFO)
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        logger.warning(f"Invalid BROWSER_FINDER_COMMAND_TIMEOUT {value!r}, using {DEFAULT_COMMAND_TIMEOUT}")
        return DEFAULT_COMMAND_TIMEOUT

    if timeout <= 0:
        logger.warning(f"BROWSER_FINDER_COMMAND_TIMEOUT must be positive, using {DEFAULT_COMMAND_TIMEOUT}")
        return DEFAULT_COMMAND_TIMEOUT

    return timeout


def load_settings() -> Settings:
    """Build settings from the current environment."""
    timeout = os.environ.get("BROWSER_FINDER_COMMAND_TIMEOUT")
    log_level = os.environ.get("BROWSER_FINDER_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    return Settings(
        command_timeout=_parse_timeout(timeout) if timeout else DEFAULT_COMMAND_TIMEOUT,
        log_level=log_level.upper(),
    )
