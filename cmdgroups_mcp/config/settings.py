"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import math
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

APP_DIR_NAME = "cmdgroups"
DATA_FILE_NAME = "command_groups.json"


def default_data_dir() -> Path:
    """Per-user data directory for the current platform."""
    if sys.platform == "win32":
        base = os.getenv("APPDATA")
        return Path(base) / APP_DIR_NAME if base else Path.home() / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    base_dir = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base_dir / APP_DIR_NAME


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Execution
    command_timeout: float = field(default=30.0)
    kill_on_timeout: bool = field(default=True)

    # Storage
    data_dir: Path = field(default_factory=default_data_dir)

    # Transport
    transport: str = field(default="http")
    http_host: str = field(default="0.0.0.0")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: float = field(default=1000.0)
    include_traceback: bool = field(default=False)

    # UI
    enable_ui: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from CMDGROUPS_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        data_dir = os.getenv("CMDGROUPS_DATA_DIR", "").strip()
        return cls(
            command_timeout=cls._get_float("CMDGROUPS_COMMAND_TIMEOUT", 30.0),
            kill_on_timeout=cls._get_bool("CMDGROUPS_KILL_ON_TIMEOUT", True),
            data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(),
            transport=cls._get_transport(),
            http_host=os.getenv("CMDGROUPS_HTTP_HOST", "0.0.0.0"),
            http_port=cls._get_int("CMDGROUPS_HTTP_PORT", 8000),
            log_level=os.getenv("CMDGROUPS_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("CMDGROUPS_LOG_COLORS", True),
            log_payloads=cls._get_bool("CMDGROUPS_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_float("CMDGROUPS_SLOW_THRESHOLD_MS", 1000.0),
            include_traceback=cls._get_bool("CMDGROUPS_INCLUDE_TRACEBACK", False),
            enable_ui=cls._get_bool("CMDGROUPS_ENABLE_UI", False),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get a positive, finite float from environment."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %g", key, value, default)
            return default
        if not math.isfinite(parsed) or parsed <= 0:
            logger.warning(
                "%s must be a finite number > 0, got %s, using default %g", key, value, default
            )
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("CMDGROUPS_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "http"
