"""Application configuration.

Wraps Settings and derives the paths and execution limits the services use.
"""

from dataclasses import dataclass, field
from pathlib import Path

from cmdgroups_mcp.config.settings import DATA_FILE_NAME, Settings


@dataclass
class Config:
    """Application configuration."""

    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment."""
        return cls(settings=Settings.from_env())

    @classmethod
    def for_data_dir(cls, data_dir: Path | str) -> "Config":
        """Create config from environment with an explicit data directory."""
        settings = Settings.from_env()
        settings.data_dir = Path(data_dir)
        return cls(settings=settings)

    @property
    def data_file(self) -> Path:
        """Path of the JSON file holding all groups."""
        return self.settings.data_dir / DATA_FILE_NAME

    @property
    def command_timeout(self) -> float:
        """Per-command timeout in seconds."""
        return self.settings.command_timeout

    @property
    def kill_on_timeout(self) -> bool:
        """Whether timed-out process trees are terminated."""
        return self.settings.kill_on_timeout

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port

    @property
    def enable_ui(self) -> bool:
        """Whether MCP-UI results are returned."""
        return self.settings.enable_ui
