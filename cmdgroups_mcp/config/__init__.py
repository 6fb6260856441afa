"""Configuration module for cmdgroups_mcp.

- Config: Main configuration class (paths and execution limits)
- Settings: Environment variable configuration
"""

from cmdgroups_mcp.config.main import Config
from cmdgroups_mcp.config.settings import Settings

__all__ = ["Config", "Settings"]
