"""cmdgroups_mcp middleware components."""

from cmdgroups_mcp.middleware.base import CmdGroupsMiddleware
from cmdgroups_mcp.middleware.errors import ErrorHandlingMiddleware
from cmdgroups_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "CmdGroupsMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
