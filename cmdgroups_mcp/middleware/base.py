"""Base middleware class for cmdgroups_mcp."""

import logging

from fastmcp.server.middleware import Middleware


class CmdGroupsMiddleware(Middleware):
    """Base middleware holding a configurable logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize middleware.

        Args:
            logger: Optional custom logger. Defaults to module logger.
        """
        self.logger = logger or logging.getLogger(__name__)
