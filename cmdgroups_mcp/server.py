"""cmdgroups_mcp FastMCP server.

This is a thin wrapper that wires together the MCP server with tools and resources.
All business logic is delegated to the tools/, resources/, and services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from cmdgroups_mcp.config import Settings
from cmdgroups_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from cmdgroups_mcp.resources import group_resource, list_groups_resource
from cmdgroups_mcp.services import get_config, get_store
from cmdgroups_mcp.tools import (
    add_command,
    create_group,
    delete_command,
    delete_group,
    execute_command,
    execute_group,
    export_data,
    import_data,
    list_groups,
)
from cmdgroups_mcp.utils.console import MCPRequestFormatter


def _configure_logging() -> None:
    """Configure colorful logging for the cmdgroups_mcp package.

    This is called at module load time to ensure logging is configured
    before any loggers are used, regardless of how the server is started.
    """
    settings = Settings.from_env()
    log_level = settings.log_level
    use_colors = settings.log_colors

    # Disable colors if not a TTY
    if not sys.stderr.isatty():
        use_colors = False

    pkg_logger = logging.getLogger("cmdgroups_mcp")
    pkg_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Only add handler if not already configured
    if not pkg_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        pkg_logger.addHandler(handler)
        pkg_logger.propagate = False

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "fastmcp",
        "starlette",
        "anyio",
    ]:
        lg = logging.getLogger(noisy_logger)
        lg.setLevel(logging.WARNING)
        lg.handlers = []
        lg.propagate = False

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.WARNING)


# Configure logging at module load time
_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Load persisted groups at startup.

    A missing or unreadable data file is not fatal: the server starts with
    no groups.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the data file path and loaded group count
    """
    logger.info("cmdgroups_mcp server starting up")

    config = get_config()
    store = get_store()
    count = await store.load()
    logger.info(
        "Loaded %d group(s) from %s (command_timeout=%gs, kill_on_timeout=%s)",
        count,
        config.data_file,
        config.command_timeout,
        config.kill_on_timeout,
    )
    logger.info("cmdgroups_mcp server ready to accept connections")

    try:
        yield {"data_file": str(config.data_file), "groups": count}
    finally:
        # Detached commands are not tracked, nothing to clean up
        logger.info("cmdgroups_mcp server shutting down (%d group(s))", store.group_count)


def configure_middleware(server: FastMCP) -> None:
    """Configure middleware stack for the server.

    Adds middleware in order: ErrorHandling -> Logging (with integrated timing)

    Args:
        server: The FastMCP server to configure.
    """
    settings = get_config().settings

    # First added = innermost
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=settings.slow_threshold_ms,
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with all middleware and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP(
        "cmdgroups_mcp",
        lifespan=app_lifespan,
    )

    configure_middleware(server)

    # Group management
    server.tool()(create_group)
    server.tool()(list_groups)
    server.tool()(delete_group)
    server.tool()(add_command)
    server.tool()(delete_command)
    server.tool()(export_data)
    server.tool()(import_data)

    # Execution
    server.tool()(execute_command)
    # Returns UIResource content when the UI is enabled
    server.tool(output_schema=None)(execute_group)

    server.resource("groups://list")(list_groups_resource)
    server.resource("groups://{group_id}")(group_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
