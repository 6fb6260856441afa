"""Entry point for the cmdgroups_mcp server."""

import logging

from cmdgroups_mcp.server import mcp  # This import also configures logging
from cmdgroups_mcp.services import get_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_config()
    logger.info(
        "Logging configured: level=%s, transport=%s",
        config.settings.log_level,
        config.transport,
    )

    if config.transport == "stdio":
        logger.info("Starting cmdgroups_mcp server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting cmdgroups_mcp server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
        )


if __name__ == "__main__":
    run_server()
