"""Command and group execution tools."""

import logging

from mcp_ui_server.core import UIResource

from cmdgroups_mcp.services import (
    CommandError,
    GroupNotFoundError,
    get_config,
    get_store,
    run_batch,
    run_one,
)
from cmdgroups_mcp.tools.handlers import format_outcomes
from cmdgroups_mcp.ui import create_results_ui

logger = logging.getLogger(__name__)


async def execute_command(command: str, detached: bool = False) -> str:
    """Run a single command line.

    Args:
        command: Command line, run by the host shell (sh -c / cmd /C).
        detached: Launch in the background and return immediately.

    Returns:
        Captured stdout, a launch acknowledgement for detached commands,
        or an error message.
    """
    config = get_config()
    try:
        return await run_one(
            command,
            detached=detached,
            timeout=config.command_timeout,
            kill_on_timeout=config.kill_on_timeout,
        )
    except CommandError as e:
        return f"Error: {e}"


async def execute_group(group_id: str) -> list[UIResource] | str:
    """Run every command of a group in order.

    A failing command never stops the batch; each command reports either its
    output or an error.

    Args:
        group_id: Id of the group to run.

    Returns:
        Per-command results (interactive UI when enabled), or an error message
        if the group does not exist.
    """
    config = get_config()
    store = get_store()

    try:
        group = await store.snapshot(group_id)
    except GroupNotFoundError as e:
        return f"Error: {e}"

    outcomes = await run_batch(
        group,
        timeout=config.command_timeout,
        kill_on_timeout=config.kill_on_timeout,
    )

    if config.enable_ui:
        ui_resource = await create_results_ui(group.id, group.name, outcomes)
        return [ui_resource]
    return format_outcomes(group.name, outcomes)
