"""Single-command and group batch execution."""

import asyncio
import logging
from typing import TYPE_CHECKING

from cmdgroups_mcp.models import CommandGroup, ExecutionOutcome
from cmdgroups_mcp.services.runner import (
    DEFAULT_TIMEOUT,
    execute,
    run_command,
    run_detached,
)

if TYPE_CHECKING:
    from cmdgroups_mcp.services.store import GroupStore

logger = logging.getLogger(__name__)


async def run_one(
    command_line: str,
    detached: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    kill_on_timeout: bool = True,
) -> str:
    """Run one command line in the requested mode.

    Raises:
        CommandError: Any runner failure, unchanged
    """
    if detached:
        return await run_detached(command_line)
    return await run_command(command_line, timeout=timeout, kill_on_timeout=kill_on_timeout)


# Batches in flight, referenced until done
_running_batches: set[asyncio.Task[list[ExecutionOutcome]]] = set()


async def _run_commands(
    group: CommandGroup,
    timeout: float,
    kill_on_timeout: bool,
) -> list[ExecutionOutcome]:
    outcomes: list[ExecutionOutcome] = []
    succeeded = 0
    for index, command in enumerate(group.commands, start=1):
        logger.debug(
            "[%d/%d] %s%s",
            index,
            len(group.commands),
            command.name,
            " (detached)" if command.detached else "",
        )
        result = await execute(
            command.command_line,
            detached=command.detached,
            timeout=timeout,
            kill_on_timeout=kill_on_timeout,
        )
        if result.ok:
            succeeded += 1
        else:
            logger.info("Command %r in group %s failed: %s", command.name, group.id, result.text)
        outcomes.append(ExecutionOutcome.from_result(command.name, result))

    logger.info(
        "Group %s completed: %d/%d commands succeeded",
        group.id,
        succeeded,
        len(outcomes),
    )
    return outcomes


async def run_batch(
    group: CommandGroup,
    timeout: float = DEFAULT_TIMEOUT,
    kill_on_timeout: bool = True,
) -> list[ExecutionOutcome]:
    """Run every command of a group snapshot in order, one at a time.

    Failures never stop the batch: each command gets exactly one outcome,
    either its stdout or an ``Error: ...`` string. The batch runs in its own
    task, so cancelling the caller does not stop it; the caller just stops
    waiting for the outcomes.

    Args:
        group: Snapshot of the group to run
        timeout: Per-command timeout for non-detached commands
        kill_on_timeout: Terminate timed-out process trees

    Returns:
        One ExecutionOutcome per command, in group order
    """
    logger.info(
        "Running group %s (%r): %d command(s)",
        group.id,
        group.name,
        len(group.commands),
    )
    task = asyncio.create_task(_run_commands(group, timeout, kill_on_timeout))
    _running_batches.add(task)
    task.add_done_callback(_running_batches.discard)

    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        if not task.done():
            logger.warning(
                "Caller of group %s went away, batch continues in background", group.id
            )
        raise


async def run_group(
    store: "GroupStore",
    group_id: str,
    timeout: float = DEFAULT_TIMEOUT,
    kill_on_timeout: bool = True,
) -> list[ExecutionOutcome]:
    """Look up a group and run it as a batch.

    Args:
        store: Group store to read the group from
        group_id: Id of the group to run
        timeout: Per-command timeout for non-detached commands
        kill_on_timeout: Terminate timed-out process trees

    Returns:
        One ExecutionOutcome per command, in group order

    Raises:
        GroupNotFoundError: If the group does not exist (nothing is run)
    """
    # Snapshot releases the store lock before any process is spawned
    group = await store.snapshot(group_id)
    return await run_batch(group, timeout=timeout, kill_on_timeout=kill_on_timeout)
