"""Local process runner for command lines.

Two modes:
- run_command: wait for exit (bounded by a timeout) and capture output
- run_detached: launch and disown, nothing is tracked after creation
"""

import asyncio
import logging

from cmdgroups_mcp.models import CommandResult
from cmdgroups_mcp.services.errors import (
    CommandError,
    CommandExecutionError,
    CommandLaunchError,
    CommandTimeoutError,
)
from cmdgroups_mcp.utils.process import terminate_process_tree
from cmdgroups_mcp.utils.shell import new_process_group_kwargs, shell_argv

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0
DETACHED_STARTED = "Process started successfully in background"


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


async def run_command(
    command_line: str,
    timeout: float = DEFAULT_TIMEOUT,
    kill_on_timeout: bool = True,
) -> str:
    """Run a command line through the host shell and wait for it to exit.

    Args:
        command_line: Line handed verbatim to ``sh -c`` / ``cmd /C``
        timeout: Seconds to wait for exit
        kill_on_timeout: Terminate the process tree when the timeout fires
            or the caller is cancelled. When False the child is left running.

    Returns:
        Captured stdout (invalid UTF-8 replaced)

    Raises:
        CommandLaunchError: If the process could not be created
        CommandExecutionError: If the process exited non-zero
        CommandTimeoutError: If the process did not exit within ``timeout``
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *shell_argv(command_line),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            **new_process_group_kwargs(),
        )
    except OSError as e:
        logger.warning("Failed to start %r: %s", command_line, e)
        raise CommandLaunchError(command_line, e) from e

    logger.debug("Started pid %d: %r (timeout=%gs)", process.pid, command_line, timeout)

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except TimeoutError:
        logger.warning(
            "Command timed out after %gs (pid=%d): %r", timeout, process.pid, command_line
        )
        if kill_on_timeout:
            await terminate_process_tree(process)
            logger.info("Terminated timed-out pid %d", process.pid)
        raise CommandTimeoutError(timeout) from None
    except asyncio.CancelledError:
        if kill_on_timeout:
            logger.info("Cancelled while waiting for pid %d, terminating", process.pid)
            await terminate_process_tree(process)
        raise

    returncode = process.returncode if process.returncode is not None else 0
    if returncode != 0:
        logger.info("Command exited %d: %r", returncode, command_line)
        raise CommandExecutionError(_decode(stderr), returncode)

    logger.debug("Command completed (pid=%d, %d bytes)", process.pid, len(stdout or b""))
    return _decode(stdout)


async def run_detached(command_line: str) -> str:
    """Launch a command line and return without waiting for it.

    All standard streams go to the null device. No handle or PID is kept;
    the process is never monitored or reaped by this server.

    Returns:
        Acknowledgement text once the OS has created the process

    Raises:
        CommandLaunchError: If the process could not be created
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *shell_argv(command_line),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            **new_process_group_kwargs(),
        )
    except OSError as e:
        logger.warning("Failed to start detached %r: %s", command_line, e)
        raise CommandLaunchError(command_line, e) from e

    logger.info("Started detached pid %d: %r", process.pid, command_line)
    return DETACHED_STARTED


async def execute(
    command_line: str,
    detached: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    kill_on_timeout: bool = True,
) -> CommandResult:
    """Run in the requested mode and fold runner errors into a result.

    Returns:
        CommandResult with ok=False and the error message on failure
    """
    try:
        if detached:
            text = await run_detached(command_line)
        else:
            text = await run_command(
                command_line, timeout=timeout, kill_on_timeout=kill_on_timeout
            )
    except CommandError as e:
        return CommandResult.failure(str(e))
    return CommandResult.success(text)
