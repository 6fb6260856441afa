"""Process tree termination.

- POSIX: SIGTERM to the process group, wait, then SIGKILL
- Windows: CTRL_BREAK_EVENT, wait, ``taskkill /T /F``, then kill()
"""

import asyncio
import logging
import os
import signal
from asyncio.subprocess import Process

from cmdgroups_mcp.utils.shell import IS_WINDOWS, new_process_group_kwargs

logger = logging.getLogger(__name__)

GRACEFUL_TIMEOUT: float = 2.0


async def terminate_process_tree(
    process: Process,
    graceful_timeout: float = GRACEFUL_TIMEOUT,
) -> None:
    """Terminate a process and everything in its process group.

    Args:
        process: Subprocess started with ``new_process_group_kwargs()``
        graceful_timeout: Seconds to wait before escalating to a hard kill
    """
    if process.returncode is not None:
        return

    if IS_WINDOWS:
        await _terminate_windows(process, graceful_timeout)
    else:
        await _terminate_posix(process, graceful_timeout)


async def _wait(process: Process, timeout: float) -> bool:
    try:
        await asyncio.wait_for(process.wait(), timeout=timeout)
        return True
    except TimeoutError:
        return False


def _signal_group(process: Process, sig: signal.Signals) -> None:
    try:
        os.killpg(os.getpgid(process.pid), sig)
        logger.debug("Sent %s to process group of pid %d", sig.name, process.pid)
    except (ProcessLookupError, PermissionError):
        # Group already gone or not ours, fall back to the single process
        try:
            process.send_signal(sig)
        except ProcessLookupError:
            pass


async def _terminate_posix(process: Process, graceful_timeout: float) -> None:
    _signal_group(process, signal.SIGTERM)
    if await _wait(process, graceful_timeout):
        return

    _signal_group(process, signal.SIGKILL)
    await process.wait()


async def _terminate_windows(process: Process, graceful_timeout: float) -> None:
    pid = process.pid
    try:
        os.kill(pid, signal.CTRL_BREAK_EVENT)  # type: ignore[attr-defined]
    except OSError:
        pass
    if await _wait(process, graceful_timeout):
        return

    try:
        taskkill = await asyncio.create_subprocess_exec(
            "taskkill", "/T", "/F", "/PID", str(pid),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            **new_process_group_kwargs(),
        )
        await asyncio.wait_for(taskkill.wait(), timeout=graceful_timeout)
    except (OSError, TimeoutError) as e:
        logger.debug("taskkill for pid %d failed: %s", pid, e)

    if await _wait(process, 0.5):
        return

    try:
        process.kill()
    except ProcessLookupError:
        pass
    await process.wait()
