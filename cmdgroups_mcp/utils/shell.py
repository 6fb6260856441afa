"""Host shell helpers."""

import subprocess
import sys
from typing import Any

IS_WINDOWS = sys.platform == "win32"


def shell_argv(command_line: str) -> list[str]:
    """Build the argv that hands a command line to the host shell.

    The line is passed through untouched; quoting, pipes and redirections
    behave exactly as the shell defines them.

    Args:
        command_line: Raw command line (may be empty)

    Returns:
        ``["cmd", "/C", line]`` on Windows, ``["sh", "-c", line]`` elsewhere
    """
    if IS_WINDOWS:
        return ["cmd", "/C", command_line]
    return ["sh", "-c", command_line]


def new_process_group_kwargs() -> dict[str, Any]:
    """Spawn kwargs that put the child in its own process group.

    Lets a timed-out command be killed together with its children and keeps
    detached commands out of the server's signal group.
    """
    if IS_WINDOWS:
        return {
            "creationflags": subprocess.CREATE_NEW_PROCESS_GROUP
            | subprocess.CREATE_NO_WINDOW
        }
    return {"start_new_session": True}
