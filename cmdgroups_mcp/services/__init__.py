"""Services for cmdgroups_mcp."""

from cmdgroups_mcp.services.errors import (
    CmdGroupsError,
    CommandError,
    CommandExecutionError,
    CommandLaunchError,
    CommandTimeoutError,
    GroupNotFoundError,
    PersistenceError,
)
from cmdgroups_mcp.services.orchestrator import run_batch, run_group, run_one
from cmdgroups_mcp.services.persistence import JsonPersistence
from cmdgroups_mcp.services.runner import execute, run_command, run_detached
from cmdgroups_mcp.services.state import (
    get_config,
    get_store,
    reset_state,
    set_config,
    set_store,
)
from cmdgroups_mcp.services.store import GroupStore

__all__ = [
    "CmdGroupsError",
    "CommandError",
    "CommandExecutionError",
    "CommandLaunchError",
    "CommandTimeoutError",
    "GroupNotFoundError",
    "GroupStore",
    "JsonPersistence",
    "PersistenceError",
    "execute",
    "get_config",
    "get_store",
    "reset_state",
    "run_command",
    "run_batch",
    "run_detached",
    "run_group",
    "run_one",
    "set_config",
    "set_store",
]
