"""Data models for cmdgroups_mcp."""

from cmdgroups_mcp.models.command import CommandGroup, CommandSpec
from cmdgroups_mcp.models.result import CommandResult, ExecutionOutcome

__all__ = [
    "CommandGroup",
    "CommandResult",
    "CommandSpec",
    "ExecutionOutcome",
]
