"""Utility modules for cmdgroups_mcp."""

from cmdgroups_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter
from cmdgroups_mcp.utils.process import terminate_process_tree
from cmdgroups_mcp.utils.shell import new_process_group_kwargs, shell_argv

__all__ = [
    "ColorfulFormatter",
    "MCPRequestFormatter",
    "new_process_group_kwargs",
    "shell_argv",
    "terminate_process_tree",
]
