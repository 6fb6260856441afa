"""MCP tools for cmdgroups_mcp."""

from cmdgroups_mcp.tools.execute import execute_command, execute_group
from cmdgroups_mcp.tools.groups import (
    add_command,
    create_group,
    delete_command,
    delete_group,
    export_data,
    import_data,
    list_groups,
)

__all__ = [
    "add_command",
    "create_group",
    "delete_command",
    "delete_group",
    "execute_command",
    "execute_group",
    "export_data",
    "import_data",
    "list_groups",
]
