"""Group resources: read-only views of the stored groups."""

from cmdgroups_mcp.services import get_store
from cmdgroups_mcp.tools.handlers import format_group, format_groups


async def list_groups_resource() -> str:
    """List all command groups with their commands.

    Returns:
        Formatted group listing with usage hints
    """
    groups = await get_store().list_groups()
    if not groups:
        return "No command groups defined."

    lines = ["Command Groups", "=" * 40, "", format_groups(groups), ""]
    lines.append("Usage:")
    lines.append("-" * 40)
    lines.append("  groups://<group_id>           (one group)")
    lines.append("  execute_group(group_id=...)   (run a whole group)")
    return "\n".join(lines)


async def group_resource(group_id: str) -> str:
    """Show one group's commands in execution order.

    Args:
        group_id: Id of the group

    Returns:
        Formatted group or an error message
    """
    group = await get_store().get(group_id)
    if group is None:
        return f"Error: Group not found: {group_id}"
    return format_group(group)
