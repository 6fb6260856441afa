"""Group management tools."""

import logging

from cmdgroups_mcp.services import (
    GroupNotFoundError,
    PersistenceError,
    get_config,
    get_store,
)
from cmdgroups_mcp.tools.handlers import format_groups

logger = logging.getLogger(__name__)


async def create_group(name: str) -> str:
    """Create a new, empty command group.

    Args:
        name: Display name of the group.

    Returns:
        The new group id, or an error message.
    """
    if not name.strip():
        return "Error: Group name cannot be empty"
    try:
        return await get_store().create_group(name.strip())
    except PersistenceError as e:
        return f"Error: {e}"


async def list_groups() -> str:
    """List all command groups with their commands and ids."""
    groups = await get_store().list_groups()
    return format_groups(groups)


async def delete_group(group_id: str) -> str:
    """Delete a command group and all of its commands.

    Args:
        group_id: Id of the group to delete.
    """
    try:
        removed = await get_store().delete_group(group_id)
    except PersistenceError as e:
        return f"Error: {e}"
    if removed:
        return f"Deleted group {group_id}"
    return f"No group {group_id} (nothing deleted)"


async def add_command(
    group_id: str,
    name: str,
    command: str,
    detached: bool = False,
) -> str:
    """Add a command to the end of a group.

    Args:
        group_id: Id of the group to add to.
        name: Display name of the command.
        command: Command line, run by the host shell (sh -c / cmd /C).
        detached: Launch in the background without waiting for it to finish.

    Returns:
        The new command id, or an error message.
    """
    try:
        return await get_store().add_command(group_id, name, command, detached=detached)
    except (GroupNotFoundError, PersistenceError) as e:
        return f"Error: {e}"


async def delete_command(group_id: str, command_id: str) -> str:
    """Remove a command from a group.

    Args:
        group_id: Id of the group holding the command.
        command_id: Id of the command to remove.
    """
    try:
        removed = await get_store().delete_command(group_id, command_id)
    except (GroupNotFoundError, PersistenceError) as e:
        return f"Error: {e}"
    if removed:
        return f"Deleted command {command_id} from group {group_id}"
    return f"No command {command_id} in group {group_id} (nothing deleted)"


async def export_data() -> str:
    """Export all groups as a JSON blob that import_data accepts."""
    config = get_config()
    blob = await get_store().export_data()
    return f"Data file: {config.data_file}\n\n{blob}"


async def import_data(data: str) -> str:
    """Replace all groups with the contents of an exported JSON blob.

    Args:
        data: JSON of the form {"groups": {<id>: <group>, ...}}.
    """
    try:
        count = await get_store().import_data(data)
    except PersistenceError as e:
        return f"Error: {e}"
    return f"Data imported successfully ({count} group{'s' if count != 1 else ''})"
