"""In-memory group store with write-through persistence.

Locking Strategy:
- A single `_lock` protects the `_groups` mapping
- The lock is held only for map reads/writes and the synchronous save that
  follows each mutation; it is never held while a command runs
- Readers get snapshot copies, so a batch that is already running cannot see
  later edits to its group
"""

import asyncio
import logging
import uuid

from cmdgroups_mcp.models import CommandGroup, CommandSpec
from cmdgroups_mcp.services.errors import GroupNotFoundError, PersistenceError
from cmdgroups_mcp.services.persistence import (
    JsonPersistence,
    deserialize_groups,
    serialize_groups,
)

logger = logging.getLogger(__name__)


class GroupStore:
    """Mapping of group id to CommandGroup behind one lock."""

    def __init__(self, persistence: JsonPersistence | None = None) -> None:
        """Initialize an empty store.

        Args:
            persistence: Backing file. None keeps the store memory-only.
        """
        self._persistence = persistence
        self._groups: dict[str, CommandGroup] = {}
        self._lock = asyncio.Lock()

    def _save(self) -> None:
        # Caller holds self._lock
        if self._persistence is not None:
            self._persistence.save(self._groups)

    async def load(self) -> int:
        """Replace contents with what the backing file holds.

        A missing, unreadable or malformed file leaves the store empty.

        Returns:
            Number of groups loaded
        """
        if self._persistence is None:
            return 0

        try:
            groups = self._persistence.load()
        except PersistenceError as e:
            logger.error("Failed to load data: %s (continuing with empty state)", e)
            groups = {}

        async with self._lock:
            self._groups = groups
        return len(groups)

    async def get(self, group_id: str) -> CommandGroup | None:
        """Get a snapshot of a group, or None if it does not exist."""
        async with self._lock:
            group = self._groups.get(group_id)
            return group.snapshot() if group is not None else None

    async def snapshot(self, group_id: str) -> CommandGroup:
        """Get a snapshot of a group.

        Raises:
            GroupNotFoundError: If no group has that id
        """
        group = await self.get(group_id)
        if group is None:
            raise GroupNotFoundError(group_id)
        return group

    async def list_groups(self) -> list[CommandGroup]:
        """Snapshots of all groups, sorted by name."""
        async with self._lock:
            groups = [g.snapshot() for g in self._groups.values()]
        return sorted(groups, key=lambda g: (g.name.lower(), g.id))

    async def create_group(self, name: str) -> str:
        """Create an empty group and return its id."""
        group_id = str(uuid.uuid4())
        async with self._lock:
            self._groups[group_id] = CommandGroup(id=group_id, name=name)
            self._save()
        logger.info("Created group %s (%r)", group_id, name)
        return group_id

    async def delete_group(self, group_id: str) -> bool:
        """Delete a group. Unknown ids are ignored.

        Returns:
            True if a group was removed
        """
        async with self._lock:
            removed = self._groups.pop(group_id, None) is not None
            self._save()
        if removed:
            logger.info("Deleted group %s", group_id)
        else:
            logger.debug("Delete of unknown group %s ignored", group_id)
        return removed

    async def add_command(
        self,
        group_id: str,
        name: str,
        command_line: str,
        detached: bool = False,
    ) -> str:
        """Append a command to a group and return the new command id.

        Raises:
            GroupNotFoundError: If no group has that id
        """
        command_id = str(uuid.uuid4())
        async with self._lock:
            group = self._groups.get(group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            group.commands.append(
                CommandSpec(
                    id=command_id,
                    name=name,
                    command_line=command_line,
                    detached=detached,
                )
            )
            self._save()
        logger.info(
            "Added command %s (%r, detached=%s) to group %s",
            command_id,
            name,
            detached,
            group_id,
        )
        return command_id

    async def delete_command(self, group_id: str, command_id: str) -> bool:
        """Remove a command from a group. Unknown command ids are ignored.

        Returns:
            True if a command was removed

        Raises:
            GroupNotFoundError: If no group has that id
        """
        async with self._lock:
            group = self._groups.get(group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            before = len(group.commands)
            group.commands = [c for c in group.commands if c.id != command_id]
            self._save()
            removed = len(group.commands) < before
        if removed:
            logger.info("Deleted command %s from group %s", command_id, group_id)
        return removed

    async def export_data(self) -> str:
        """Serialized state blob of all groups."""
        async with self._lock:
            return serialize_groups(self._groups)

    async def import_data(self, data: str) -> int:
        """Replace all groups with the contents of a state blob.

        Returns:
            Number of groups imported

        Raises:
            PersistenceError: If the blob cannot be parsed (state unchanged)
                or the result cannot be saved
        """
        try:
            groups = deserialize_groups(data)
        except ValueError as e:
            raise PersistenceError(f"Failed to parse import data: {e}") from e

        async with self._lock:
            self._groups = groups
            self._save()
        logger.info("Imported %d group(s)", len(groups))
        return len(groups)

    @property
    def group_count(self) -> int:
        """Return the current number of groups."""
        return len(self._groups)
