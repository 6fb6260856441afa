"""Command and group data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CommandSpec:
    """A single command definition inside a group."""

    id: str
    name: str
    command_line: str
    detached: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "command": self.command_line,
            "is_detached": self.detached,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommandSpec":
        """Build from the stored JSON shape.

        ``is_detached`` may be missing or null in older data files.

        Raises:
            KeyError: If a required key is missing
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            command_line=str(data["command"]),
            detached=bool(data.get("is_detached") or False),
        )


@dataclass
class CommandGroup:
    """Named, ordered collection of commands run together as a batch."""

    id: str
    name: str
    commands: list[CommandSpec] = field(default_factory=list)

    def snapshot(self) -> "CommandGroup":
        """Return a copy whose command list is independent of this one."""
        return CommandGroup(
            id=self.id,
            name=self.name,
            commands=[
                CommandSpec(
                    id=c.id,
                    name=c.name,
                    command_line=c.command_line,
                    detached=c.detached,
                )
                for c in self.commands
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "commands": [c.to_dict() for c in self.commands],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommandGroup":
        """Build from the stored JSON shape."""
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            commands=[CommandSpec.from_dict(c) for c in data.get("commands", [])],
        )
