"""JSON file persistence for command groups."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from cmdgroups_mcp.models import CommandGroup
from cmdgroups_mcp.services.errors import PersistenceError

logger = logging.getLogger(__name__)


def serialize_groups(groups: dict[str, CommandGroup]) -> str:
    """Serialize groups to the pretty-printed ``{"groups": {...}}`` blob."""
    app_data = {"groups": {gid: g.to_dict() for gid, g in groups.items()}}
    return json.dumps(app_data, indent=2)


def deserialize_groups(text: str) -> dict[str, CommandGroup]:
    """Parse a ``{"groups": {...}}`` blob.

    Raises:
        ValueError: If the text is not valid JSON or has the wrong shape
    """
    data: Any = json.loads(text)
    if not isinstance(data, dict) or not isinstance(data.get("groups"), dict):
        raise ValueError("expected an object with a 'groups' mapping")

    groups: dict[str, CommandGroup] = {}
    for gid, raw in data["groups"].items():
        if not isinstance(raw, dict):
            raise ValueError(f"group {gid!r} is not an object")
        try:
            groups[gid] = CommandGroup.from_dict(raw)
        except (KeyError, TypeError) as e:
            raise ValueError(f"group {gid!r} is missing field {e}") from e
    return groups


class JsonPersistence:
    """Reads and writes the group mapping to a single JSON file."""

    def __init__(self, path: Path | str) -> None:
        """Initialize persistence.

        Args:
            path: Data file location. The parent directory is created on save.
        """
        self.path = Path(path)

    def load(self) -> dict[str, CommandGroup]:
        """Load groups from the data file.

        Returns:
            Group mapping, empty if the file does not exist yet

        Raises:
            PersistenceError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.info("No data file at %s, starting empty", self.path)
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to read data file: {e}") from e

        try:
            groups = deserialize_groups(content)
        except ValueError as e:
            raise PersistenceError(f"Failed to parse data file: {e}") from e

        logger.info("Loaded %d group(s) from %s", len(groups), self.path)
        return groups

    def save(self, groups: dict[str, CommandGroup]) -> None:
        """Write groups to the data file.

        Writes to a temporary file in the same directory and renames it over
        the target, so readers never see a half-written file.

        Raises:
            PersistenceError: If the directory or file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to create data directory: {e}") from e

        content = serialize_groups(groups)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Failed to write data file: {e}") from e

        logger.debug("Saved %d group(s) to %s", len(groups), self.path)
