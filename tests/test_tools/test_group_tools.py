"""Tests for group management tools."""

import json
from pathlib import Path

import pytest

from cmdgroups_mcp.config import Config
from cmdgroups_mcp.services import GroupStore
from cmdgroups_mcp.tools import (
    add_command,
    create_group,
    delete_command,
    delete_group,
    export_data,
    import_data,
    list_groups,
)


@pytest.mark.asyncio
async def test_create_group_returns_id(app_state: Config, store: GroupStore) -> None:
    group_id = await create_group("  Deploy  ")

    group = await store.get(group_id)
    assert group is not None
    assert group.name == "Deploy"


@pytest.mark.asyncio
async def test_create_group_rejects_blank_name(app_state: Config, store: GroupStore) -> None:
    assert await create_group("   ") == "Error: Group name cannot be empty"
    assert store.group_count == 0


@pytest.mark.asyncio
async def test_list_groups_empty(app_state: Config) -> None:
    assert await list_groups() == "No command groups defined."


@pytest.mark.asyncio
async def test_list_groups_shows_commands(app_state: Config) -> None:
    group_id = await create_group("Dev")
    cmd_id = await add_command(group_id, "serve", "npm run dev", detached=True)

    result = await list_groups()

    assert f"Dev [{group_id}]" in result
    assert f"1. serve (detached) [{cmd_id}]" in result
    assert "$ npm run dev" in result


@pytest.mark.asyncio
async def test_add_command_unknown_group(app_state: Config) -> None:
    assert await add_command("missing", "x", "true") == "Error: Group not found"


@pytest.mark.asyncio
async def test_delete_command(app_state: Config, store: GroupStore) -> None:
    group_id = await create_group("g")
    cmd_id = await add_command(group_id, "x", "true")

    assert await delete_command(group_id, cmd_id) == (
        f"Deleted command {cmd_id} from group {group_id}"
    )
    assert await delete_command(group_id, cmd_id) == (
        f"No command {cmd_id} in group {group_id} (nothing deleted)"
    )
    assert await delete_command("missing", cmd_id) == "Error: Group not found"


@pytest.mark.asyncio
async def test_delete_group(app_state: Config, store: GroupStore) -> None:
    group_id = await create_group("g")

    assert await delete_group(group_id) == f"Deleted group {group_id}"
    assert await delete_group(group_id) == f"No group {group_id} (nothing deleted)"


@pytest.mark.asyncio
async def test_export_includes_data_file_and_blob(app_state: Config) -> None:
    group_id = await create_group("g")

    result = await export_data()

    header, blob = result.split("\n\n", 1)
    assert header == f"Data file: {app_state.data_file}"
    assert group_id in json.loads(blob)["groups"]


@pytest.mark.asyncio
async def test_import_replaces_groups(app_state: Config, store: GroupStore) -> None:
    await create_group("old")
    blob = json.dumps({"groups": {"n": {"id": "n", "name": "New", "commands": []}}})

    assert await import_data(blob) == "Data imported successfully (1 group)"
    assert [g.name for g in await store.list_groups()] == ["New"]


@pytest.mark.asyncio
async def test_import_invalid_reports_error(app_state: Config, store: GroupStore) -> None:
    group_id = await create_group("keep")

    result = await import_data("{broken")

    assert result.startswith("Error: Failed to parse import data:")
    assert await store.get(group_id) is not None


@pytest.mark.asyncio
async def test_persistence_failure_reported(
    app_state: Config, tmp_path: Path, store: GroupStore
) -> None:
    """A save failure comes back as an error message, not an exception."""
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store._persistence.path = blocker / "command_groups.json"

    result = await create_group("g")

    assert result.startswith("Error: Failed to create data directory")
