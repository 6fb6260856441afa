"""Tests for command and group execution tools."""

import sys
from unittest.mock import AsyncMock, patch

import pytest

from cmdgroups_mcp.config import Config
from cmdgroups_mcp.models import ExecutionOutcome
from cmdgroups_mcp.services import GroupStore
from cmdgroups_mcp.services.runner import DETACHED_STARTED
from cmdgroups_mcp.tools import execute_command, execute_group

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="uses POSIX shell commands"
)


@posix_only
class TestExecuteCommand:
    """Tests for execute_command."""

    @pytest.mark.asyncio
    async def test_returns_stdout(self, app_state: Config) -> None:
        assert await execute_command("echo hello") == "hello\n"

    @pytest.mark.asyncio
    async def test_failure_returns_error_text(self, app_state: Config) -> None:
        result = await execute_command("echo oops >&2; exit 3")
        assert result == "Error: Command failed: oops\n"

    @pytest.mark.asyncio
    async def test_detached(self, app_state: Config) -> None:
        assert await execute_command("sleep 1", detached=True) == DETACHED_STARTED

    @pytest.mark.asyncio
    async def test_uses_configured_timeout(self, app_state: Config) -> None:
        app_state.settings.command_timeout = 0.2
        result = await execute_command("sleep 3")
        assert result == "Error: Command timed out after 0.2 seconds"


class TestExecuteGroup:
    """Tests for execute_group."""

    @pytest.mark.asyncio
    async def test_unknown_group(self, app_state: Config) -> None:
        assert await execute_group("missing") == "Error: Group not found"

    @posix_only
    @pytest.mark.asyncio
    async def test_text_report(self, app_state: Config, store: GroupStore) -> None:
        group_id = await store.create_group("g1")
        await store.add_command(group_id, "cmd1", "echo hi")
        await store.add_command(group_id, "cmd2", "exit 1")

        result = await execute_group(group_id)

        assert isinstance(result, str)
        assert "═══ cmd1 " in result
        assert "hi" in result
        assert "═══ cmd2 [FAILED] " in result
        assert "Error: Command failed: " in result
        assert result.endswith("─── g1: 1/2 commands succeeded ───")

    @pytest.mark.asyncio
    async def test_passes_config_to_orchestrator(
        self, app_state: Config, store: GroupStore
    ) -> None:
        group_id = await store.create_group("g")
        app_state.settings.kill_on_timeout = False

        with patch(
            "cmdgroups_mcp.tools.execute.run_batch",
            new_callable=AsyncMock,
            return_value=[],
        ) as mock_run:
            await execute_group(group_id)

        mock_run.assert_awaited_once_with(
            await store.snapshot(group_id), timeout=5.0, kill_on_timeout=False
        )

    @pytest.mark.asyncio
    async def test_report_keeps_name_when_group_deleted_during_run(
        self, app_state: Config, store: GroupStore
    ) -> None:
        group_id = await store.create_group("Nightly")

        async def delete_then_finish(group, **kwargs):
            await store.delete_group(group.id)
            return [ExecutionOutcome(name="a", output="ok")]

        with patch(
            "cmdgroups_mcp.tools.execute.run_batch", side_effect=delete_then_finish
        ):
            result = await execute_group(group_id)

        assert result.endswith("─── Nightly: 1/1 command succeeded ───")
        assert group_id not in result

    @pytest.mark.asyncio
    async def test_ui_enabled_returns_resource(
        self, app_state: Config, store: GroupStore
    ) -> None:
        group_id = await store.create_group("g")
        app_state.settings.enable_ui = True
        outcomes = [ExecutionOutcome(name="a", output="ok")]

        with patch(
            "cmdgroups_mcp.tools.execute.run_batch",
            new_callable=AsyncMock,
            return_value=outcomes,
        ):
            result = await execute_group(group_id)

        assert isinstance(result, list)
        assert len(result) == 1
        assert str(result[0].resource.uri) == f"ui://cmdgroups/results/{group_id}"
