"""Tests for single-command and group batch execution."""

import asyncio
import sys
from unittest.mock import AsyncMock, patch

import pytest

from cmdgroups_mcp.models import CommandResult, ExecutionOutcome
from cmdgroups_mcp.services.errors import (
    CommandExecutionError,
    CommandTimeoutError,
    GroupNotFoundError,
)
from cmdgroups_mcp.services.orchestrator import run_batch, run_group, run_one
from cmdgroups_mcp.services.runner import DETACHED_STARTED
from cmdgroups_mcp.services.store import GroupStore

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="uses POSIX shell commands"
)


async def _group(store: GroupStore, name: str, *commands: tuple[str, str, bool]) -> str:
    group_id = await store.create_group(name)
    for cmd_name, line, detached in commands:
        await store.add_command(group_id, cmd_name, line, detached=detached)
    return group_id


@posix_only
class TestRunOne:
    """Caller-facing single command execution."""

    @pytest.mark.asyncio
    async def test_sync_returns_output(self) -> None:
        assert await run_one("echo hi") == "hi\n"

    @pytest.mark.asyncio
    async def test_sync_failure_propagates(self) -> None:
        with pytest.raises(CommandExecutionError):
            await run_one("exit 2")

    @pytest.mark.asyncio
    async def test_timeout_propagates(self) -> None:
        with pytest.raises(CommandTimeoutError):
            await run_one("sleep 3", timeout=0.2)

    @pytest.mark.asyncio
    async def test_detached_returns_acknowledgement(self) -> None:
        assert await run_one("sleep 2", detached=True) == DETACHED_STARTED


class TestRunGroup:
    """Batch execution over a group's commands."""

    @posix_only
    @pytest.mark.asyncio
    async def test_example_scenario(self, store: GroupStore) -> None:
        """Failing commands yield error strings, successful ones raw output."""
        group_id = await _group(
            store,
            "g1",
            ("cmd1", "echo hi", False),
            ("cmd2", "exit 1", False),
        )

        outcomes = await run_group(store, group_id)

        assert [o.as_tuple() for o in outcomes] == [
            ("cmd1", "hi\n"),
            ("cmd2", "Error: Command failed: "),
        ]

    @posix_only
    @pytest.mark.asyncio
    async def test_never_stops_early(self, store: GroupStore) -> None:
        """Every command is attempted and results keep group order."""
        group_id = await _group(
            store,
            "mixed",
            ("first", "echo one", False),
            ("broken", "echo bad >&2; exit 4", False),
            ("slow", "sleep 3", False),
            ("bg", "sleep 2", True),
            ("last", "echo four", False),
        )

        outcomes = await run_group(store, group_id, timeout=0.3)

        assert [o.name for o in outcomes] == ["first", "broken", "slow", "bg", "last"]
        assert outcomes[0].output == "one\n"
        assert outcomes[1].output == "Error: Command failed: bad\n"
        assert outcomes[2].output == "Error: Command timed out after 0.3 seconds"
        assert outcomes[3].output == DETACHED_STARTED
        assert outcomes[4].output == "four\n"

    @pytest.mark.asyncio
    async def test_unknown_group_raises_and_runs_nothing(self, store: GroupStore) -> None:
        with patch(
            "cmdgroups_mcp.services.orchestrator.execute", new_callable=AsyncMock
        ) as mock_execute:
            with pytest.raises(GroupNotFoundError, match="Group not found"):
                await run_group(store, "missing")

        mock_execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_group_returns_no_outcomes(self, store: GroupStore) -> None:
        group_id = await store.create_group("empty")
        assert await run_group(store, group_id) == []

    @pytest.mark.asyncio
    async def test_dispatches_by_detached_flag(self, store: GroupStore) -> None:
        """Each command is run in the mode its definition asks for."""
        group_id = await _group(
            store,
            "modes",
            ("sync", "echo a", False),
            ("bg", "echo b", True),
        )

        with patch(
            "cmdgroups_mcp.services.orchestrator.execute",
            new_callable=AsyncMock,
            return_value=CommandResult.success("x"),
        ) as mock_execute:
            await run_group(store, group_id, timeout=7.0, kill_on_timeout=False)

        calls = mock_execute.await_args_list
        assert calls[0].args == ("echo a",)
        assert calls[0].kwargs == {"detached": False, "timeout": 7.0, "kill_on_timeout": False}
        assert calls[1].args == ("echo b",)
        assert calls[1].kwargs["detached"] is True

    @pytest.mark.asyncio
    async def test_runs_strictly_sequentially(self, store: GroupStore) -> None:
        """Command n+1 does not start before command n has finished."""
        group_id = await _group(
            store,
            "seq",
            ("a", "a", False),
            ("b", "b", False),
            ("c", "c", False),
        )
        events: list[str] = []

        async def fake_execute(line: str, **kwargs: object) -> CommandResult:
            events.append(f"start {line}")
            await asyncio.sleep(0.01)
            events.append(f"end {line}")
            return CommandResult.success(line)

        with patch("cmdgroups_mcp.services.orchestrator.execute", side_effect=fake_execute):
            await run_group(store, group_id)

        assert events == [
            "start a", "end a",
            "start b", "end b",
            "start c", "end c",
        ]

    @pytest.mark.asyncio
    async def test_edit_during_run_does_not_affect_batch(self, store: GroupStore) -> None:
        """The batch runs the snapshot taken when it started."""
        group_id = await _group(store, "snap", ("a", "a", False), ("b", "b", False))

        async def fake_execute(line: str, **kwargs: object) -> CommandResult:
            if line == "a":
                await store.add_command(group_id, "late", "late", detached=False)
            return CommandResult.success(line)

        with patch("cmdgroups_mcp.services.orchestrator.execute", side_effect=fake_execute):
            outcomes = await run_group(store, group_id)

        assert [o.name for o in outcomes] == ["a", "b"]
        group = await store.get(group_id)
        assert group is not None
        assert len(group.commands) == 3

    @pytest.mark.asyncio
    async def test_store_usable_while_batch_runs(self, store: GroupStore) -> None:
        """The store lock is not held while commands execute."""
        group_id = await _group(store, "long", ("wait", "wait", False))
        release = asyncio.Event()

        async def fake_execute(line: str, **kwargs: object) -> CommandResult:
            await release.wait()
            return CommandResult.success("done")

        with patch("cmdgroups_mcp.services.orchestrator.execute", side_effect=fake_execute):
            task = asyncio.create_task(run_group(store, group_id))
            await asyncio.sleep(0.05)

            new_id = await asyncio.wait_for(store.create_group("other"), timeout=1.0)
            groups = await asyncio.wait_for(store.list_groups(), timeout=1.0)
            assert not task.done()

            release.set()
            outcomes = await task

        assert new_id in {g.id for g in groups}
        assert outcomes == [ExecutionOutcome(name="wait", output="done")]

    @posix_only
    @pytest.mark.asyncio
    async def test_concurrent_groups_run_in_parallel(self, store: GroupStore) -> None:
        """Two batches take about max of their durations, not the sum."""
        g1 = await _group(store, "one", ("s1", "sleep 0.6", False))
        g2 = await _group(store, "two", ("s2", "sleep 0.6", False))

        start = asyncio.get_running_loop().time()
        r1, r2 = await asyncio.gather(run_group(store, g1), run_group(store, g2))
        elapsed = asyncio.get_running_loop().time() - start

        assert elapsed < 1.1, f"Expected parallel execution (~0.6s), got {elapsed:.3f}s"
        assert r1 == [ExecutionOutcome(name="s1", output="")]
        assert r2 == [ExecutionOutcome(name="s2", output="")]


@posix_only
class TestCallerCancellation:
    """A started batch always runs to completion."""

    @pytest.mark.asyncio
    async def test_batch_finishes_after_caller_cancelled(
        self, store: GroupStore, tmp_path
    ) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        group_id = await _group(
            store,
            "cancel-me",
            ("slow", f"sleep 0.5; touch {first}", False),
            ("after", f"touch {second}", False),
        )

        caller = asyncio.create_task(run_group(store, group_id))
        await asyncio.sleep(0.1)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        for _ in range(30):
            if second.exists():
                break
            await asyncio.sleep(0.1)
        assert first.exists()
        assert second.exists()

    @pytest.mark.asyncio
    async def test_run_batch_uses_given_snapshot(self, store: GroupStore) -> None:
        """Deleting the group while it runs does not affect the batch."""
        group_id = await _group(
            store,
            "gone",
            ("a", "sleep 0.3; echo a", False),
            ("b", "echo b", False),
        )
        group = await store.snapshot(group_id)

        batch = asyncio.create_task(run_batch(group))
        await asyncio.sleep(0.1)
        await store.delete_group(group_id)
        outcomes = await batch

        assert [o.as_tuple() for o in outcomes] == [("a", "a\n"), ("b", "b\n")]
