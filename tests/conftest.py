"""Shared fixtures for cmdgroups_mcp tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from cmdgroups_mcp.config import Config
from cmdgroups_mcp.services import reset_state, set_config, set_store
from cmdgroups_mcp.services.persistence import JsonPersistence
from cmdgroups_mcp.services.store import GroupStore


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory holding the groups data file."""
    return tmp_path / "data"


@pytest.fixture
def store(data_dir: Path) -> GroupStore:
    """Empty store backed by a temporary data file."""
    return GroupStore(JsonPersistence(data_dir / "command_groups.json"))


@pytest.fixture
def app_state(data_dir: Path, store: GroupStore) -> Iterator[Config]:
    """Install config and store as the global state used by tools."""
    config = Config.for_data_dir(data_dir)
    config.settings.command_timeout = 5.0
    config.settings.enable_ui = False
    set_config(config)
    set_store(store)
    yield config
    reset_state()
