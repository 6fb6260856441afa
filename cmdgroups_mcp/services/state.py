"""Global state management for cmdgroups_mcp."""

from cmdgroups_mcp.config import Config
from cmdgroups_mcp.services.persistence import JsonPersistence
from cmdgroups_mcp.services.store import GroupStore

# Global state (initialized on first access)
_config: Config | None = None
_store: GroupStore | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def get_store() -> GroupStore:
    """Get or create the group store.

    The store is created empty; the server lifespan loads it from disk.
    """
    global _store
    if _store is None:
        config = get_config()
        _store = GroupStore(JsonPersistence(config.data_file))
    return _store


def reset_state() -> None:
    """Reset global state for testing.

    This function clears the singleton instances, allowing tests
    to start with fresh state. Should only be used in test fixtures.
    """
    global _config, _store
    _config = None
    _store = None


def set_config(config: Config) -> None:
    """Set the global config instance.

    Args:
        config: Config instance to use globally.
    """
    global _config
    _config = config


def set_store(store: GroupStore) -> None:
    """Set the global store instance.

    Args:
        store: GroupStore instance to use globally.
    """
    global _store
    _store = store
