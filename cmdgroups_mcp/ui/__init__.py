"""UI resource generators for cmdgroups_mcp."""

from cmdgroups_mcp.ui.generators import create_results_ui

__all__ = ["create_results_ui"]
