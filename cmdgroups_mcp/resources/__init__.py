"""MCP resources for cmdgroups_mcp."""

from cmdgroups_mcp.resources.groups import group_resource, list_groups_resource

__all__ = ["group_resource", "list_groups_resource"]
