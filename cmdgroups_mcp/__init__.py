"""Command groups MCP server: organise shell commands into groups and run them."""
