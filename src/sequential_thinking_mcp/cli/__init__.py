"""Click CLI commands for running and inspecting the server.

Provides the ``mcp-server-sequential-thinking`` entry point with subcommands:
- ``serve``  -- Run the MCP server over stdio (the default when no subcommand is given).
- ``schema`` -- Show the advertised ``sequentialthinking`` tool definition.
"""

from sequential_thinking_mcp.cli.main import cli, schema, serve

__all__ = ["cli", "schema", "serve"]
