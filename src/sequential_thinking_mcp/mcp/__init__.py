"""FastMCP server and the ``sequentialthinking`` tool definition."""


def create_server(*args, **kwargs):
    """Entry point registered under ``[project.entry-points."mcp.servers"]``.

    Imports the server module lazily so that importing the package does not
    pull in FastMCP.
    """
    from sequential_thinking_mcp.mcp.server import create_server as _create_server

    return _create_server(*args, **kwargs)
