"""FastMCP server bootstrap for Sequential Thinking.

Sets up the FastMCP server instance, owns the process-wide
:class:`~sequential_thinking_mcp.thinking.processor.ThinkingProcessor`, and
registers the single ``sequentialthinking`` tool.

Typical usage as an MCP server entry point::

    # Via the registered entry point (pyproject.toml):
    # [project.entry-points."mcp.servers"]
    # sequential-thinking = "sequential_thinking_mcp.mcp:create_server"

    # Or programmatically:
    from sequential_thinking_mcp.mcp.server import create_server
    server = create_server()
    server.run(transport="stdio")

The tool advertises the static camelCase schema from
:mod:`sequential_thinking_mcp.mcp.schema` but accepts any argument values;
the thought validator decides what is well formed so that callers always
receive its error messages.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from sequential_thinking_mcp import __version__
from sequential_thinking_mcp.config import ThinkingConfig
from sequential_thinking_mcp.mcp.schema import INPUT_SCHEMA, TOOL_DESCRIPTION, TOOL_NAME
from sequential_thinking_mcp.thinking.processor import ThinkingProcessor

logger = logging.getLogger(__name__)

STARTUP_MESSAGE = "Sequential Thinking MCP Server running on stdio"

# Module-level references shared by the tool and the accessors below.  Created
# on the first call to create_server() or get_server().
_server_instance: Optional[FastMCP] = None
_processor: Optional[ThinkingProcessor] = None
_config: Optional[ThinkingConfig] = None


def create_server(config: Optional[ThinkingConfig] = None) -> FastMCP:
    """Create and configure the FastMCP server instance.

    This is the factory function registered in pyproject.toml as the
    ``mcp.servers`` entry point.  Every call builds a fresh processor, so the
    thought history starts empty.

    Parameters
    ----------
    config:
        Explicit configuration.  When None, :meth:`ThinkingConfig.load`
        reads the environment.

    Returns
    -------
    FastMCP
        The configured server instance.
    """
    global _server_instance, _processor, _config

    _config = config if config is not None else ThinkingConfig.load()
    _config.configure_logging()

    logger.info(
        "Initializing Sequential Thinking MCP server v%s",
        __version__,
    )
    logger.info(
        "Thought rendering: %s",
        "disabled" if _config.disable_thought_logging else "enabled",
    )

    _processor = ThinkingProcessor(config=_config)

    _server_instance = FastMCP(
        name=_config.server_name,
        instructions=(
            "Sequential Thinking records a numbered chain of thoughts. Call "
            f"{TOOL_NAME} once per thought; revise or branch earlier thoughts "
            "by number and keep going until nextThoughtNeeded is false."
        ),
        version=__version__,
    )

    _register_tools(_server_instance)

    logger.info("FastMCP server created successfully. Tools registered.")

    return _server_instance


def get_server() -> FastMCP:
    """Return the existing server instance, creating it if necessary."""
    global _server_instance
    if _server_instance is None:
        return create_server()
    return _server_instance


def get_processor() -> ThinkingProcessor:
    """Return the ThinkingProcessor used by the server.

    Raises
    ------
    RuntimeError
        If the server has not been created yet.
    """
    if _processor is None:
        raise RuntimeError(
            "Server has not been initialized. Call create_server() first."
        )
    return _processor


def get_config() -> ThinkingConfig:
    """Return the ThinkingConfig used by the server.

    Raises
    ------
    RuntimeError
        If the server has not been created yet.
    """
    if _config is None:
        raise RuntimeError(
            "Server has not been initialized. Call create_server() first."
        )
    return _config


def reset_server() -> None:
    """Reset the server singleton (primarily for testing).

    The next call to ``create_server()`` or ``get_server()`` creates a fresh
    instance with an empty thought history.
    """
    global _server_instance, _processor, _config
    _server_instance = None
    _processor = None
    _config = None
    logger.debug("Server singleton reset.")


def run_stdio(config: Optional[ThinkingConfig] = None) -> None:
    """Create the server and serve it over stdio until the client disconnects."""
    server = create_server(config)
    logger.info(STARTUP_MESSAGE)
    server.run(transport="stdio")


# ---------------------------------------------------------------------------
# Tool registration
# ---------------------------------------------------------------------------


def _register_tools(server: FastMCP) -> None:
    """Register the ``sequentialthinking`` tool on the server instance."""

    def sequentialthinking(
        thought: Any = None,
        nextThoughtNeeded: Any = None,
        thoughtNumber: Any = None,
        totalThoughts: Any = None,
        isRevision: Any = None,
        revisesThought: Any = None,
        branchFromThought: Any = None,
        branchId: Any = None,
        needsMoreThoughts: Any = None,
    ) -> ToolResult:
        payload = {
            "thought": thought,
            "nextThoughtNeeded": nextThoughtNeeded,
            "thoughtNumber": thoughtNumber,
            "totalThoughts": totalThoughts,
            "isRevision": isRevision,
            "revisesThought": revisesThought,
            "branchFromThought": branchFromThought,
            "branchId": branchId,
            "needsMoreThoughts": needsMoreThoughts,
        }
        result = get_processor().process_thought(
            {key: value for key, value in payload.items() if value is not None}
        )
        text = result["content"][0]["text"]

        # The MCP layer reports a ToolError as isError=true with the message
        # as the only text part.
        if result.get("isError"):
            raise ToolError(text)

        return ToolResult(content=[TextContent(type="text", text=text)])

    tool = Tool.from_function(
        sequentialthinking,
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
    )
    # Advertise the static wire schema instead of the permissive signature.
    tool = tool.model_copy(update={"parameters": copy.deepcopy(INPUT_SCHEMA)})
    server.add_tool(tool)
