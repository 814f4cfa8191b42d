"""Sequential Thinking MCP - A reflective, branchable thought ledger exposed as an MCP tool."""

__version__ = "0.1.0"

from sequential_thinking_mcp.config import ThinkingConfig

__all__ = ["ThinkingConfig", "__version__"]
