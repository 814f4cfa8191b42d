"""Thought validation, ledger bookkeeping, and console rendering."""

from sequential_thinking_mcp.thinking.formatting import format_thought
from sequential_thinking_mcp.thinking.ledger import ThoughtLedger
from sequential_thinking_mcp.thinking.processor import ThinkingProcessor
from sequential_thinking_mcp.thinking.validator import (
    ThoughtValidationError,
    validate_thought_data,
)

__all__ = [
    "ThinkingProcessor",
    "ThoughtLedger",
    "ThoughtValidationError",
    "format_thought",
    "validate_thought_data",
]
