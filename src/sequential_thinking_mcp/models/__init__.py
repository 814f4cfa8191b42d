"""Pydantic data models for thought records and ledger summaries."""

from sequential_thinking_mcp.models.thought import ThoughtRecord, ThoughtSummary

__all__ = [
    "ThoughtRecord",
    "ThoughtSummary",
]
