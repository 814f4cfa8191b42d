"""ThinkingProcessor -- the call boundary of the ``sequentialthinking`` tool.

Runs the validator and the ledger in sequence and converts the outcome into
an MCP call result dict.  No exception escapes :meth:`process_thought`:

- success -> ``{"content": [{"type": "text", "text": <summary JSON>}]}``
- failure -> ``{"content": [{"type": "text", "text": <error JSON>}], "isError": True}``

where the error JSON is ``{"error": <message>, "status": "failed"}``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from sequential_thinking_mcp.config import ThinkingConfig
from sequential_thinking_mcp.thinking.ledger import ThoughtLedger
from sequential_thinking_mcp.thinking.validator import (
    ThoughtValidationError,
    validate_thought_data,
)

logger = logging.getLogger(__name__)

FAILED_STATUS = "failed"


class ThinkingProcessor:
    """Validate-then-record dispatcher owning one :class:`ThoughtLedger`.

    Parameters
    ----------
    config:
        Server configuration.  When *None*, :meth:`ThinkingConfig.load` is
        used, so ``DISABLE_THOUGHT_LOGGING`` is honoured.
    ledger:
        An existing ledger to record into.  When *None*, a new one is built
        with rendering enabled unless the config disables it.
    """

    def __init__(
        self,
        config: Optional[ThinkingConfig] = None,
        ledger: Optional[ThoughtLedger] = None,
    ) -> None:
        self.config = config if config is not None else ThinkingConfig.load()
        self.ledger = (
            ledger
            if ledger is not None
            else ThoughtLedger(render_thoughts=not self.config.disable_thought_logging)
        )

    def process_thought(self, payload: Any) -> dict:
        """Validate and record one thought, returning an MCP call result dict."""
        try:
            record = validate_thought_data(payload)
            summary = self.ledger.record(record)
        except ThoughtValidationError as exc:
            logger.warning("Rejected thought: %s", exc)
            return error_result(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while processing thought.")
            return error_result(str(exc))

        return text_result(summary.to_payload())


# ---------------------------------------------------------------------------
# Result builders
# ---------------------------------------------------------------------------


def to_json(data: dict) -> str:
    """Serialise *data* as indented JSON, keeping non-ASCII text as-is."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def text_result(data: dict) -> dict:
    """Wrap *data* as a single-part text call result."""
    return {"content": [{"type": "text", "text": to_json(data)}]}


def error_result(message: str) -> dict:
    """Build the failed call result for *message*."""
    result = text_result({"error": message, "status": FAILED_STATUS})
    result["isError"] = True
    return result
