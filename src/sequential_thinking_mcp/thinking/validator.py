"""Validation of raw ``sequentialthinking`` tool payloads.

:func:`validate_thought_data` converts an untyped payload into a
:class:`~sequential_thinking_mcp.models.thought.ThoughtRecord` or raises
:class:`ThoughtValidationError`.  Checks run in a fixed order and the first
failure wins:

1. ``thought`` -- a non-empty string
2. ``thoughtNumber`` -- a non-zero number
3. ``totalThoughts`` -- a non-zero number
4. ``nextThoughtNeeded`` -- a boolean (``False`` is valid)

Presence is judged by truthiness, so ``thoughtNumber=0`` and ``thought=""``
are rejected as missing.  The optional lineage fields are passed through
without any checks.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from sequential_thinking_mcp.models.thought import ThoughtRecord

# Wire names of the fields copied through without validation, mapped to the
# record attribute they populate.
PASSTHROUGH_FIELDS = {
    "isRevision": "is_revision",
    "revisesThought": "revises_thought",
    "branchFromThought": "branch_from_thought",
    "branchId": "branch_id",
    "needsMoreThoughts": "needs_more_thoughts",
}


class ThoughtValidationError(ValueError):
    """A required field of a thought payload is missing or has the wrong type."""


def validate_thought_data(payload: Any) -> ThoughtRecord:
    """Validate *payload* and return the corresponding record.

    Parameters
    ----------
    payload:
        The tool arguments as received from the transport.  Anything other
        than a mapping is treated as an empty payload.

    Returns
    -------
    ThoughtRecord
        A new, frozen record.  The payload itself is never modified.

    Raises
    ------
    ThoughtValidationError
        On the first failing rule.
    """
    data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}

    thought = data.get("thought")
    if not thought or not isinstance(thought, str):
        raise ThoughtValidationError("Invalid thought: must be a string")

    thought_number = data.get("thoughtNumber")
    if not _is_present_number(thought_number):
        raise ThoughtValidationError("Invalid thoughtNumber: must be a number")

    total_thoughts = data.get("totalThoughts")
    if not _is_present_number(total_thoughts):
        raise ThoughtValidationError("Invalid totalThoughts: must be a number")

    next_thought_needed = data.get("nextThoughtNeeded")
    if not isinstance(next_thought_needed, bool):
        raise ThoughtValidationError("Invalid nextThoughtNeeded: must be a boolean")

    optional = {
        attr: data.get(wire_name) for wire_name, attr in PASSTHROUGH_FIELDS.items()
    }

    return ThoughtRecord(
        thought=thought,
        thought_number=thought_number,
        total_thoughts=total_thoughts,
        next_thought_needed=next_thought_needed,
        **optional,
    )


def _is_present_number(value: Any) -> bool:
    """Return True for a JSON number that is not zero or NaN.

    ``bool`` is excluded even though it subclasses ``int``: JSON ``true`` is
    not a number.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return value != 0
