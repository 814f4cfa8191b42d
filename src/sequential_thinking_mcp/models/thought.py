"""Thought record and response summary models.

A :class:`ThoughtRecord` is one validated entry in the thinking ledger.  A
:class:`ThoughtSummary` is the compact status returned to the caller after
each accepted thought.  Both models use the camelCase wire names of the
``sequentialthinking`` tool as aliases and snake_case attribute names in
Python.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# JSON numbers arrive as int or float; both are accepted for the positional
# fields and kept as given.
Number = Union[int, float]


def normalize_number(value: Any) -> Any:
    """Return integral floats as ints so ``2.0`` goes back out as ``2``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def wire_str(value: Any) -> str:
    """Return the string form a JSON client prints for a wire value.

    Absent values show as ``undefined``, booleans as ``true``/``false``, and
    integral floats without a fraction.
    """
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(normalize_number(value))


class ThoughtRecord(BaseModel):
    """A single accepted thought.

    Records are frozen: a revision is a new record that references an older
    ``thought_number``, and the ledger's total-thoughts correction produces a
    corrected copy via :meth:`with_total_thoughts`.

    The optional lineage fields are stored exactly as the caller sent them.
    No type, range, or cross-field checks are applied to them (for example,
    ``revises_thought`` may be set without ``is_revision``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    thought: str = Field(
        ...,
        min_length=1,
        description="The current thinking step.",
    )
    thought_number: Number = Field(
        ...,
        alias="thoughtNumber",
        description="Position of this thought in the sequence, as claimed by the caller.",
    )
    total_thoughts: Number = Field(
        ...,
        alias="totalThoughts",
        description="Caller's current estimate of the sequence length.",
    )
    next_thought_needed: bool = Field(
        ...,
        alias="nextThoughtNeeded",
        description="Whether the caller intends to continue the sequence.",
    )
    is_revision: Optional[Any] = Field(
        default=None,
        alias="isRevision",
        description="Whether this thought reconsiders an earlier one.",
    )
    revises_thought: Optional[Any] = Field(
        default=None,
        alias="revisesThought",
        description="The thought number being reconsidered.",
    )
    branch_from_thought: Optional[Any] = Field(
        default=None,
        alias="branchFromThought",
        description="The thought number at which a branch diverges.",
    )
    branch_id: Optional[Any] = Field(
        default=None,
        alias="branchId",
        description="Identifier of the branch this thought belongs to.",
    )
    needs_more_thoughts: Optional[Any] = Field(
        default=None,
        alias="needsMoreThoughts",
        description="Caller's signal that more thoughts are needed than estimated.",
    )

    @property
    def is_branch_member(self) -> bool:
        """True when the record carries both a branch point and a branch id.

        Zero and empty-string values count as absent.
        """
        return bool(self.branch_from_thought) and bool(self.branch_id)

    def with_total_thoughts(self, total_thoughts: Number) -> "ThoughtRecord":
        """Return a copy of this record with a different total estimate."""
        return self.model_copy(update={"total_thoughts": total_thoughts})

    def to_payload(self) -> dict:
        """Return the record as a wire-format dict, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ThoughtSummary(BaseModel):
    """Status returned after a thought is recorded.

    The scalar fields echo the (possibly corrected) record; ``branches`` and
    ``thought_history_length`` describe the ledger after the insertion.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    thought_number: Number = Field(..., alias="thoughtNumber")
    total_thoughts: Number = Field(..., alias="totalThoughts")
    next_thought_needed: bool = Field(..., alias="nextThoughtNeeded")
    branches: list[str] = Field(
        default_factory=list,
        description="Known branch ids in first-seen order.",
    )
    thought_history_length: int = Field(
        ...,
        ge=0,
        alias="thoughtHistoryLength",
    )

    def to_payload(self) -> dict:
        """Return the summary as a wire-format dict."""
        payload = self.model_dump(by_alias=True)
        for key in ("thoughtNumber", "totalThoughts"):
            payload[key] = normalize_number(payload[key])
        return payload
