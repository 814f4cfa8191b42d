"""Boxed console rendering of accepted thoughts.

The rendering is a human-facing side channel written to stderr.  It has no
effect on tool responses::

    ┌───────────────────────────────────────────┐
    │ 🌿 Branch 3/5 (from thought 2, ID: alt)    │
    ├───────────────────────────────────────────┤
    │ Try the iterative approach                │
    └───────────────────────────────────────────┘

Box width is measured on the uncoloured header so ANSI escapes do not
distort the borders.
"""

from __future__ import annotations

import click

from sequential_thinking_mcp.models.thought import ThoughtRecord, wire_str

REVISION_TAG = "🔄 Revision"
BRANCH_TAG = "🌿 Branch"
THOUGHT_TAG = "💭 Thought"

_TAG_COLORS = {
    REVISION_TAG: "yellow",
    BRANCH_TAG: "green",
    THOUGHT_TAG: "blue",
}


def thought_tag(record: ThoughtRecord) -> tuple[str, str]:
    """Return the ``(tag, context)`` pair describing *record*.

    A revision takes precedence over a branch.  Both checks use truthiness,
    so ``isRevision=False`` and ``branchFromThought=0`` fall through.
    """
    if record.is_revision:
        return REVISION_TAG, f" (revising thought {wire_str(record.revises_thought)})"
    if record.branch_from_thought:
        return (
            BRANCH_TAG,
            f" (from thought {wire_str(record.branch_from_thought)}, "
            f"ID: {wire_str(record.branch_id)})",
        )
    return THOUGHT_TAG, ""


def format_thought(record: ThoughtRecord, color: bool = True) -> str:
    """Render *record* as a boxed text block.

    Parameters
    ----------
    record:
        The accepted (already corrected) record.
    color:
        Whether to colour the tag with ANSI escapes.
    """
    tag, context = thought_tag(record)
    position = f"{wire_str(record.thought_number)}/{wire_str(record.total_thoughts)}"

    plain_header = f"{tag} {position}{context}"
    styled_tag = click.style(tag, fg=_TAG_COLORS[tag]) if color else tag
    header = f"{styled_tag} {position}{context}"

    inner_width = max(len(plain_header), len(record.thought)) + 2
    border = "─" * (inner_width + 2)
    header_padding = " " * (inner_width - len(plain_header))

    return "\n".join(
        [
            f"┌{border}┐",
            f"│ {header}{header_padding} │",
            f"├{border}┤",
            f"│ {record.thought.ljust(inner_width)} │",
            f"└{border}┘",
        ]
    )

