"""ThoughtLedger -- the append-only thought history and its branch index.

The ledger is the single owner of session state.  It exposes
:meth:`ThoughtLedger.record` for writes and copy-returning accessors for
reads; the underlying containers never leave the object.

Typical usage::

    ledger = ThoughtLedger()
    summary = ledger.record(validate_thought_data(payload))
    summary.thought_history_length   # 1
    ledger.branch_ids()              # []
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, Optional, TextIO

import click

from sequential_thinking_mcp.models.thought import ThoughtRecord, ThoughtSummary, wire_str
from sequential_thinking_mcp.thinking.formatting import format_thought

logger = logging.getLogger(__name__)


class ThoughtLedger:
    """Append-only history of thoughts plus a per-branch index.

    Records are never edited or removed once accepted (except by
    :meth:`reset`).  A record joins a branch when it carries both
    ``branch_from_thought`` and ``branch_id``; the first such record for an
    id creates the branch.

    Parameters
    ----------
    render_thoughts:
        Whether to write a boxed rendering of each accepted thought to
        *stream*.
    stream:
        Destination for the rendering.  Defaults to the current
        ``sys.stderr`` at write time.
    formatter:
        Callable producing the rendering.  Defaults to
        :func:`~sequential_thinking_mcp.thinking.formatting.format_thought`.
    """

    def __init__(
        self,
        render_thoughts: bool = True,
        stream: Optional[TextIO] = None,
        formatter: Optional[Callable[[ThoughtRecord], str]] = None,
    ) -> None:
        self._history: list[ThoughtRecord] = []
        self._branches: dict[str, list[ThoughtRecord]] = {}
        self._render_thoughts = render_thoughts
        self._stream = stream
        self._formatter = formatter or format_thought
        # Guards _history and _branches together so append order and the
        # branch index stay consistent if a host dispatches from threads.
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def record(self, entry: ThoughtRecord) -> ThoughtSummary:
        """Accept *entry* and return the resulting status summary.

        If ``entry.thought_number`` exceeds ``entry.total_thoughts`` the
        stored record (and the summary) carry ``total_thoughts`` raised to
        ``thought_number``.
        """
        if entry.thought_number > entry.total_thoughts:
            logger.debug(
                "Raising total_thoughts from %s to %s.",
                entry.total_thoughts,
                entry.thought_number,
            )
            entry = entry.with_total_thoughts(entry.thought_number)

        with self._lock:
            self._history.append(entry)
            if entry.is_branch_member:
                self._branches.setdefault(wire_str(entry.branch_id), []).append(entry)
            summary = ThoughtSummary(
                thought_number=entry.thought_number,
                total_thoughts=entry.total_thoughts,
                next_thought_needed=entry.next_thought_needed,
                branches=list(self._branches),
                thought_history_length=len(self._history),
            )

        logger.debug(
            "Recorded thought %s/%s (history=%d, branches=%d).",
            entry.thought_number,
            entry.total_thoughts,
            summary.thought_history_length,
            len(summary.branches),
        )

        if self._render_thoughts:
            self._render(entry)

        return summary

    def reset(self) -> None:
        """Discard all history and branches."""
        with self._lock:
            self._history.clear()
            self._branches.clear()
        logger.debug("Thought ledger reset.")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def history(self) -> tuple[ThoughtRecord, ...]:
        """All accepted records in call order."""
        with self._lock:
            return tuple(self._history)

    @property
    def branches(self) -> dict[str, tuple[ThoughtRecord, ...]]:
        """A snapshot of the branch index: branch id -> records in call order."""
        with self._lock:
            return {
                branch_id: tuple(records)
                for branch_id, records in self._branches.items()
            }

    def branch_ids(self) -> list[str]:
        """Return known branch ids in first-seen order."""
        with self._lock:
            return list(self._branches)

    @property
    def render_thoughts(self) -> bool:
        return self._render_thoughts

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _render(self, entry: ThoughtRecord) -> None:
        """Write the boxed rendering of *entry*; failures are only logged."""
        try:
            text = self._formatter(entry)
            click.echo(text, file=self._stream or sys.stderr)
        except Exception:
            logger.warning(
                "Could not render thought %s.",
                entry.thought_number,
                exc_info=True,
            )
