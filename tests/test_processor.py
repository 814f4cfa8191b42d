"""Tests for ThinkingProcessor -- the validate-then-record call boundary.

Exercises the call result contract (content list, isError flag, pretty JSON)
and the ledger properties observable through it: growth per call,
self-correction, zero rejection, branch indexing, and non-mutation on
failure.
"""

import json

import pytest

from sequential_thinking_mcp.config import ThinkingConfig
from sequential_thinking_mcp.models import ThoughtRecord
from sequential_thinking_mcp.thinking.ledger import ThoughtLedger
from sequential_thinking_mcp.thinking.processor import (
    ThinkingProcessor,
    error_result,
    text_result,
)


def _payload(**overrides) -> dict:
    data = {
        "thought": "Work through the problem",
        "thoughtNumber": 1,
        "totalThoughts": 3,
        "nextThoughtNeeded": True,
    }
    data.update(overrides)
    return data


def _body(result: dict) -> dict:
    assert len(result["content"]) == 1
    part = result["content"][0]
    assert part["type"] == "text"
    return json.loads(part["text"])


@pytest.fixture
def processor() -> ThinkingProcessor:
    return ThinkingProcessor(config=ThinkingConfig(disable_thought_logging=True))


# ---------------------------------------------------------------------------
# Response contract
# ---------------------------------------------------------------------------


class TestSuccessResult:
    def test_shape(self, processor):
        result = processor.process_thought(_payload())
        assert "isError" not in result
        assert _body(result) == {
            "thoughtNumber": 1,
            "totalThoughts": 3,
            "nextThoughtNeeded": True,
            "branches": [],
            "thoughtHistoryLength": 1,
        }

    def test_key_order(self, processor):
        body = _body(processor.process_thought(_payload()))
        assert list(body) == [
            "thoughtNumber",
            "totalThoughts",
            "nextThoughtNeeded",
            "branches",
            "thoughtHistoryLength",
        ]

    def test_text_is_pretty_printed(self, processor):
        text = processor.process_thought(_payload())["content"][0]["text"]
        assert text.startswith("{\n  \"thoughtNumber\": 1")

    def test_next_thought_needed_false_echoed(self, processor):
        body = _body(processor.process_thought(_payload(nextThoughtNeeded=False)))
        assert body["nextThoughtNeeded"] is False

    def test_integral_float_numbers_echoed_as_ints(self, processor):
        text = processor.process_thought(_payload(thoughtNumber=2.0, totalThoughts=3.0))[
            "content"
        ][0]["text"]
        assert '"thoughtNumber": 2,' in text
        assert '"totalThoughts": 3,' in text


class TestErrorResult:
    def test_shape(self, processor):
        result = processor.process_thought(_payload(thought=""))
        assert result["isError"] is True
        assert _body(result) == {
            "error": "Invalid thought: must be a string",
            "status": "failed",
        }

    def test_unexpected_fault_is_captured(self):
        class ExplodingLedger(ThoughtLedger):
            def record(self, entry):
                raise RuntimeError("disk on fire")

        processor = ThinkingProcessor(
            config=ThinkingConfig(disable_thought_logging=True),
            ledger=ExplodingLedger(render_thoughts=False),
        )
        result = processor.process_thought(_payload())
        assert result["isError"] is True
        assert _body(result) == {"error": "disk on fire", "status": "failed"}

    @pytest.mark.parametrize("payload", [None, "text", 3, [], {}])
    def test_garbage_payload_never_raises(self, processor, payload):
        result = processor.process_thought(payload)
        assert result["isError"] is True

    def test_result_builders(self):
        assert text_result({"a": 1}) == {"content": [{"type": "text", "text": '{\n  "a": 1\n}'}]}
        err = error_result("boom")
        assert err["isError"] is True
        assert json.loads(err["content"][0]["text"]) == {"error": "boom", "status": "failed"}


# ---------------------------------------------------------------------------
# Ledger properties through the boundary
# ---------------------------------------------------------------------------


class TestLedgerProperties:
    def test_history_length_increases_by_one(self, processor):
        for n in range(1, 5):
            body = _body(processor.process_thought(_payload(thoughtNumber=n)))
            assert body["thoughtHistoryLength"] == n
            assert len(processor.ledger) == n

    def test_self_correction(self, processor):
        body = _body(processor.process_thought(_payload(thoughtNumber=5, totalThoughts=3)))
        assert body["totalThoughts"] == 5
        assert processor.ledger.history[-1].total_thoughts == 5

    def test_zero_thought_number_rejected_without_mutation(self, processor):
        processor.process_thought(_payload())
        result = processor.process_thought(_payload(thoughtNumber=0))
        assert result["isError"] is True
        assert _body(result)["error"] == "Invalid thoughtNumber: must be a number"
        assert len(processor.ledger) == 1

    def test_branch_indexing(self, processor):
        first = _body(
            processor.process_thought(_payload(thoughtNumber=3, branchFromThought=2, branchId="x"))
        )
        assert first["branches"] == ["x"]

        later = _body(processor.process_thought(_payload(thoughtNumber=4)))
        assert later["branches"] == ["x"]

        again = _body(
            processor.process_thought(_payload(thoughtNumber=5, branchFromThought=2, branchId="x"))
        )
        assert again["branches"] == ["x"]
        assert len(processor.ledger.branches["x"]) == 2

    def test_missing_next_thought_needed(self, processor):
        payload = _payload()
        del payload["nextThoughtNeeded"]
        result = processor.process_thought(payload)
        assert _body(result)["error"] == "Invalid nextThoughtNeeded: must be a boolean"
        assert len(processor.ledger) == 0

    @pytest.mark.parametrize(
        "bad",
        [
            {"thought": None},
            {"thoughtNumber": "1"},
            {"totalThoughts": 0},
            {"nextThoughtNeeded": "yes"},
        ],
    )
    def test_failed_call_leaves_state_unchanged(self, processor, bad):
        processor.process_thought(_payload(thoughtNumber=2, branchFromThought=1, branchId="b"))
        history_before = processor.ledger.history
        branches_before = processor.ledger.branches

        result = processor.process_thought(_payload(**bad))

        assert result["isError"] is True
        assert processor.ledger.history == history_before
        assert processor.ledger.branches == branches_before

    def test_failure_does_not_affect_next_call(self, processor):
        processor.process_thought(_payload(thought=""))
        body = _body(processor.process_thought(_payload()))
        assert body["thoughtHistoryLength"] == 1

    def test_three_call_sequence(self, processor):
        lengths = []
        for n in (1, 2, 3):
            body = _body(
                processor.process_thought(
                    _payload(thoughtNumber=n, totalThoughts=3, nextThoughtNeeded=n < 3)
                )
            )
            lengths.append(body["thoughtHistoryLength"])
            assert body["branches"] == []
            assert body["totalThoughts"] == 3
        assert lengths == [1, 2, 3]

    def test_records_are_thought_records(self, processor):
        processor.process_thought(_payload(isRevision=True, revisesThought=1))
        stored = processor.ledger.history[0]
        assert isinstance(stored, ThoughtRecord)
        assert stored.is_revision is True
        assert stored.revises_thought == 1


# ---------------------------------------------------------------------------
# Configuration wiring
# ---------------------------------------------------------------------------


class TestConfigWiring:
    def test_rendering_disabled_by_config(self):
        processor = ThinkingProcessor(config=ThinkingConfig(disable_thought_logging=True))
        assert processor.ledger.render_thoughts is False

    def test_rendering_enabled_by_default_config(self):
        processor = ThinkingProcessor(config=ThinkingConfig())
        assert processor.ledger.render_thoughts is True

    def test_env_toggle_used_when_no_config(self, monkeypatch):
        monkeypatch.setenv("DISABLE_THOUGHT_LOGGING", "TRUE")
        processor = ThinkingProcessor()
        assert processor.config.disable_thought_logging is True
        assert processor.ledger.render_thoughts is False

    def test_rendering_goes_to_stderr(self, capsys):
        processor = ThinkingProcessor(config=ThinkingConfig())
        processor.process_thought(_payload())
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Thought 1/3" in captured.err
