"""Testes do parse dos eventos do stream de runs."""

from __future__ import annotations

import json

import pytest

from ai.models.stream_events import (
    CompletedEvent,
    DeltaEvent,
    OtherEvent,
    parse_stream_event,
)
from utils.errors import MalformedEventError


def _delta(content: object) -> str:
    return json.dumps({"object": "thread.message.delta", "delta": {"content": content}})


class TestParseStreamEvent:
    """Testes de parse_stream_event."""

    def test_delta_event_fragments(self) -> None:
        event = parse_stream_event(
            _delta([{"type": "text", "text": {"value": "Hel"}}, {"type": "text", "text": {"value": "lo"}}])
        )

        assert isinstance(event, DeltaEvent)
        assert event.fragments() == ["Hel", "lo"]

    def test_delta_items_without_text_are_ignored(self) -> None:
        event = parse_stream_event(
            _delta(
                [
                    {"type": "image_file", "image_file": {"file_id": "f1"}},
                    {"type": "text", "text": {"value": 42}},
                    {"type": "text", "text": "solto"},
                    "lixo",
                    {"type": "text", "text": {"value": "ok"}},
                ]
            )
        )

        assert isinstance(event, DeltaEvent)
        assert event.fragments() == ["ok"]

    def test_delta_with_non_list_content_has_no_fragments(self) -> None:
        event = parse_stream_event(_delta("texto"))
        assert isinstance(event, DeltaEvent)
        assert event.fragments() == []

    def test_completed_event(self) -> None:
        event = parse_stream_event('{"id": "msg_9", "object": "thread.message.completed"}')
        assert isinstance(event, CompletedEvent)
        assert event.id == "msg_9"

    def test_unknown_object_is_other_event(self) -> None:
        event = parse_stream_event('{"object": "thread.run.step.created", "id": "step_1"}')
        assert isinstance(event, OtherEvent)
        assert event.object == "thread.run.step.created"

    @pytest.mark.parametrize(
        "data",
        [
            "{nao-e-json",
            "[1, 2]",
            '{"id": "sem-object"}',
            '{"object": 7}',
            '{"object": "thread.message.delta"}',
        ],
    )
    def test_malformed_payloads_raise(self, data: str) -> None:
        with pytest.raises(MalformedEventError):
            parse_stream_event(data)
