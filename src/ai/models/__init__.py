"""Modelos/DTOs para IA.

Re-exporta as variantes de evento do stream de um run.
"""

from ai.models.stream_events import (
    COMPLETED_OBJECT,
    DATA_PREFIX,
    DELTA_OBJECT,
    DONE_TOKEN,
    CompletedEvent,
    DeltaContent,
    DeltaEvent,
    MessageDelta,
    OtherEvent,
    StreamEvent,
    TextValue,
    parse_stream_event,
)

__all__ = [
    "COMPLETED_OBJECT",
    "DATA_PREFIX",
    "DELTA_OBJECT",
    "DONE_TOKEN",
    "CompletedEvent",
    "DeltaContent",
    "DeltaEvent",
    "MessageDelta",
    "OtherEvent",
    "StreamEvent",
    "TextValue",
    "parse_stream_event",
]
