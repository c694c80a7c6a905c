"""Módulo AI do guia_bot.

Contratos dos eventos de streaming do assistente e o decoder que monta a
resposta final a partir dos deltas.
"""

from ai.models import (
    CompletedEvent,
    DeltaEvent,
    OtherEvent,
    StreamEvent,
    parse_stream_event,
)
from ai.services import LineSource, decode_reply_stream

__all__ = [
    "CompletedEvent",
    "DeltaEvent",
    "LineSource",
    "OtherEvent",
    "StreamEvent",
    "decode_reply_stream",
    "parse_stream_event",
]
