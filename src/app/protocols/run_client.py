"""Protocolos do cliente de runs do assistente."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ai.services.reply_stream_decoder import LineSource
    from app.sessions.history import Turn


class AssistantRunClientProtocol(Protocol):
    """Contrato para abrir um run com resposta em streaming.

    Falhas de rede ou status HTTP de erro levantam TransportError.
    """

    async def create_run_stream(
        self,
        *,
        assistant_id: str,
        index_id: str,
        messages: Sequence[Turn],
    ) -> LineSource: ...
