"""Protocolos de envio outbound."""

from __future__ import annotations

from typing import Protocol


class OutboundSenderProtocol(Protocol):
    """Contrato mínimo para entregar texto ao usuário."""

    async def send_text(self, chat_id: int | str, text: str) -> None: ...
