"""Protocolos do canal de entrada."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from .models import InboundMessage


class InboundSourceProtocol(Protocol):
    """Entrega mensagens uma a uma, na ordem de chegada.

    O iterador bloqueia enquanto não houver mensagens.
    """

    def messages(self) -> AsyncIterator[InboundMessage]: ...
