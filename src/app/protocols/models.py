"""Modelos compartilhados entre canal de entrada e casos de uso."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """Mensagem de texto recebida do canal, já normalizada.

    Atributos:
        update_id: ID do update no canal (usado no correlation_id)
        user_id: Identidade do remetente (chave da sessão)
        chat_id: Destino da resposta
        text: Texto enviado pelo usuário
        username: Username público do remetente, quando houver
    """

    update_id: int
    user_id: int | str
    chat_id: int | str
    text: str
    username: str | None = None

    @property
    def has_text(self) -> bool:
        return bool(self.text)
