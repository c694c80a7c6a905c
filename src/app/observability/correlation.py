"""Gerenciamento de correlation_id para rastreamento de mensagens.

O correlation_id identifica uma mensagem do usuário do recebimento até o
envio da resposta e é injetado em todos os logs. Usa ContextVar: a task
agendada para a mensagem herda o valor vigente no momento do agendamento.

Uso:
    from app.observability import correlation_scope, message_correlation_id

    with correlation_scope(message_correlation_id(update_id)):
        # registrar turno e agendar a task da mensagem
        ...
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def message_correlation_id(update_id: int) -> str:
    """correlation_id estável para um update do Telegram."""
    return f"tg-{update_id}"


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define o correlation_id dentro do bloco e restaura ao sair."""
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
