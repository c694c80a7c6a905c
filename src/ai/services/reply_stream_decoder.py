"""Decoder do stream de resposta do assistente.

Lê linhas server-sent events de uma conexão aberta, concatena os fragmentos
de texto dos eventos delta e devolve a resposta completa.

Regras:
- linhas vazias ou sem o prefixo "data: " são ignoradas
- "data: [DONE]" encerra a leitura imediatamente
- eventos malformados são registrados e descartados, sem abortar
- thread.message.completed não encerra a leitura; só [DONE] ou EOF encerram
- a fonte é sempre fechada ao sair, em qualquer caminho
- qualquer erro do httpx durante a leitura (rede, decodificação do corpo)
  vira StreamReadError
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import httpx

from ai.models.stream_events import (
    DATA_PREFIX,
    DONE_TOKEN,
    CompletedEvent,
    DeltaEvent,
    parse_stream_event,
)
from utils.errors import EmptyReplyError, MalformedEventError, StreamReadError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    """Fonte de linhas assíncrona com fechamento explícito.

    httpx.Response aberto com stream=True satisfaz este contrato.
    """

    def aiter_lines(self) -> AsyncIterator[str]: ...

    async def aclose(self) -> None: ...


async def decode_reply_stream(source: LineSource) -> str:
    """Reconstrói o texto da resposta a partir do stream de eventos.

    Args:
        source: Conexão de streaming aberta.

    Returns:
        Texto completo, nunca vazio.

    Raises:
        EmptyReplyError: Nenhum fragmento de texto foi recebido.
        StreamReadError: A leitura falhou antes do fim limpo do stream.
    """
    fragments: list[str] = []
    events = 0
    malformed = 0
    completed_messages = 0
    done = False

    try:
        async for raw_line in source.aiter_lines():
            line = raw_line.strip()
            if not line.startswith(DATA_PREFIX):
                continue

            data = line[len(DATA_PREFIX):]
            if data == DONE_TOKEN:
                done = True
                break

            try:
                event = parse_stream_event(data)
            except MalformedEventError as exc:
                malformed += 1
                logger.warning("stream_event_malformed", extra={"reason": str(exc)})
                continue

            events += 1
            if isinstance(event, DeltaEvent):
                fragments.extend(event.fragments())
            elif isinstance(event, CompletedEvent):
                completed_messages += 1
                logger.debug("stream_message_completed", extra={"message_id": event.id})
    except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
        logger.warning("stream_read_failed", extra={"error_type": type(exc).__name__})
        raise StreamReadError(f"Erro ao ler evento do stream: {type(exc).__name__}") from exc
    finally:
        await source.aclose()

    reply = "".join(fragments)
    logger.debug(
        "stream_decoded",
        extra={
            "events": events,
            "malformed_events": malformed,
            "completed_messages": completed_messages,
            "done_token": done,
            "reply_length": len(reply),
        },
    )

    if not reply:
        raise EmptyReplyError("Resposta vazia do assistente")
    return reply
