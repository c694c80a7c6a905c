"""Use case: responder uma mensagem do usuário com o assistente remoto.

Fluxo por mensagem:
1. Resolver/criar a sessão do usuário
2. Registrar o turno do usuário (append + corte da janela)
3. Tirar snapshot do histórico
4. Abrir run em streaming com o snapshot
5. Decodificar o stream
6. Sucesso: registrar turno do assistente e enviar o texto
7. Falha: enviar aviso fixo, sem alterar o histórico

Sem retries nesta camada. Erros por mensagem nunca saem de complete().
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING

from ai.services.reply_stream_decoder import decode_reply_stream
from app.constants.fixed_replies import EMPTY_REPLY_NOTICE, FAILURE_NOTICE
from app.sessions.history import Turn
from config.logging import log_fallback
from utils.errors import DecodeError, EmptyReplyError, TransportError

if TYPE_CHECKING:
    from app.protocols.models import InboundMessage
    from app.protocols.outbound_sender import OutboundSenderProtocol
    from app.protocols.run_client import AssistantRunClientProtocol
    from app.services.provisioning import ProvisionedAssistant
    from app.sessions.registry import SessionRegistry
    from app.sessions.session_entity import Session

logger = logging.getLogger(__name__)

_COMPONENT = "reply_orchestrator"


class ReplyOutcome(Enum):
    """Resultado do processamento de uma mensagem."""

    REPLIED = "replied"
    EMPTY_REPLY = "empty_reply"
    FAILED = "failed"


class ReplyOrchestrator:
    """Orquestra sessão, run remoto, decoder e envio da resposta."""

    def __init__(
        self,
        *,
        registry: SessionRegistry,
        run_client: AssistantRunClientProtocol,
        sender: OutboundSenderProtocol,
        assistant: ProvisionedAssistant,
    ) -> None:
        self._registry = registry
        self._run_client = run_client
        self._sender = sender
        self._assistant = assistant

    async def register_user_turn(self, message: InboundMessage) -> Session:
        """Passos 1-2: sessão do usuário + turno do usuário já na janela."""
        session = await self._registry.get_or_create(message.user_id)
        history_size = await self._registry.append_and_trim(session, Turn.user(message.text))
        logger.info(
            "user_turn_registered",
            extra={
                "user_id": message.user_id,
                "text_length": len(message.text),
                "history_size": history_size,
            },
        )
        return session

    async def complete(self, message: InboundMessage, session: Session) -> ReplyOutcome:
        """Passos 3-7: run remoto e entrega da resposta ou do aviso fixo."""
        started = time.perf_counter()
        history = await self._registry.snapshot(session)

        try:
            stream = await self._run_client.create_run_stream(
                assistant_id=self._assistant.assistant_id,
                index_id=self._assistant.index_id,
                messages=history,
            )
            reply = await decode_reply_stream(stream)
        except EmptyReplyError:
            logger.error("assistant_empty_reply", extra={"user_id": message.user_id})
            log_fallback(logger, _COMPONENT, reason="empty_reply", elapsed_ms=_elapsed_ms(started))
            await self._deliver(message, EMPTY_REPLY_NOTICE)
            return ReplyOutcome.EMPTY_REPLY
        except (TransportError, DecodeError) as exc:
            logger.error(
                "assistant_run_failed",
                extra={
                    "user_id": message.user_id,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            log_fallback(logger, _COMPONENT, reason="run_failed", elapsed_ms=_elapsed_ms(started))
            await self._deliver(message, FAILURE_NOTICE)
            return ReplyOutcome.FAILED

        history_size = await self._registry.append_and_trim(session, Turn.assistant(reply))
        delivered = await self._deliver(message, reply)
        logger.info(
            "reply_completed",
            extra={
                "user_id": message.user_id,
                "reply_length": len(reply),
                "history_size": history_size,
                "delivered": delivered,
                "elapsed_ms": _elapsed_ms(started),
            },
        )
        return ReplyOutcome.REPLIED

    async def handle(self, message: InboundMessage) -> ReplyOutcome:
        """Fluxo completo de uma mensagem, sem agendamento."""
        session = await self.register_user_turn(message)
        return await self.complete(message, session)

    async def _deliver(self, message: InboundMessage, text: str) -> bool:
        """Envia texto ao chat de origem; falhas de envio só são registradas."""
        try:
            await self._sender.send_text(message.chat_id, text)
        except TransportError as exc:
            logger.error(
                "reply_delivery_failed",
                extra={
                    "user_id": message.user_id,
                    "error_type": type(exc).__name__,
                    "status_code": exc.status_code,
                },
            )
            return False
        return True


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
