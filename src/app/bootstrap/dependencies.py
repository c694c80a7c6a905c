"""Wiring dos componentes de atendimento após o provisionamento."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.sessions import SessionRegistry
from app.use_cases.assistant import DispatchLoop, ReplyOrchestrator

if TYPE_CHECKING:
    from app.protocols import (
        AssistantRunClientProtocol,
        InboundSourceProtocol,
        OutboundSenderProtocol,
    )
    from app.services.provisioning import ProvisionedAssistant
    from config.settings import BotSettings

logger = logging.getLogger(__name__)


def create_session_registry(settings: BotSettings) -> SessionRegistry:
    """Cria registro de sessões com a janela configurada."""
    return SessionRegistry(settings.session.max_context_messages)


def create_dispatch_loop(
    settings: BotSettings,
    *,
    assistant: ProvisionedAssistant,
    run_client: AssistantRunClientProtocol,
    source: InboundSourceProtocol,
    sender: OutboundSenderProtocol,
    registry: SessionRegistry | None = None,
) -> DispatchLoop:
    """Monta orquestrador + loop de despacho com dependências explícitas."""
    orchestrator = ReplyOrchestrator(
        registry=registry or create_session_registry(settings),
        run_client=run_client,
        sender=sender,
        assistant=assistant,
    )
    loop = DispatchLoop(
        source=source,
        orchestrator=orchestrator,
        max_concurrent_runs=settings.session.max_concurrent_runs,
    )
    logger.info(
        "dispatch_loop_created",
        extra={
            "max_context_messages": settings.session.max_context_messages,
            "max_concurrent_runs": settings.session.max_concurrent_runs,
        },
    )
    return loop
