"""Loop de despacho: consome mensagens e agenda uma task por mensagem.

Para cada mensagem com texto o turno do usuário é registrado antes do
agendamento; o run remoto e a entrega seguem em uma asyncio.Task
independente, sem bloquear a leitura da próxima mensagem.

Sem limite de tasks por padrão. Com max_concurrent_runs > 0 as tasks
aguardam um semáforo antes de abrir o run (a leitura nunca bloqueia).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

from app.observability import correlation_scope, message_correlation_id

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from app.protocols.inbound_source import InboundSourceProtocol
    from app.protocols.models import InboundMessage
    from app.use_cases.assistant.reply_orchestrator import ReplyOrchestrator

logger = logging.getLogger(__name__)


class DispatchLoop:
    """Consumidor único das mensagens de entrada."""

    def __init__(
        self,
        *,
        source: InboundSourceProtocol,
        orchestrator: ReplyOrchestrator,
        max_concurrent_runs: int = 0,
    ) -> None:
        if max_concurrent_runs < 0:
            raise ValueError("max_concurrent_runs deve ser >= 0")
        self._source = source
        self._orchestrator = orchestrator
        self._semaphore = asyncio.Semaphore(max_concurrent_runs) if max_concurrent_runs else None
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def active_tasks(self) -> int:
        return len(self._active_tasks)

    async def run(self) -> int:
        """Consome a fonte até o fim (ou cancelamento).

        Returns:
            Quantidade de mensagens agendadas.
        """
        scheduled = 0
        async for message in self._source.messages():
            if await self.dispatch(message) is not None:
                scheduled += 1
        logger.info("dispatch_loop_finished", extra={"scheduled": scheduled})
        return scheduled

    async def dispatch(self, message: InboundMessage) -> asyncio.Task[Any] | None:
        """Registra o turno do usuário e agenda o restante do fluxo."""
        if not message.has_text:
            logger.debug("inbound_message_skipped", extra={"update_id": message.update_id})
            return None

        # A task copia o contexto atual: o correlation_id segue para ela.
        with correlation_scope(message_correlation_id(message.update_id)) as correlation_id:
            session = await self._orchestrator.register_user_turn(message)
            task = asyncio.create_task(
                self._run_with_limit(self._orchestrator.complete(message, session)),
                name=f"reply-{correlation_id}",
            )
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        logger.debug(
            "reply_task_scheduled",
            extra={
                "correlation_id": correlation_id,
                "user_id": message.user_id,
                "active_tasks": len(self._active_tasks),
            },
        )
        return task

    async def _run_with_limit(self, coroutine: Awaitable[Any]) -> None:
        if self._semaphore is None:
            await coroutine
            return
        async with self._semaphore:
            await coroutine

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "reply_task_failed",
                    extra={
                        "task": task.get_name(),
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active_tasks),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes durante o shutdown do processo."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "reply_tasks_shutdown_wait",
            extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "reply_tasks_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
