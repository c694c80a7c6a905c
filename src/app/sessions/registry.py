"""Registro de sessões por usuário.

Duas camadas de sincronização:
- registro: lock leitores/escritor (buscas concorrentes, inserção exclusiva)
- sessão: um asyncio.Lock por sessão, usado por append_and_trim e snapshot

Vive apenas na memória do processo; sessões nunca são removidas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.sessions.rwlock import ReadWriteLock
from app.sessions.session_entity import Session, UserKey
from config.settings.session import DEFAULT_MAX_CONTEXT_MESSAGES

if TYPE_CHECKING:
    from app.sessions.history import Turn

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Mapa user_id -> Session com no máximo uma sessão por usuário."""

    def __init__(self, max_context_messages: int = DEFAULT_MAX_CONTEXT_MESSAGES) -> None:
        if max_context_messages < 1:
            raise ValueError("max_context_messages deve ser >= 1")
        self._max_context_messages = max_context_messages
        self._sessions: dict[UserKey, Session] = {}
        self._lock = ReadWriteLock()

    @property
    def max_context_messages(self) -> int:
        return self._max_context_messages

    async def get(self, user_id: UserKey) -> Session | None:
        """Busca sessão existente sem criar."""
        async with self._lock.read():
            return self._sessions.get(user_id)

    async def get_or_create(self, user_id: UserKey) -> Session:
        """Retorna a sessão do usuário, criando-a na primeira mensagem.

        A criação é repetida sob o lock de escrita: chamadas concorrentes para
        o mesmo usuário novo recebem a mesma instância.
        """
        session = await self.get(user_id)
        if session is not None:
            return session

        async with self._lock.write():
            session = self._sessions.get(user_id)
            if session is None:
                session = Session(user_id=user_id, max_turns=self._max_context_messages)
                self._sessions[user_id] = session
                logger.debug(
                    "session_created",
                    extra={"user_id": user_id, "sessions": len(self._sessions)},
                )
        return session

    async def append_and_trim(self, session: Session, turn: Turn) -> int:
        """Adiciona turno à sessão respeitando a janela configurada."""
        return await session.append_and_trim(turn)

    async def snapshot(self, session: Session) -> tuple[Turn, ...]:
        """Cópia do histórico da sessão para envio ao run."""
        return await session.snapshot()

    def __len__(self) -> int:
        return len(self._sessions)
