"""Entidade de sessão: histórico limitado de um usuário."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.sessions.history import Turn

UserKey = int | str


@dataclass(eq=False, slots=True)
class Session:
    """Sessão de conversa de um usuário.

    O histórico só é lido ou alterado sob o lock da própria sessão.
    Sessões de usuários diferentes nunca disputam o mesmo lock.
    """

    user_id: UserKey
    max_turns: int
    _turns: list[Turn] = field(default_factory=list, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.max_turns < 1:
            raise ValueError("max_turns deve ser >= 1")

    async def append_and_trim(self, turn: Turn) -> int:
        """Adiciona turno ao fim e descarta os mais antigos acima do limite.

        Returns:
            Tamanho do histórico após o corte.
        """
        async with self._lock:
            self._turns.append(turn)
            overflow = len(self._turns) - self.max_turns
            if overflow > 0:
                del self._turns[:overflow]
            return len(self._turns)

    async def snapshot(self) -> tuple[Turn, ...]:
        """Cópia independente do histórico atual."""
        async with self._lock:
            return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)
