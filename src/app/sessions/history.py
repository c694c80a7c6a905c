"""Tipos de histórico da sessão."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class TurnRole(Enum):
    """Role do turno no histórico."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class Turn:
    """Turno imutável do histórico de conversa."""

    role: TurnRole
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def user(cls, content: str) -> Turn:
        return cls(role=TurnRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> Turn:
        return cls(role=TurnRole.ASSISTANT, content=content)

    def to_message(self) -> dict[str, str]:
        """Formato de mensagem aceito pelo thread do run."""
        return {"role": self.role.value, "content": self.content}
