"""Settings de sessão/conversação.

Janela de histórico por usuário e limite de runs simultâneos.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_CONTEXT_MESSAGES = 10


@dataclass(frozen=True)
class SessionSettings:
    """Configurações de sessão/conversação.

    Attributes:
        max_context_messages: Máximo de turnos mantidos por usuário
        max_concurrent_runs: Limite de runs em andamento (0 = sem limite)
    """

    max_context_messages: int = DEFAULT_MAX_CONTEXT_MESSAGES
    max_concurrent_runs: int = 0

    def validate(self) -> list[str]:
        """Valida configurações de sessão.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.max_context_messages < 1:
            errors.append("max_context_messages deve ser >= 1")

        if self.max_concurrent_runs < 0:
            errors.append("max_concurrent_runs deve ser >= 0")

        return errors


def coerce_max_context_messages(value: object) -> int:
    """Aplica o padrão quando o valor está ausente ou não é positivo."""
    try:
        parsed = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return DEFAULT_MAX_CONTEXT_MESSAGES
    return parsed if parsed > 0 else DEFAULT_MAX_CONTEXT_MESSAGES
