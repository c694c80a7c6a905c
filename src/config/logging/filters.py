"""Filter de logging que injeta o contexto da mensagem.

Campos injetados por CorrelationIdFilter:
- correlation_id: ID da mensagem em processamento (ex: "tg-1042")
- service: Nome do serviço (ex: guia_bot)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Enriquece cada record com service e correlation_id.

    Um correlation_id passado via `extra` tem precedência sobre o getter.
    Sem getter, o campo fica vazio fora do processamento de mensagens.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter

    def _current_correlation_id(self) -> str:
        if self._correlation_id_getter is None:
            return ""
        return self._correlation_id_getter()

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._current_correlation_id()
        record.service = self._service_name
        return True
