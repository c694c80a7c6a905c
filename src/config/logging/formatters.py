"""Formatter JSON dos logs do guia_bot.

Campos fixos, nesta ordem: asctime, level, logger, message,
correlation_id, service. Campos de `extra` entram no mesmo objeto.

Segredos conhecidos (token do bot, api_key) saem como "***". A URL da
Bot API contém o token.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pythonjsonlogger.json import JsonFormatter

if TYPE_CHECKING:
    from collections.abc import Iterable

REDACTED = "***"

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


class RedactingJsonFormatter(JsonFormatter):
    """JsonFormatter que troca segredos na linha já serializada.

    O record não é alterado: outros handlers do mesmo logger recebem a
    mensagem original.
    """

    def __init__(self, *args: Any, secrets: Iterable[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._secrets = tuple(sorted({s for s in secrets if s}, key=len, reverse=True))

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        for secret in self._secrets:
            line = line.replace(secret, REDACTED)
        return line


def create_json_formatter(secrets: Iterable[str] = ()) -> RedactingJsonFormatter:
    """Cria o formatter JSON com os campos fixos renomeados.

    Textos fora de ASCII (nomes de documentos, instruções) saem legíveis.

    Exemplo de linha:
        {"asctime": "2026-02-02 10:30:00,120", "level": "INFO",
         "logger": "app.use_cases.assistant.reply_orchestrator",
         "message": "reply_completed", "correlation_id": "tg-1042",
         "service": "guia_bot", "reply_length": 311}
    """
    return RedactingJsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
        secrets=secrets,
    )
