"""Configuração do logging JSON do processo.

Uma chamada no bootstrap instala um único handler no root logger com:
- formatter JSON (config.logging.formatters)
- correlation_id e service em todo record
- segredos conhecidos trocados por "***"

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="guia_bot", secrets=(token,))
    logger = get_logger(__name__)
    logger.info("assistant_ready", extra={"assistant_id": "asst_123"})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "guia_bot"

# Clientes HTTP logam a URL completa em INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def normalize_log_level(level: str) -> str:
    """Retorna o nível em maiúsculas.

    Raises:
        ValueError: Nível fora de VALID_LOG_LEVELS.
    """
    level_upper = level.strip().upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    return level_upper


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    secrets: Iterable[str] = (),
    stream: TextIO | None = None,
) -> logging.Handler:
    """Instala o handler JSON no root logger, substituindo os existentes.

    Args:
        level: Nível de log (case insensitive).
        service_name: Valor do campo "service".
        correlation_id_getter: Função que lê o correlation_id do contexto.
        secrets: Valores que nunca podem aparecer nas linhas emitidas.
        stream: Destino das linhas (padrão: stdout).

    Returns:
        O handler instalado.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = normalize_log_level(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter(secrets))
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]

    quiet_level = max(logging.WARNING, root.level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger do módulo; service e correlation_id vêm do handler."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que uma resposta fixa substituiu a resposta do assistente.

    Args:
        logger: Logger do componente.
        component: Nome do componente (ex: "reply_orchestrator").
        reason: Motivo sem PII (ex: "empty_reply", "run_failed").
        elapsed_ms: Tempo do run até a falha.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    logger.info("Fallback applied for %s", component, extra=extra)
