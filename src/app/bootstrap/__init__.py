"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging e conecta
implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app

    settings = load_settings(resolve_config_path())
    initialize_app(settings)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.bootstrap.clients import create_assistants_client, create_telegram_client
from app.bootstrap.dependencies import create_dispatch_loop, create_session_registry
from app.observability import get_correlation_id
from config.logging import configure_logging

if TYPE_CHECKING:
    from config.settings import BotSettings

# Nome do serviço para logs
SERVICE_NAME = "guia_bot"

# Nível de log usado antes de a configuração ser carregada
DEFAULT_LOG_LEVEL = "INFO"

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "SERVICE_NAME",
    "create_assistants_client",
    "create_dispatch_loop",
    "create_session_registry",
    "create_telegram_client",
    "initialize_app",
]


def initialize_app(settings: BotSettings | None = None) -> None:
    """Configura logging estruturado JSON com correlation_id.

    Sem settings (ex: config ainda não carregada) usa DEFAULT_LOG_LEVEL.
    Token do bot e api_key são mascarados em todas as mensagens.
    """
    if settings is None:
        configure_logging(
            level=DEFAULT_LOG_LEVEL,
            service_name=SERVICE_NAME,
            correlation_id_getter=get_correlation_id,
        )
        return

    configure_logging(
        level=settings.log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        secrets=(settings.telegram.bot_token, settings.assistant.api_key),
    )

