"""Factories de clientes externos — API do assistente e Telegram."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.telegram import TelegramBotClient
from app.infra.ai import AssistantsApiClient

if TYPE_CHECKING:
    from config.settings import BotSettings

logger = logging.getLogger(__name__)


def create_assistants_client(settings: BotSettings) -> AssistantsApiClient:
    """Cria cliente da API de assistentes a partir das settings."""
    client = AssistantsApiClient(settings.assistant)
    logger.debug("assistants_client_created", extra={"api_url": settings.assistant.api_url})
    return client


def create_telegram_client(settings: BotSettings) -> TelegramBotClient:
    """Cria cliente da Bot API (o token nunca vai para os logs)."""
    client = TelegramBotClient(settings.telegram)
    logger.debug(
        "telegram_client_created",
        extra={"poll_timeout_seconds": settings.telegram.poll_timeout_seconds},
    )
    return client
