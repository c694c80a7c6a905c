"""Agregador de settings do guia_bot.

Re-exporta as settings de cada domínio e o loader YAML.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.assistant import (
    DEFAULT_TOOLS,
    AssistantSettings,
    normalize_api_url,
)
from config.settings.loader import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_PATH,
    BotSettings,
    load_settings,
    parse_settings,
    resolve_config_path,
)
from config.settings.session import (
    DEFAULT_MAX_CONTEXT_MESSAGES,
    SessionSettings,
    coerce_max_context_messages,
)
from config.settings.telegram import (
    TELEGRAM_API_BASE_URL,
    TELEGRAM_MAX_MESSAGE_LENGTH,
    TelegramSettings,
)

__all__ = [
    # Constants
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_MAX_CONTEXT_MESSAGES",
    "DEFAULT_TOOLS",
    "TELEGRAM_API_BASE_URL",
    "TELEGRAM_MAX_MESSAGE_LENGTH",
    # Settings
    "AssistantSettings",
    "BotSettings",
    "SessionSettings",
    "TelegramSettings",
    # Loader
    "coerce_max_context_messages",
    "load_settings",
    "normalize_api_url",
    "parse_settings",
    "resolve_config_path",
]
