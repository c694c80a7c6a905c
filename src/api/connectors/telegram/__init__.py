"""Connector Telegram Bot API."""

from .bot_client import TelegramBotClient
from .bot_errors import BotApiError, BotApiErrorInfo, parse_bot_error

__all__ = [
    "BotApiError",
    "BotApiErrorInfo",
    "TelegramBotClient",
    "parse_bot_error",
]
