"""Logging estruturado JSON do guia_bot.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="guia_bot")
    logger = get_logger(__name__)
    logger.info("reply_completed", extra={"user_id": 42})

Texto de usuário e respostas do assistente não vão para os logs.
"""

from config.logging.config import (
    DEFAULT_SERVICE_NAME,
    NOISY_LOGGERS,
    VALID_LOG_LEVELS,
    configure_logging,
    get_logger,
    log_fallback,
    normalize_log_level,
)
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REDACTED,
    REQUIRED_LOG_FIELDS,
    RedactingJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FIELD_RENAME_MAP",
    "NOISY_LOGGERS",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    "VALID_LOG_LEVELS",
    "CorrelationIdFilter",
    "RedactingJsonFormatter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "normalize_log_level",
]
