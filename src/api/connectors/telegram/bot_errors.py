"""Erros e helpers de parsing para a Telegram Bot API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from utils.errors import TransportError

logger = logging.getLogger(__name__)

# 401/403/404: token inválido, bot bloqueado ou chat inexistente
# 409: webhook ativo ou outro processo em getUpdates
PERMANENT_ERROR_CODES = frozenset({400, 401, 403, 404, 409})


@dataclass(frozen=True)
class BotApiErrorInfo:
    """Erro retornado pela Bot API ({"ok": false, ...})."""

    error_code: int
    description: str
    retry_after: int | None
    is_permanent: bool


class BotApiError(TransportError):
    """Resposta de erro da Bot API (sem token na mensagem)."""

    def __init__(self, method: str, info: BotApiErrorInfo) -> None:
        super().__init__(
            f"telegram_api_error: {method} ({info.error_code})",
            status_code=info.error_code,
        )
        self.method = method
        self.info = info


def parse_bot_error(response_data: Any, status_code: int) -> BotApiErrorInfo | None:
    """Extrai informações de erro do response da Bot API.

    Args:
        response_data: JSON decodificado do response
        status_code: Status HTTP do response

    Returns:
        BotApiErrorInfo se houver erro, None se sucesso
    """
    if isinstance(response_data, dict) and response_data.get("ok") is True:
        return None

    data = response_data if isinstance(response_data, dict) else {}
    error_code = data.get("error_code")
    if not isinstance(error_code, int):
        error_code = status_code
    description = str(data.get("description") or "Erro desconhecido")

    parameters = data.get("parameters")
    retry_after = None
    if isinstance(parameters, dict) and isinstance(parameters.get("retry_after"), int):
        retry_after = parameters["retry_after"]

    return BotApiErrorInfo(
        error_code=error_code,
        description=description,
        retry_after=retry_after,
        is_permanent=error_code in PERMANENT_ERROR_CODES,
    )


def log_bot_error(info: BotApiErrorInfo, method: str) -> None:
    """Loga erro da Bot API sem expor o token."""
    logger.warning(
        "telegram_api_error",
        extra={
            "method": method,
            "error_code": info.error_code,
            "description": info.description,
            "retry_after": info.retry_after,
            "is_permanent": info.is_permanent,
        },
    )
