"""Settings específicas de Telegram.

Configurações do canal Telegram via Bot API (long polling).
"""

from __future__ import annotations

from dataclasses import dataclass

# Constantes da Telegram Bot API
TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"
TELEGRAM_MAX_MESSAGE_LENGTH: int = 4096


@dataclass(frozen=True)
class TelegramSettings:
    """Configurações do canal Telegram.

    Attributes:
        bot_token: Token do bot Telegram (obtido via @BotFather)
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        poll_timeout_seconds: Timeout do long polling (getUpdates)
    """

    # Credenciais
    bot_token: str = ""

    # API
    api_base_url: str = TELEGRAM_API_BASE_URL

    # Timeouts
    request_timeout_seconds: float = 30.0
    poll_timeout_seconds: int = 60

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com token do bot."""
        if not self.bot_token:
            raise ValueError("bot_token é obrigatório")
        return f"{self.api_base_url.rstrip('/')}/bot{self.bot_token}/"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Telegram."""
        errors: list[str] = []
        if not self.bot_token:
            errors.append("telegram_bot_token não configurado")
        if self.request_timeout_seconds <= 0:
            errors.append("request_timeout_seconds deve ser > 0")
        if self.poll_timeout_seconds < 0:
            errors.append("poll_timeout_seconds deve ser >= 0")
        return errors
