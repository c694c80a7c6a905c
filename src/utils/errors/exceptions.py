"""Exceções de domínio do guia_bot.

Classes fatais (StartupError) encerram o processo com exit code 1, no
startup ou quando o Telegram recusa o polling de forma permanente.
Classes por mensagem (TransportError, DecodeError) são tratadas no
orquestrador e viram um aviso fixo para o usuário.
"""

from __future__ import annotations


class GuiaBotError(RuntimeError):
    """Base para todas as falhas conhecidas do serviço."""


class StartupError(GuiaBotError):
    """Falha fatal que encerra o processo (exit code != 0)."""


class ConfigError(StartupError):
    """Arquivo de configuração ausente, ilegível ou inválido."""


class FrontendAuthError(StartupError):
    """Token do bot recusado pela Bot API do Telegram."""


class FrontendPollingError(StartupError):
    """getUpdates recusado de forma permanente (token revogado, webhook ativo)."""


class ProvisioningError(StartupError):
    """Falha ao criar assistente, índice ou ao anexar o índice."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        detail = f"{message}: {body}" if body else message
        super().__init__(detail)
        self.status_code = status_code
        self.body = body


class TransportError(GuiaBotError):
    """Falha de rede ou status HTTP de erro em chamada remota."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(GuiaBotError):
    """Falha ao reconstruir a resposta a partir do stream de eventos."""


class EmptyReplyError(DecodeError):
    """Stream terminou sem nenhum fragmento de texto."""


class StreamReadError(DecodeError):
    """Leitura do stream falhou antes do fim limpo."""


class MalformedEventError(ValueError):
    """Evento individual do stream com JSON ou formato inválido."""
