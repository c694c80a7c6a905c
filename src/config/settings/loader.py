"""Loader do arquivo YAML de configuração do guia_bot.

Carrega config.yaml e monta as settings tipadas de cada domínio.
Falhas de leitura, parse ou validação levantam ConfigError.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from config.logging.config import VALID_LOG_LEVELS
from config.settings.assistant import (
    DEFAULT_TOOLS,
    AssistantSettings,
    normalize_api_url,
)
from config.settings.session import SessionSettings, coerce_max_context_messages
from config.settings.telegram import TELEGRAM_API_BASE_URL, TelegramSettings
from utils.errors import ConfigError

DEFAULT_CONFIG_PATH = "config.yaml"
CONFIG_PATH_ENV = "GUIA_BOT_CONFIG"


@dataclass(frozen=True)
class BotSettings:
    """Agregador de todas as configurações do serviço.

    Passado explicitamente aos componentes no composition root.
    """

    assistant: AssistantSettings = field(default_factory=AssistantSettings)
    telegram: TelegramSettings = field(default_factory=TelegramSettings)
    session: SessionSettings = field(default_factory=SessionSettings)
    log_level: str = "INFO"

    def validate(self) -> list[str]:
        """Valida todas as seções, prefixando os erros pelo domínio."""
        errors: list[str] = []
        errors.extend(f"assistant: {error}" for error in self.assistant.validate())
        errors.extend(f"telegram: {error}" for error in self.telegram.validate())
        errors.extend(f"session: {error}" for error in self.session.validate())
        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level inválido: {self.log_level}")
        return errors


def resolve_config_path(cli_value: str | None = None) -> Path:
    """Resolve caminho do config: flag CLI > env GUIA_BOT_CONFIG > padrão."""
    return Path(cli_value or os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))


def load_settings(path: str | Path) -> BotSettings:
    """Carrega e valida BotSettings a partir de um arquivo YAML.

    Args:
        path: Caminho do arquivo YAML.

    Returns:
        BotSettings validadas.

    Raises:
        ConfigError: Se o arquivo não puder ser lido, parseado ou validado.
    """
    yaml_path = Path(path)
    try:
        with yaml_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Erro ao ler arquivo de configuração {yaml_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Erro ao parsear arquivo de configuração {yaml_path}: {exc}") from exc

    settings = parse_settings(data)
    errors = settings.validate()
    if errors:
        details = "\n".join(f"- {error}" for error in errors)
        raise ConfigError(f"Configuração inválida em {yaml_path}:\n{details}")
    return settings


def parse_settings(data: Any) -> BotSettings:
    """Converte o dict do YAML em BotSettings (sem validar)."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuração deve ser um mapeamento YAML")

    try:
        assistant = AssistantSettings(
            api_url=normalize_api_url(str(data.get("api_url") or "")),
            api_key=str(data.get("api_key") or ""),
            name=str(data.get("name") or ""),
            instructions=str(data.get("instructions") or ""),
            model=str(data.get("model") or ""),
            tools=_parse_tools(data.get("tools")),
            files_path=str(data.get("files_path") or "files"),
            temperature=float(data.get("temperature", 1.0)),
            top_p=float(data.get("top_p", 1.0)),
            request_timeout_seconds=float(data.get("request_timeout_seconds", 30.0)),
        )
        telegram = TelegramSettings(
            bot_token=str(data.get("telegram_bot_token") or ""),
            api_base_url=str(data.get("telegram_api_url") or TELEGRAM_API_BASE_URL),
            request_timeout_seconds=float(data.get("request_timeout_seconds", 30.0)),
            poll_timeout_seconds=int(data.get("poll_timeout_seconds", 60)),
        )
        session = SessionSettings(
            max_context_messages=coerce_max_context_messages(
                data.get("max_context_messages")
            ),
            max_concurrent_runs=int(data.get("max_concurrent_runs") or 0),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Valor inválido na configuração: {exc}") from exc

    log_level = os.getenv("LOG_LEVEL") or str(data.get("log_level") or "INFO")
    return BotSettings(
        assistant=assistant,
        telegram=telegram,
        session=session,
        log_level=log_level.upper(),
    )


def _parse_tools(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_TOOLS
    if isinstance(raw, str):
        return (raw,)
    if not isinstance(raw, list):
        raise ConfigError("tools deve ser uma lista de strings")
    return tuple(str(tool) for tool in raw if tool)
