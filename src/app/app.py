"""Entrypoint do guia_bot.

Sequência de startup (qualquer falha encerra com exit code 1):
1. Carregar config.yaml
2. Autenticar o bot no Telegram (getMe)
3. Criar assistente, índice e documentos; vincular índice
4. Atender mensagens até o processo ser interrompido

Uso:
    guia-bot --config config.yaml
    GUIA_BOT_CONFIG=/etc/guia_bot/config.yaml guia-bot
"""

from __future__ import annotations

import argparse
import asyncio
from typing import TYPE_CHECKING

from app.bootstrap import (
    create_assistants_client,
    create_dispatch_loop,
    create_telegram_client,
    initialize_app,
)
from app.services.provisioning import provision_assistant
from config.logging import get_logger
from config.settings import load_settings, resolve_config_path
from utils.errors import ConfigError, StartupError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from api.connectors.telegram import TelegramBotClient
    from app.infra.ai import AssistantsApiClient
    from config.settings import BotSettings

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1

# Janela para runs em andamento terminarem no shutdown
SHUTDOWN_DRAIN_SECONDS = 30.0


async def serve(
    settings: BotSettings,
    *,
    assistants_client: AssistantsApiClient | None = None,
    telegram_client: TelegramBotClient | None = None,
) -> None:
    """Autentica, provisiona e atende mensagens até cancelamento.

    Raises:
        FrontendAuthError: Token do bot recusado.
        ProvisioningError: Falha fatal de provisionamento.
        FrontendPollingError: getUpdates recusado de forma permanente.
    """
    assistants = assistants_client or create_assistants_client(settings)
    telegram = telegram_client or create_telegram_client(settings)
    try:
        await telegram.get_me()
        assistant = await provision_assistant(assistants, settings.assistant)
        loop = create_dispatch_loop(
            settings,
            assistant=assistant,
            run_client=assistants,
            source=telegram,
            sender=telegram,
        )
        logger.info("service_ready", extra={"assistant_id": assistant.assistant_id})
        try:
            await loop.run()
        finally:
            await loop.drain(SHUTDOWN_DRAIN_SECONDS)
    finally:
        await telegram.close()
        await assistants.close()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="guia-bot",
        description="Bot Telegram que responde com um assistente e documentos da empresa.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Caminho do config.yaml (padrão: $GUIA_BOT_CONFIG ou ./config.yaml)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Executa o serviço e retorna o exit code do processo."""
    args = parse_args(argv)

    try:
        settings = load_settings(resolve_config_path(args.config))
    except ConfigError as exc:
        initialize_app()
        logger.error("config_load_failed", extra={"error": str(exc)})
        return EXIT_STARTUP_FAILURE

    initialize_app(settings)

    try:
        asyncio.run(serve(settings))
    except StartupError as exc:
        logger.error(
            "startup_failed",
            extra={"error_type": type(exc).__name__, "error": str(exc)},
        )
        return EXIT_STARTUP_FAILURE
    except KeyboardInterrupt:
        logger.info("shutdown_requested")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
