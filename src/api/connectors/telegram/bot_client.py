"""Cliente HTTP para a Telegram Bot API (long polling).

Responsabilidades:
- Autenticar o token do bot no startup (getMe)
- Receber updates via getUpdates, na ordem, avançando o offset
- Enviar respostas via sendMessage, dividindo textos longos
- Logging estruturado sem token (a URL da API contém o token)

Implementa InboundSourceProtocol e OutboundSenderProtocol.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from api.connectors.telegram.bot_errors import BotApiError, log_bot_error, parse_bot_error
from api.normalizers.telegram import normalize_messages
from api.payload_builders.telegram import build_text_payloads
from utils.errors import FrontendAuthError, FrontendPollingError, TransportError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from app.protocols.models import InboundMessage
    from config.settings import TelegramSettings

logger = logging.getLogger(__name__)

ALLOWED_UPDATES = ("message",)


class TelegramBotClient:
    """Canal Telegram: fonte de mensagens e destino das respostas."""

    def __init__(
        self,
        settings: TelegramSettings,
        http_client: httpx.AsyncClient | None = None,
        *,
        backoff_base_seconds: float = 1.0,
        backoff_max_seconds: float = 30.0,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        self._offset: int | None = None
        self._backoff_base_seconds = backoff_base_seconds
        self._backoff_max_seconds = backoff_max_seconds

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP apontado para a API do bot."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._settings.api_endpoint,
                timeout=self._settings.request_timeout_seconds,
            )
        return self._http_client

    async def _call(
        self,
        method: str,
        payload: dict[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Executa método da Bot API e retorna o campo "result".

        Raises:
            TransportError: Falha de rede ou JSON inválido.
            BotApiError: Resposta com "ok": false.
        """
        client = await self._get_http_client()
        try:
            response = await client.post(
                method,
                json=payload or {},
                timeout=timeout or self._settings.request_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"telegram_request_failed: {method} ({type(exc).__name__})") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "telegram_invalid_json",
                extra={"method": method, "status_code": response.status_code},
            )
            raise TransportError(
                f"telegram_invalid_json: {method}",
                status_code=response.status_code,
            ) from exc

        error_info = parse_bot_error(data, response.status_code)
        if error_info is not None:
            log_bot_error(error_info, method)
            raise BotApiError(method, error_info)

        return data.get("result")

    async def get_me(self) -> dict[str, Any]:
        """Valida o token do bot.

        Raises:
            FrontendAuthError: Token recusado ou API inacessível.
        """
        try:
            me = await self._call("getMe")
        except TransportError as exc:
            raise FrontendAuthError(f"Falha ao autenticar bot do Telegram: {exc}") from exc
        if not isinstance(me, dict):
            raise FrontendAuthError("Resposta inesperada de getMe")
        logger.info("telegram_bot_authorized", extra={"username": me.get("username")})
        return me

    async def get_updates(self, offset: int | None = None) -> list[dict[str, Any]]:
        """Long polling de updates a partir do offset."""
        poll_timeout = self._settings.poll_timeout_seconds
        payload: dict[str, Any] = {
            "timeout": poll_timeout,
            "allowed_updates": list(ALLOWED_UPDATES),
        }
        if offset is not None:
            payload["offset"] = offset
        result = await self._call(
            "getUpdates",
            payload,
            timeout=poll_timeout + self._settings.request_timeout_seconds,
        )
        if not isinstance(result, list):
            return []
        return [update for update in result if isinstance(update, dict)]

    async def messages(self) -> AsyncIterator[InboundMessage]:
        """Entrega mensagens de texto uma a uma, na ordem de chegada.

        Falhas transitórias de getUpdates são registradas e repetidas com
        backoff exponencial, ou após o retry_after pedido pela API (429).

        Raises:
            FrontendPollingError: Erro permanente da Bot API (401, 409...).
        """
        failures = 0
        while True:
            try:
                updates = await self.get_updates(self._offset)
            except TransportError as exc:
                if isinstance(exc, BotApiError) and exc.info.is_permanent:
                    logger.error(
                        "telegram_polling_rejected",
                        extra={"error_code": exc.info.error_code},
                    )
                    raise FrontendPollingError(
                        f"Bot API recusou getUpdates: {exc.info.description}"
                    ) from exc
                failures += 1
                logger.warning(
                    "telegram_polling_failed",
                    extra={"error": str(exc), "consecutive_failures": failures},
                )
                await _backoff_sleep(
                    failures - 1,
                    self._backoff_base_seconds,
                    self._backoff_max_seconds,
                    retry_after=exc.info.retry_after if isinstance(exc, BotApiError) else None,
                )
                continue

            failures = 0
            for update in updates:
                update_id = update.get("update_id")
                if isinstance(update_id, int):
                    self._offset = update_id + 1
                for message in normalize_messages(update):
                    yield message

    async def send_text(self, chat_id: int | str, text: str) -> None:
        """Envia texto ao chat, dividido conforme o limite da API.

        Raises:
            TransportError: Falha de rede ou erro da Bot API.
        """
        payloads = build_text_payloads(chat_id, text)
        for payload in payloads:
            await self._call("sendMessage", payload)
        logger.debug("telegram_message_sent", extra={"parts": len(payloads)})

    async def close(self) -> None:
        """Fecha cliente HTTP."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


async def _backoff_sleep(
    attempt: int,
    base: float,
    max_seconds: float,
    *,
    retry_after: int | None = None,
) -> None:
    if retry_after is not None:
        backoff = float(retry_after)
    else:
        backoff = min((2**attempt) * base, max_seconds)
    logger.info("telegram_polling_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
