"""Testes do entrypoint: startup, atendimento e exit codes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest

from app.app import EXIT_OK, EXIT_STARTUP_FAILURE, main, serve
from app.protocols.models import InboundMessage
from config.settings import AssistantSettings, BotSettings, TelegramSettings
from tests.fakes.fake_line_source import DONE_LINE, FakeLineSource, delta_line
from utils.errors import FrontendAuthError, FrontendPollingError, ProvisioningError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path


class FakeTelegram:
    """Canal Telegram em memória com mensagens fixas."""

    def __init__(
        self,
        messages: list[InboundMessage],
        *,
        auth_error: bool = False,
        polling_error: Exception | None = None,
    ) -> None:
        self._messages = messages
        self._auth_error = auth_error
        self._polling_error = polling_error
        self.sent: list[tuple[int | str, str]] = []
        self.closed = False

    async def get_me(self) -> dict:
        if self._auth_error:
            raise FrontendAuthError("Falha ao autenticar bot do Telegram")
        return {"id": 1, "username": "guia_bot"}

    async def messages(self) -> AsyncIterator[InboundMessage]:
        for message in self._messages:
            yield message
        if self._polling_error is not None:
            raise self._polling_error

    async def send_text(self, chat_id: int | str, text: str) -> None:
        self.sent.append((chat_id, text))

    async def close(self) -> None:
        self.closed = True


def _settings(files_path: Path) -> BotSettings:
    return BotSettings(
        assistant=AssistantSettings(
            api_url="https://api.test/v1/",
            api_key="sk-test",
            name="Guia",
            model="gpt-4o-mini",
            files_path=str(files_path),
        ),
        telegram=TelegramSettings(bot_token="123:ABC"),
    )


def _assistants_client() -> AsyncMock:
    client = AsyncMock()
    client.create_assistant.return_value = "asst_1"
    client.create_index.return_value = "vs_1"
    client.create_run_stream.return_value = FakeLineSource([delta_line("Bem-vindo!"), DONE_LINE])
    return client


class TestServe:
    """Testes de serve()."""

    @pytest.mark.asyncio
    async def test_serves_messages_after_provisioning(self, tmp_path: Path) -> None:
        telegram = FakeTelegram([InboundMessage(update_id=1, user_id=7, chat_id=7, text="oi")])
        assistants = _assistants_client()

        await serve(_settings(tmp_path), assistants_client=assistants, telegram_client=telegram)  # type: ignore[arg-type]

        assistants.attach_index.assert_awaited_once_with("asst_1", "vs_1")
        assert telegram.sent == [(7, "Bem-vindo!")]
        assert telegram.closed is True
        assistants.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_auth_failure_stops_before_provisioning(self, tmp_path: Path) -> None:
        telegram = FakeTelegram([], auth_error=True)
        assistants = _assistants_client()

        with pytest.raises(FrontendAuthError):
            await serve(_settings(tmp_path), assistants_client=assistants, telegram_client=telegram)  # type: ignore[arg-type]

        assistants.create_assistant.assert_not_called()
        assert telegram.closed is True
        assistants.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_provisioning_failure_propagates(self, tmp_path: Path) -> None:
        telegram = FakeTelegram([InboundMessage(update_id=1, user_id=7, chat_id=7, text="oi")])
        assistants = _assistants_client()
        assistants.attach_index.side_effect = ProvisioningError("attach_index falhou", status_code=500)

        with pytest.raises(ProvisioningError):
            await serve(_settings(tmp_path), assistants_client=assistants, telegram_client=telegram)  # type: ignore[arg-type]

        assert telegram.sent == []

    @pytest.mark.asyncio
    async def test_permanent_polling_error_stops_serving(self, tmp_path: Path) -> None:
        telegram = FakeTelegram(
            [InboundMessage(update_id=1, user_id=7, chat_id=7, text="oi")],
            polling_error=FrontendPollingError("Bot API recusou getUpdates: Conflict"),
        )
        assistants = _assistants_client()

        with pytest.raises(FrontendPollingError):
            await serve(_settings(tmp_path), assistants_client=assistants, telegram_client=telegram)  # type: ignore[arg-type]

        assert telegram.sent == [(7, "Bem-vindo!")]
        assert telegram.closed is True
        assistants.close.assert_awaited_once()

class TestMain:
    """Testes dos exit codes de main()."""

    def test_missing_config_exits_with_failure(self, tmp_path: Path) -> None:
        assert main(["--config", str(tmp_path / "ausente.yaml")]) == EXIT_STARTUP_FAILURE

    def test_startup_error_exits_with_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text(
            "api_url: https://api.test/v1\napi_key: sk\ntelegram_bot_token: '1:A'\nmodel: m\n",
            encoding="utf-8",
        )
        with patch("app.app.serve", new=AsyncMock(side_effect=FrontendAuthError("recusado"))):
            assert main(["--config", str(config)]) == EXIT_STARTUP_FAILURE

    def test_clean_shutdown_exits_ok(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text(
            "api_url: https://api.test/v1\napi_key: sk\ntelegram_bot_token: '1:A'\nmodel: m\n",
            encoding="utf-8",
        )
        with patch("app.app.serve", new=AsyncMock(return_value=None)):
            assert main(["--config", str(config)]) == EXIT_OK

    def test_polling_rejected_exits_with_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text(
            "api_url: https://api.test/v1\napi_key: sk\ntelegram_bot_token: '1:A'\nmodel: m\n",
            encoding="utf-8",
        )
        error = FrontendPollingError("Bot API recusou getUpdates: Unauthorized")
        with patch("app.app.serve", new=AsyncMock(side_effect=error)):
            assert main(["--config", str(config)]) == EXIT_STARTUP_FAILURE

    def test_configured_secrets_do_not_alter_records(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text(
            "api_url: https://api.test/v1\napi_key: sk\ntelegram_bot_token: '1:A'\nmodel: m\n",
            encoding="utf-8",
        )
        with patch("app.app.serve", new=AsyncMock(return_value=None)):
            main(["--config", str(config)])

        captured: list[logging.LogRecord] = []
        handler = logging.Handler()
        handler.emit = captured.append  # type: ignore[method-assign]
        logging.getLogger().addHandler(handler)

        logging.getLogger("app.use_cases.assistant.dispatch_loop").error("reply_task_failed")

        assert [r.getMessage() for r in captured] == ["reply_task_failed"]
