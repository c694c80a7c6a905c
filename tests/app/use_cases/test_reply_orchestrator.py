"""Testes do orquestrador de respostas."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from app.constants.fixed_replies import EMPTY_REPLY_NOTICE, FAILURE_NOTICE
from app.protocols.models import InboundMessage
from app.services.provisioning import ProvisionedAssistant
from app.sessions import SessionRegistry, TurnRole
from app.use_cases.assistant import ReplyOrchestrator, ReplyOutcome
from tests.fakes.fake_line_source import DONE_LINE, FakeLineSource, delta_line
from utils.errors import TransportError

ASSISTANT = ProvisionedAssistant(assistant_id="asst_1", index_id="vs_1")


def _message(text: str = "Qual o horário?", user_id: int = 10) -> InboundMessage:
    return InboundMessage(update_id=1, user_id=user_id, chat_id=500 + user_id, text=text)


def _build(run_client: AsyncMock, sender: AsyncMock, window: int = 10) -> tuple[ReplyOrchestrator, SessionRegistry]:
    registry = SessionRegistry(max_context_messages=window)
    orchestrator = ReplyOrchestrator(
        registry=registry,
        run_client=run_client,
        sender=sender,
        assistant=ASSISTANT,
    )
    return orchestrator, registry


async def _history(registry: SessionRegistry, user_id: int) -> list[tuple[TurnRole, str]]:
    session = await registry.get_or_create(user_id)
    return [(turn.role, turn.content) for turn in await registry.snapshot(session)]


class TestReplyOrchestrator:
    """Testes do fluxo por mensagem."""

    @pytest.mark.asyncio
    async def test_successful_reply_updates_history_and_sends(self) -> None:
        run_client = AsyncMock()
        run_client.create_run_stream.return_value = FakeLineSource(
            [delta_line("Das 9h "), delta_line("às 18h."), DONE_LINE]
        )
        sender = AsyncMock()
        orchestrator, registry = _build(run_client, sender)

        outcome = await orchestrator.handle(_message())

        assert outcome is ReplyOutcome.REPLIED
        sender.send_text.assert_awaited_once_with(510, "Das 9h às 18h.")
        assert await _history(registry, 10) == [
            (TurnRole.USER, "Qual o horário?"),
            (TurnRole.ASSISTANT, "Das 9h às 18h."),
        ]

    @pytest.mark.asyncio
    async def test_run_receives_history_snapshot_and_ids(self) -> None:
        run_client = AsyncMock()
        run_client.create_run_stream.return_value = FakeLineSource([delta_line("ok"), DONE_LINE])
        orchestrator, _ = _build(run_client, AsyncMock())

        await orchestrator.handle(_message("oi"))

        kwargs = run_client.create_run_stream.await_args.kwargs
        assert kwargs["assistant_id"] == "asst_1"
        assert kwargs["index_id"] == "vs_1"
        assert [turn.content for turn in kwargs["messages"]] == ["oi"]

    @pytest.mark.asyncio
    async def test_empty_reply_sends_notice_and_keeps_user_turn(self) -> None:
        run_client = AsyncMock()
        run_client.create_run_stream.return_value = FakeLineSource([DONE_LINE])
        sender = AsyncMock()
        orchestrator, registry = _build(run_client, sender)

        outcome = await orchestrator.handle(_message())

        assert outcome is ReplyOutcome.EMPTY_REPLY
        sender.send_text.assert_awaited_once_with(510, EMPTY_REPLY_NOTICE)
        assert await _history(registry, 10) == [(TurnRole.USER, "Qual o horário?")]

    @pytest.mark.asyncio
    async def test_transport_failure_sends_failure_notice(self) -> None:
        run_client = AsyncMock()
        run_client.create_run_stream.side_effect = TransportError("run_http_error: 500", status_code=500)
        sender = AsyncMock()
        orchestrator, registry = _build(run_client, sender)

        outcome = await orchestrator.handle(_message())

        assert outcome is ReplyOutcome.FAILED
        sender.send_text.assert_awaited_once_with(510, FAILURE_NOTICE)
        assert await _history(registry, 10) == [(TurnRole.USER, "Qual o horário?")]

    @pytest.mark.asyncio
    async def test_window_is_applied_to_assistant_turn(self) -> None:
        run_client = AsyncMock()
        run_client.create_run_stream.side_effect = [
            FakeLineSource([delta_line("r1"), DONE_LINE]),
            FakeLineSource([delta_line("r2"), DONE_LINE]),
        ]
        orchestrator, registry = _build(run_client, AsyncMock(), window=3)

        await orchestrator.handle(_message("p1"))
        await orchestrator.handle(_message("p2"))

        assert await _history(registry, 10) == [
            (TurnRole.ASSISTANT, "r1"),
            (TurnRole.USER, "p2"),
            (TurnRole.ASSISTANT, "r2"),
        ]

    @pytest.mark.asyncio
    async def test_delivery_failure_is_contained(self) -> None:
        run_client = AsyncMock()
        run_client.create_run_stream.return_value = FakeLineSource([delta_line("ok"), DONE_LINE])
        sender = AsyncMock()
        sender.send_text.side_effect = TransportError("telegram_api_error", status_code=403)
        orchestrator, registry = _build(run_client, sender)

        outcome = await orchestrator.handle(_message())

        assert outcome is ReplyOutcome.REPLIED
        assert len(await _history(registry, 10)) == 2

    @pytest.mark.asyncio
    async def test_corrupt_stream_body_sends_failure_notice(self) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not-gzip-data\n")

        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            response = await client.send(
                client.build_request("POST", "https://api.test/threads/runs"),
                stream=True,
            )
            run_client = AsyncMock()
            run_client.create_run_stream.return_value = response
            sender = AsyncMock()
            orchestrator, registry = _build(run_client, sender)

            outcome = await orchestrator.handle(_message())

        assert outcome is ReplyOutcome.FAILED
        sender.send_text.assert_awaited_once_with(510, FAILURE_NOTICE)
        assert await _history(registry, 10) == [(TurnRole.USER, "Qual o horário?")]
