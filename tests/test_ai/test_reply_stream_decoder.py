"""Testes do decoder do stream de resposta."""

from __future__ import annotations

import logging

import httpx
import pytest

from ai.services.reply_stream_decoder import decode_reply_stream
from tests.fakes.fake_line_source import (
    DONE_LINE,
    FakeLineSource,
    completed_line,
    delta_line,
)
from utils.errors import EmptyReplyError, StreamReadError


class TestDecodeReplyStream:
    """Testes de decode_reply_stream."""

    @pytest.mark.asyncio
    async def test_concatenates_fragments_in_order(self) -> None:
        source = FakeLineSource([delta_line("Hel"), delta_line("lo"), DONE_LINE])

        reply = await decode_reply_stream(source)

        assert reply == "Hello"
        assert source.closed is True

    @pytest.mark.asyncio
    async def test_multiple_text_items_in_one_delta(self) -> None:
        source = FakeLineSource([delta_line("Bom ", "dia"), DONE_LINE])
        assert await decode_reply_stream(source) == "Bom dia"

    @pytest.mark.asyncio
    async def test_done_only_raises_empty_reply(self) -> None:
        source = FakeLineSource([DONE_LINE])

        with pytest.raises(EmptyReplyError):
            await decode_reply_stream(source)
        assert source.closed is True

    @pytest.mark.asyncio
    async def test_eof_without_done_returns_collected_text(self) -> None:
        source = FakeLineSource([delta_line("fim"), ""])
        assert await decode_reply_stream(source) == "fim"

    @pytest.mark.asyncio
    async def test_lines_after_done_are_not_read(self) -> None:
        source = FakeLineSource([delta_line("a"), DONE_LINE, delta_line("b")])

        reply = await decode_reply_stream(source)

        assert reply == "a"
        assert source.lines_read == 2

    @pytest.mark.asyncio
    async def test_completed_event_does_not_stop_reading(self) -> None:
        source = FakeLineSource(
            [delta_line("primeira "), completed_line("msg_1"), delta_line("segunda"), DONE_LINE]
        )
        assert await decode_reply_stream(source) == "primeira segunda"

    @pytest.mark.asyncio
    async def test_ignores_non_data_lines(self) -> None:
        source = FakeLineSource(
            [
                "event: thread.message.delta",
                "",
                ": keep-alive",
                f"  {delta_line('ok')}  ",
                "event: done",
                DONE_LINE,
            ]
        )
        assert await decode_reply_stream(source) == "ok"

    @pytest.mark.asyncio
    async def test_malformed_event_is_skipped_and_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING)
        source = FakeLineSource([delta_line("A"), "data: {quebrado", delta_line("B"), DONE_LINE])

        reply = await decode_reply_stream(source)

        assert reply == "AB"
        assert any(record.getMessage() == "stream_event_malformed" for record in caplog.records)

    @pytest.mark.asyncio
    async def test_read_failure_raises_stream_read_error(self) -> None:
        source = FakeLineSource([delta_line("parcial")], fail_with=httpx.ReadError("reset"))

        with pytest.raises(StreamReadError):
            await decode_reply_stream(source)
        assert source.closed is True

    @pytest.mark.asyncio
    async def test_decodes_httpx_streaming_response(self) -> None:
        body = "\n".join([delta_line("via "), delta_line("httpx"), DONE_LINE, ""]).encode()

        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body)

        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            request = client.build_request("POST", "https://api.test/threads/runs")
            response = await client.send(request, stream=True)
            reply = await decode_reply_stream(response)

        assert reply == "via httpx"
        assert response.is_closed is True

    @pytest.mark.asyncio
    async def test_corrupt_encoded_body_raises_stream_read_error(self) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not-gzip-data\n")

        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            request = client.build_request("POST", "https://api.test/threads/runs")
            response = await client.send(request, stream=True)
            with pytest.raises(StreamReadError, match="DecodingError"):
                await decode_reply_stream(response)

        assert response.is_closed is True
