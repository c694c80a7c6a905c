"""Testes da extração e normalização de updates Telegram."""

from __future__ import annotations

from api.normalizers.telegram import extract_payload_messages, normalize_messages
from app.protocols.models import InboundMessage


def _update(**message_fields: object) -> dict:
    message = {
        "message_id": 1,
        "from": {"id": 42, "is_bot": False, "username": "joao"},
        "chat": {"id": -1001, "type": "group"},
        "text": "Olá",
    }
    message.update(message_fields)
    return {"update_id": 900, "message": message}


class TestExtractPayloadMessages:
    """Testes de extract_payload_messages."""

    def test_extracts_text_message(self) -> None:
        assert extract_payload_messages(_update()) == [
            {"update_id": 900, "user_id": 42, "chat_id": -1001, "text": "Olá", "username": "joao"}
        ]

    def test_ignores_update_without_message(self) -> None:
        assert extract_payload_messages({"update_id": 1, "edited_message": {"text": "x"}}) == []

    def test_ignores_message_without_text(self) -> None:
        photo = _update(photo=[{"file_id": "p1"}])
        del photo["message"]["text"]
        assert extract_payload_messages(photo) == []
        assert extract_payload_messages(_update(text="")) == []

    def test_ignores_message_without_sender(self) -> None:
        update = _update()
        del update["message"]["from"]
        assert extract_payload_messages(update) == []

    def test_whitespace_text_is_kept(self) -> None:
        assert extract_payload_messages(_update(text="   "))[0]["text"] == "   "


class TestNormalizeMessages:
    """Testes de normalize_messages."""

    def test_normalizes_to_inbound_message(self) -> None:
        messages = normalize_messages(_update())

        assert messages == [
            InboundMessage(update_id=900, user_id=42, chat_id=-1001, text="Olá", username="joao")
        ]
        assert messages[0].has_text is True

    def test_username_is_optional(self) -> None:
        update = _update()
        del update["message"]["from"]["username"]
        assert normalize_messages(update)[0].username is None
