"""Extrator de payloads Telegram Bot API.

Estrutura do update Telegram:
- update_id
- message (ou edited_message, channel_post, callback_query, etc.)

Campos usados de message: from.id, from.username, chat.id, text.
Apenas mensagens novas com texto são extraídas.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def extract_payload_messages(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Extrai mensagens de texto do update para estrutura intermediária.

    Args:
        payload: Update bruto retornado por getUpdates.

    Returns:
        Lista com zero ou um dict {update_id, user_id, chat_id, text, username}.
    """
    update_id = payload.get("update_id")
    message = payload.get("message")
    if not isinstance(update_id, int) or not isinstance(message, dict):
        return []

    text = message.get("text")
    if not isinstance(text, str) or not text:
        return []

    sender = message.get("from")
    chat = message.get("chat")
    if not isinstance(sender, dict) or not isinstance(chat, dict):
        logger.debug("telegram_message_without_sender", extra={"update_id": update_id})
        return []

    user_id = sender.get("id")
    chat_id = chat.get("id")
    if user_id is None or chat_id is None:
        return []

    username = sender.get("username")
    return [
        {
            "update_id": update_id,
            "user_id": user_id,
            "chat_id": chat_id,
            "text": text,
            "username": username if isinstance(username, str) else None,
        }
    ]
