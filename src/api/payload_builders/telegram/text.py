"""Builder para mensagens de texto do Telegram."""

from __future__ import annotations

from typing import Any

from config.settings.telegram import TELEGRAM_MAX_MESSAGE_LENGTH


def split_text(text: str, limit: int = TELEGRAM_MAX_MESSAGE_LENGTH) -> list[str]:
    """Divide texto em partes de até `limit` caracteres.

    Prefere cortar na última quebra de linha da janela quando ela está na
    segunda metade; caso contrário corta no limite exato.
    """
    if limit < 1:
        raise ValueError("limit deve ser >= 1")

    chunks: list[str] = []
    remaining = text
    while len(remaining) > limit:
        window = remaining[:limit]
        cut = window.rfind("\n")
        if cut <= 0 or cut < limit // 2:
            cut = limit
        chunks.append(remaining[:cut])
        remaining = remaining[cut:].lstrip("\n")
    if remaining or not chunks:
        chunks.append(remaining)
    return chunks


def build_text_payloads(chat_id: int | str, text: str) -> list[dict[str, Any]]:
    """Constrói payloads sendMessage, um por parte do texto."""
    return [{"chat_id": chat_id, "text": chunk} for chunk in split_text(text)]
