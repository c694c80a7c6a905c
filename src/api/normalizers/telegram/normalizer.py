"""Normalizer Telegram — converte updates para o modelo interno."""

from __future__ import annotations

from typing import Any

from app.protocols.models import InboundMessage

from .extractor import extract_payload_messages


def normalize_messages(payload: dict[str, Any]) -> list[InboundMessage]:
    """Normaliza mensagens de um update Telegram para InboundMessage."""
    return [InboundMessage(**fields) for fields in extract_payload_messages(payload)]
