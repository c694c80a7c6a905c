"""Normalizer Telegram — extração e normalização de mensagens.

Responsabilidades:
- Extrair mensagens de texto do update da Bot API (getUpdates)
- Normalizar para modelo interno InboundMessage
"""

from .extractor import extract_payload_messages
from .normalizer import normalize_messages

__all__ = [
    "extract_payload_messages",
    "normalize_messages",
]
