"""Normalizers por canal — conversão de payloads externos para modelos internos.

Estrutura:
- telegram/: normalizer Telegram Bot API

Cada canal tem seu próprio extractor e normalizer, mantendo SRP.
"""

from .telegram import extract_payload_messages, normalize_messages

__all__ = [
    "extract_payload_messages",
    "normalize_messages",
]
