"""Payload builders Telegram Bot API."""

from .text import build_text_payloads, split_text

__all__ = [
    "build_text_payloads",
    "split_text",
]
