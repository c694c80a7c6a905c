"""Serviços do módulo AI.

Exporta o decoder do stream de resposta.
"""

from ai.services.reply_stream_decoder import LineSource, decode_reply_stream

__all__ = [
    "LineSource",
    "decode_reply_stream",
]
