"""Respostas fixas enviadas quando o assistente não responde.

Nunca incluem detalhes internos do erro.
"""

from __future__ import annotations

# Falha de rede, status HTTP de erro ou leitura interrompida do stream
FAILURE_NOTICE = "Erro ao processar a solicitação. Tente novamente em instantes."

# Stream terminou sem nenhum texto
EMPTY_REPLY_NOTICE = "O assistente não conseguiu fornecer uma resposta."
