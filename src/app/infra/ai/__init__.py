"""Implementações concretas de IO para o assistente remoto.

ai/ não faz IO direto; as chamadas HTTP ficam aqui.
"""

from app.infra.ai.assistants_client import AssistantsApiClient

__all__ = [
    "AssistantsApiClient",
]
