"""Settings do assistente remoto (API compatível com OpenAI Assistants v2).

Agrupa endpoint, credencial, perfil do assistente e parâmetros do run.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TOOLS: tuple[str, ...] = ("file_search",)


@dataclass(frozen=True)
class AssistantSettings:
    """Configurações do assistente e da API remota.

    Attributes:
        api_url: URL base da API (sempre terminada em "/")
        api_key: Chave Bearer da API
        name: Nome do assistente criado no startup
        instructions: Instruções de sistema do assistente
        model: Modelo usado pelo assistente
        tools: Tipos de ferramenta habilitados (ex: "file_search")
        files_path: Diretório com os documentos do índice
        temperature: Temperatura enviada em cada run
        top_p: top_p enviado em cada run
        request_timeout_seconds: Timeout das chamadas de provisionamento
    """

    api_url: str = ""
    api_key: str = ""
    name: str = ""
    instructions: str = ""
    model: str = ""
    tools: tuple[str, ...] = DEFAULT_TOOLS
    files_path: str = "files"
    temperature: float = 1.0
    top_p: float = 1.0
    request_timeout_seconds: float = 30.0

    def validate(self) -> list[str]:
        """Valida configurações do assistente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.api_url:
            errors.append("api_url não configurado")
        elif not self.api_url.startswith(("http://", "https://")):
            errors.append(f"api_url inválido: {self.api_url}")

        if not self.api_key:
            errors.append("api_key não configurado")

        if not self.model:
            errors.append("model não configurado")

        if not 0.0 <= self.temperature <= 2.0:
            errors.append("temperature deve estar entre 0 e 2")

        if not 0.0 <= self.top_p <= 1.0:
            errors.append("top_p deve estar entre 0 e 1")

        if self.request_timeout_seconds <= 0:
            errors.append("request_timeout_seconds deve ser > 0")

        return errors


def normalize_api_url(url: str) -> str:
    """Garante barra final para que caminhos relativos sejam anexados."""
    url = url.strip()
    if url and not url.endswith("/"):
        url += "/"
    return url
