"""Provisionamento do assistente no startup.

Sequência: criar assistente -> criar índice -> enviar e registrar cada
documento do diretório -> vincular índice ao assistente.

Falha em criar assistente, criar índice, listar o diretório ou vincular o
índice é fatal (ProvisioningError). Falha de um documento isolado é
registrada e o documento é ignorado.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from utils.errors import ProvisioningError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from config.settings import AssistantSettings

logger = logging.getLogger(__name__)


class ProvisioningClientProtocol(Protocol):
    """Contrato das chamadas de provisionamento usadas no startup."""

    async def create_assistant(
        self,
        *,
        name: str,
        instructions: str,
        model: str,
        tools: Sequence[str],
    ) -> str: ...

    async def create_index(self, name: str | None = None) -> str: ...

    async def upload_document(self, path: Path) -> str: ...

    async def register_document(self, index_id: str, document_id: str) -> None: ...

    async def attach_index(self, assistant_id: str, index_id: str) -> None: ...


@dataclass(frozen=True, slots=True)
class ProvisionedAssistant:
    """IDs remotos necessários para abrir runs.

    Atributos:
        assistant_id: ID do assistente criado
        index_id: ID do vector store vinculado
        documents: Nomes dos documentos registrados no índice
        failed_documents: Nomes dos documentos ignorados por falha
    """

    assistant_id: str
    index_id: str
    documents: tuple[str, ...] = ()
    failed_documents: tuple[str, ...] = ()


def list_documents(files_path: Path) -> list[Path]:
    """Lista arquivos regulares do diretório (sem recursão), em ordem.

    Raises:
        ProvisioningError: Diretório ausente ou ilegível.
    """
    try:
        entries = sorted(files_path.iterdir())
    except OSError as exc:
        raise ProvisioningError(f"Erro ao ler diretório de documentos {files_path}: {exc}") from exc
    return [entry for entry in entries if entry.is_file()]


async def provision_index(
    client: ProvisioningClientProtocol,
    files_path: Path,
    *,
    name: str | None = None,
) -> tuple[str, tuple[str, ...], tuple[str, ...]]:
    """Cria o índice e registra nele os documentos do diretório.

    Returns:
        (index_id, documentos registrados, documentos com falha)
    """
    index_id = await client.create_index(name)

    registered: list[str] = []
    failed: list[str] = []
    for path in list_documents(files_path):
        try:
            document_id = await client.upload_document(path)
            await client.register_document(index_id, document_id)
        except ProvisioningError as exc:
            logger.error(
                "document_provisioning_failed",
                extra={"file_name": path.name, "error": str(exc)},
            )
            failed.append(path.name)
            continue
        registered.append(path.name)

    logger.info(
        "index_populated",
        extra={
            "index_id": index_id,
            "documents": len(registered),
            "failed_documents": len(failed),
        },
    )
    return index_id, tuple(registered), tuple(failed)


async def provision_assistant(
    client: ProvisioningClientProtocol,
    settings: AssistantSettings,
) -> ProvisionedAssistant:
    """Cria assistente e índice de documentos e os vincula.

    Raises:
        ProvisioningError: Qualquer etapa fatal falhou.
    """
    assistant_id = await client.create_assistant(
        name=settings.name,
        instructions=settings.instructions,
        model=settings.model,
        tools=settings.tools,
    )
    index_id, documents, failed = await provision_index(
        client,
        Path(settings.files_path),
        name=settings.name or None,
    )
    await client.attach_index(assistant_id, index_id)

    logger.info(
        "assistant_ready",
        extra={"assistant_id": assistant_id, "index_id": index_id},
    )
    return ProvisionedAssistant(
        assistant_id=assistant_id,
        index_id=index_id,
        documents=documents,
        failed_documents=failed,
    )
