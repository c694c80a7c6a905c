"""Cliente da API de assistentes (formato OpenAI Assistants v2).

Provisionamento (assistente, vector store, documentos) e abertura de runs
com resposta em streaming. Implementação de IO, por isso vive em app/infra.

Provisionamento levanta ProvisioningError com status e corpo da resposta.
Runs levantam TransportError; o corpo do erro só vai para os logs.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx
import openai
from openai import AsyncOpenAI

from utils.errors import ProvisioningError, TransportError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from app.sessions.history import Turn
    from config.settings import AssistantSettings

logger = logging.getLogger(__name__)

ASSISTANTS_BETA_HEADER = "assistants=v2"
DOCUMENT_PURPOSE = "assistants"
_MAX_LOGGED_BODY = 1000


class AssistantsApiClient:
    """Cliente assíncrono para provisionamento e runs do assistente.

    Usa httpx para chamadas JSON e para o stream do run; o upload multipart
    de documentos passa pelo SDK openai apontado para a mesma URL base.
    """

    __slots__ = ("_http_client", "_openai_client", "_settings")

    def __init__(
        self,
        settings: AssistantSettings,
        http_client: httpx.AsyncClient | None = None,
        openai_client: AsyncOpenAI | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        self._openai_client = openai_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._settings.api_url,
                timeout=self._settings.request_timeout_seconds,
            )
        return self._http_client

    def _get_openai_client(self) -> AsyncOpenAI:
        """Obtém ou cria cliente do SDK para uploads."""
        if self._openai_client is None:
            self._openai_client = AsyncOpenAI(
                api_key=self._settings.api_key,
                base_url=self._settings.api_url,
                timeout=self._settings.request_timeout_seconds,
                default_headers={"OpenAI-Beta": ASSISTANTS_BETA_HEADER},
            )
        return self._openai_client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "OpenAI-Beta": ASSISTANTS_BETA_HEADER,
        }

    async def _post_json(
        self,
        path: str,
        payload: dict[str, Any],
        operation: str,
    ) -> dict[str, Any]:
        """POST JSON de provisionamento com erros convertidos em ProvisioningError."""
        client = await self._get_http_client()
        logger.debug("assistants_api_request", extra={"operation": operation, "path": path})
        try:
            response = await client.post(path, headers=self._headers(), json=payload)
        except httpx.HTTPError as exc:
            raise ProvisioningError(f"{operation} falhou: {type(exc).__name__}") from exc

        body_text = response.text
        if response.is_error:
            logger.error(
                "assistants_api_http_error",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "response_text": _truncate(body_text),
                },
            )
            raise ProvisioningError(
                f"{operation} falhou",
                status_code=response.status_code,
                body=body_text,
            )

        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            raise ProvisioningError(
                f"{operation}: resposta JSON inválida",
                status_code=response.status_code,
                body=body_text,
            ) from exc
        if not isinstance(data, dict):
            raise ProvisioningError(f"{operation}: resposta inesperada", body=body_text)
        return data

    @staticmethod
    def _require_id(data: dict[str, Any], operation: str) -> str:
        object_id = data.get("id")
        if not isinstance(object_id, str) or not object_id:
            raise ProvisioningError(
                f"{operation}: resposta sem id",
                body=json.dumps(data, ensure_ascii=False),
            )
        return object_id

    async def create_assistant(
        self,
        *,
        name: str,
        instructions: str,
        model: str,
        tools: Sequence[str],
    ) -> str:
        """Cria assistente e retorna seu ID."""
        data = await self._post_json(
            "assistants",
            {
                "name": name,
                "instructions": instructions,
                "model": model,
                "tools": [{"type": tool} for tool in tools],
            },
            "create_assistant",
        )
        assistant_id = self._require_id(data, "create_assistant")
        logger.info("assistant_created", extra={"assistant_id": assistant_id})
        return assistant_id

    async def create_index(self, name: str | None = None) -> str:
        """Cria vector store (índice de busca) e retorna seu ID."""
        payload: dict[str, Any] = {"name": name} if name else {}
        data = await self._post_json("vector_stores", payload, "create_index")
        index_id = self._require_id(data, "create_index")
        logger.info("index_created", extra={"index_id": index_id})
        return index_id

    async def upload_document(self, path: Path) -> str:
        """Envia documento (multipart, purpose=assistants) e retorna o file ID."""
        client = self._get_openai_client()
        logger.debug("document_upload_started", extra={"file_name": path.name})
        try:
            uploaded = await client.files.create(file=path, purpose=DOCUMENT_PURPOSE)
        except openai.APIStatusError as exc:
            raise ProvisioningError(
                f"upload de {path.name} falhou",
                status_code=exc.status_code,
                body=exc.response.text,
            ) from exc
        except (openai.APIError, OSError) as exc:
            raise ProvisioningError(f"upload de {path.name} falhou: {type(exc).__name__}") from exc

        document_id = getattr(uploaded, "id", None)
        if not isinstance(document_id, str) or not document_id:
            raise ProvisioningError(f"upload de {path.name}: resposta sem id")
        logger.debug(
            "document_uploaded",
            extra={"file_name": path.name, "document_id": document_id},
        )
        return document_id

    async def register_document(self, index_id: str, document_id: str) -> None:
        """Registra documento já enviado no vector store."""
        await self._post_json(
            f"vector_stores/{index_id}/files",
            {"file_id": document_id},
            "register_document",
        )
        logger.info(
            "document_registered",
            extra={"index_id": index_id, "document_id": document_id},
        )

    async def attach_index(self, assistant_id: str, index_id: str) -> None:
        """Vincula o vector store ao file_search do assistente."""
        await self._post_json(
            f"assistants/{assistant_id}",
            {"tool_resources": {"file_search": {"vector_store_ids": [index_id]}}},
            "attach_index",
        )
        logger.info(
            "index_attached",
            extra={"assistant_id": assistant_id, "index_id": index_id},
        )

    async def create_run_stream(
        self,
        *,
        assistant_id: str,
        index_id: str,
        messages: Sequence[Turn],
    ) -> httpx.Response:
        """Cria thread + run com stream=true e retorna a conexão aberta.

        O chamador é responsável por fechar o response (o decoder fecha).
        Leitura sem timeout: um run parado bloqueia apenas a sua task.

        Raises:
            TransportError: Falha de conexão ou status HTTP de erro.
        """
        payload = {
            "assistant_id": assistant_id,
            "thread": {"messages": [turn.to_message() for turn in messages]},
            "tool_resources": {"file_search": {"vector_store_ids": [index_id]}},
            "temperature": self._settings.temperature,
            "top_p": self._settings.top_p,
            "stream": True,
        }
        client = await self._get_http_client()
        request = client.build_request(
            "POST",
            "threads/runs",
            headers=self._headers(),
            json=payload,
            timeout=httpx.Timeout(self._settings.request_timeout_seconds, read=None),
        )
        logger.debug(
            "run_request_sent",
            extra={"assistant_id": assistant_id, "history_size": len(messages)},
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(f"run_request_failed: {type(exc).__name__}") from exc

        if response.is_error:
            await _discard_error_response(response)
            raise TransportError(
                f"run_http_error: {response.status_code}",
                status_code=response.status_code,
            )
        return response

    async def close(self) -> None:
        """Fecha clientes HTTP."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        if self._openai_client is not None:
            await self._openai_client.close()
            self._openai_client = None


async def _discard_error_response(response: httpx.Response) -> None:
    """Lê o corpo do erro para os logs e fecha a conexão."""
    try:
        await response.aread()
        body_text = response.text
    except httpx.HTTPError:
        body_text = "<unavailable>"
    finally:
        await response.aclose()
    logger.warning(
        "run_http_error",
        extra={"status_code": response.status_code, "response_text": _truncate(body_text)},
    )


def _truncate(text: str) -> str:
    return (text[:_MAX_LOGGED_BODY] + "...") if len(text) > _MAX_LOGGED_BODY else text
