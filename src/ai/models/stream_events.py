"""Contratos dos eventos do stream de um run (server-sent events).

Cada linha útil do stream tem o formato `data: <json>` ou `data: [DONE]`.
O JSON é convertido em uma variante tipada conforme o campo "object":

- thread.message.delta     -> DeltaEvent (fragmentos de texto)
- thread.message.completed -> CompletedEvent (fim de UMA mensagem)
- qualquer outro           -> OtherEvent (ignorado pelo decoder)

O parse falha de forma branda: JSON inválido ou formato inesperado levantam
MalformedEventError, e o decoder apenas descarta a linha.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from utils.errors import MalformedEventError

DATA_PREFIX = "data: "
DONE_TOKEN = "[DONE]"

DELTA_OBJECT = "thread.message.delta"
COMPLETED_OBJECT = "thread.message.completed"


class TextValue(BaseModel):
    """Bloco de texto dentro de um item de conteúdo."""

    model_config = ConfigDict(extra="ignore")

    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _only_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class DeltaContent(BaseModel):
    """Item de conteúdo do delta (texto, imagem, etc.)."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    text: TextValue | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _only_objects(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None


class MessageDelta(BaseModel):
    """Incremento de uma mensagem do assistente."""

    model_config = ConfigDict(extra="ignore")

    content: list[DeltaContent] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]


class DeltaEvent(BaseModel):
    """Evento com fragmentos de texto a concatenar."""

    model_config = ConfigDict(extra="ignore")

    object: Literal["thread.message.delta"]
    id: str | None = None
    delta: MessageDelta

    def fragments(self) -> list[str]:
        """Textos do delta na ordem de chegada (itens sem texto são ignorados)."""
        return [
            item.text.value
            for item in self.delta.content
            if item.text is not None and item.text.value is not None
        ]


class CompletedEvent(BaseModel):
    """Fim lógico de uma mensagem; não encerra a leitura do stream."""

    model_config = ConfigDict(extra="ignore")

    object: Literal["thread.message.completed"]
    id: str | None = None


class OtherEvent(BaseModel):
    """Qualquer evento sem interesse para a montagem da resposta."""

    model_config = ConfigDict(extra="ignore")

    object: str


StreamEvent = DeltaEvent | CompletedEvent | OtherEvent

_EVENT_MODELS: dict[str, type[BaseModel]] = {
    DELTA_OBJECT: DeltaEvent,
    COMPLETED_OBJECT: CompletedEvent,
}


def parse_stream_event(data: str) -> StreamEvent:
    """Converte o payload de uma linha `data:` em StreamEvent.

    Args:
        data: Texto após o prefixo "data: ".

    Returns:
        DeltaEvent, CompletedEvent ou OtherEvent.

    Raises:
        MalformedEventError: JSON inválido, payload não-objeto, campo "object"
            ausente ou formato incompatível com o tipo declarado.
    """
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        raise MalformedEventError(f"invalid_json: {exc.msg}") from exc

    if not isinstance(payload, dict):
        raise MalformedEventError("payload_not_object")

    kind = payload.get("object")
    if not isinstance(kind, str):
        raise MalformedEventError("missing_object_field")

    model = _EVENT_MODELS.get(kind, OtherEvent)
    try:
        return model.model_validate(payload)  # type: ignore[return-value]
    except ValidationError as exc:
        raise MalformedEventError(f"invalid_shape: {kind}") from exc
