"""Use cases do assistente: orquestração por mensagem e loop de despacho."""

from .dispatch_loop import DispatchLoop
from .reply_orchestrator import ReplyOrchestrator, ReplyOutcome

__all__ = [
    "DispatchLoop",
    "ReplyOrchestrator",
    "ReplyOutcome",
]
