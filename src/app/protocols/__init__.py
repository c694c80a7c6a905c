"""Protocolos e contratos do core da aplicação."""

from .inbound_source import InboundSourceProtocol
from .models import InboundMessage
from .outbound_sender import OutboundSenderProtocol
from .run_client import AssistantRunClientProtocol

__all__ = [
    "AssistantRunClientProtocol",
    "InboundMessage",
    "InboundSourceProtocol",
    "OutboundSenderProtocol",
]
