"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigError,
    DecodeError,
    EmptyReplyError,
    FrontendAuthError,
    FrontendPollingError,
    GuiaBotError,
    MalformedEventError,
    ProvisioningError,
    StartupError,
    StreamReadError,
    TransportError,
)

__all__ = [
    "ConfigError",
    "DecodeError",
    "EmptyReplyError",
    "FrontendAuthError",
    "FrontendPollingError",
    "GuiaBotError",
    "MalformedEventError",
    "ProvisioningError",
    "StartupError",
    "StreamReadError",
    "TransportError",
]
