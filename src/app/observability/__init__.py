"""Observabilidade — correlation_id propagado para os logs estruturados.

Uso:
    from app.observability import get_correlation_id, correlation_scope
"""

from app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    message_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "message_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
