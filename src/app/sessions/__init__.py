"""Módulo de sessões: histórico limitado por usuário.

Exporta turnos, sessão e registro de sessões.
"""

from app.sessions.history import Turn, TurnRole
from app.sessions.registry import SessionRegistry
from app.sessions.rwlock import ReadWriteLock
from app.sessions.session_entity import Session, UserKey

__all__ = [
    "ReadWriteLock",
    "Session",
    "SessionRegistry",
    "Turn",
    "TurnRole",
    "UserKey",
]
