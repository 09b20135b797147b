from .roles import (
    DEFAULT_ROLES,
    MAX_POOL_SIZE,
    MAX_SELECTED_ROLES,
    RoleCatalog,
    RoleInfo,
)
from .session import GameSession, LogEntry, Phase, Player, SessionStatus

__all__ = [
    "GameSession",
    "SessionStatus",
    "Phase",
    "Player",
    "LogEntry",
    "RoleCatalog",
    "RoleInfo",
    "DEFAULT_ROLES",
    "MAX_POOL_SIZE",
    "MAX_SELECTED_ROLES",
]
