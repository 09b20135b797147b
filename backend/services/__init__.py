from .engine import GameEngine
from .errors import EmptyEntry, GameError, NoPlayers, NotHost, ParticipantNotFound, SessionNotFound
from .store import SessionStore

__all__ = [
    "GameEngine",
    "SessionStore",
    "GameError",
    "SessionNotFound",
    "NotHost",
    "NoPlayers",
    "ParticipantNotFound",
    "EmptyEntry",
]
