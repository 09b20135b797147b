"""In-memory game store. Keyed by game code; games live for the process lifetime."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from datetime import datetime, timezone

from models import MAX_SELECTED_ROLES, GameSession, LogEntry, Player, RoleCatalog

from .errors import SessionNotFound
from .ids import GAME_CODE_LENGTH, generate_id, normalize_code

logger = logging.getLogger(__name__)


def clean_role_names(roles: Iterable[object] | None) -> list[str]:
    """Trim, drop blanks and cap at MAX_SELECTED_ROLES."""
    if not roles:
        return []
    cleaned = [str(r).strip() for r in roles if r is not None]
    return [r for r in cleaned if r][:MAX_SELECTED_ROLES]


class SessionStore:
    """
    Registry of live games.

    Code allocation and insertion happen under one lock so concurrent creates
    never share a code. Each game also gets its own lock, held by the engine
    for the duration of every mutation.
    """

    def __init__(self, *, code_length: int = GAME_CODE_LENGTH) -> None:
        self._code_length = code_length
        self._lock = threading.Lock()
        self._sessions: dict[str, GameSession] = {}
        self._session_locks: dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, code: object) -> bool:
        return self.lookup(code) is not None

    def create(
        self,
        host_connection_id: str,
        host_name: str,
        requested_roles: list[str],
        catalog: RoleCatalog,
        *,
        players: list[Player] | None = None,
    ) -> GameSession:
        now = datetime.now(timezone.utc)
        with self._lock:
            code = generate_id(self._code_length)
            while code in self._sessions:
                code = generate_id(self._code_length)
            session = GameSession(
                code=code,
                host_connection_id=host_connection_id,
                host_name=host_name,
                created_at=now,
                selected_roles=list(requested_roles) or catalog.default_selection(),
                role_info=dict(catalog.role_info),
                players=list(players or []),
                log=[LogEntry(ts=now, text=f"{host_name} hosted the game.")],
            )
            self._sessions[code] = session
            self._session_locks[code] = threading.Lock()
        logger.info("[store] Game created: code=%s host=%r", code, host_name)
        return session

    def lookup(self, code: object) -> GameSession | None:
        return self._sessions.get(normalize_code(code))

    def require(self, code: object) -> GameSession:
        session = self.lookup(code)
        if session is None:
            raise SessionNotFound()
        return session

    def lock_for(self, code: str) -> threading.Lock:
        return self._session_locks[code]

    def all(self) -> list[GameSession]:
        with self._lock:
            return list(self._sessions.values())
