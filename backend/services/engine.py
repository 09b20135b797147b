"""Authoritative game-state mutations."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from models import GameSession, LogEntry, Phase, Player, RoleCatalog, SessionStatus

from .authority import resolve_disconnect
from .errors import EmptyEntry, NoPlayers, NotHost, ParticipantNotFound
from .ids import PLAYER_ID_LENGTH, generate_id
from .role_pool import generate_role_pool, shuffle
from .store import SessionStore, clean_role_names

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _positive_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return n if n > 0 else None


class GameEngine:
    """
    Applies every game mutation against the store.

    Each operation resolves the game (SessionNotFound), checks host authority
    where required (NotHost), validates its payload, and only then mutates.
    All of that happens under the game's own lock, so a game sees one
    mutation at a time while separate games proceed independently.
    """

    def __init__(
        self,
        store: SessionStore,
        catalog: RoleCatalog,
        *,
        player_id_length: int = PLAYER_ID_LENGTH,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self._player_id_length = player_id_length
        self._rng = rng

    @contextmanager
    def _locked(self, code: object) -> Iterator[GameSession]:
        session = self.store.require(code)
        with self.store.lock_for(session.code):
            yield session

    @contextmanager
    def _as_host(self, code: object, connection_id: str) -> Iterator[GameSession]:
        with self._locked(code) as session:
            if session.host_connection_id != connection_id:
                logger.info("[engine] Rejected non-host request on game %s from %s", session.code, connection_id)
                raise NotHost()
            yield session

    def _log(self, session: GameSession, text: str) -> None:
        session.log.append(LogEntry(ts=_now(), text=text))

    def _add_player(self, session: GameSession, connection_id: str, name: str) -> Player:
        existing = session.find_connection(connection_id)
        if existing is not None:
            existing.connected = True
            existing.name = name
            return existing

        player = Player(
            id=generate_id(self._player_id_length),
            connection_id=connection_id,
            name=name,
        )
        session.players.append(player)
        return player

    # -- lobby ---------------------------------------------------------------

    def create(self, connection_id: str, host_name: str | None, roles: list[str] | None) -> GameSession:
        name = (host_name or "").strip() or "Host"
        # The host is seated in the same step that registers the game.
        host = Player(id=generate_id(self._player_id_length), connection_id=connection_id, name=name)
        return self.store.create(connection_id, name, clean_role_names(roles), self.catalog, players=[host])

    def join(self, code: object, connection_id: str, name: str | None) -> GameSession:
        with self._locked(code) as session:
            display = (name or "").strip() or f"Player {len(session.players) + 1}"
            player = self._add_player(session, connection_id, display)
            self._log(session, f"{player.name} joined the game.")
            host = session.find_connection(session.host_connection_id)
            if host is None or not host.connected:
                # Everyone had left. Joiners are not promoted while a host is connected,
                # but a connected game must always have a connected host, so this one is.
                session.host_connection_id = player.connection_id
                session.host_name = player.name
                self._log(session, f"{player.name} is now host.")
            elif host is player:
                session.host_name = player.name
            logger.info("[engine] %r joined game %s (%d players)", player.name, session.code, len(session.players))
            return session

    def update_roles(self, code: object, connection_id: str, roles: list[str] | None) -> GameSession:
        with self._as_host(code, connection_id) as session:
            cleaned = clean_role_names(roles)
            session.selected_roles = cleaned
            self._log(session, f"Roles updated ({len(cleaned)} selected).")
            return session

    def randomize_role_pool(self, code: object, connection_id: str, player_count: object = None) -> list[str]:
        with self._as_host(code, connection_id) as session:
            requested = _positive_int(player_count) or len(session.players) or 1
            pool = generate_role_pool(requested, self.catalog.role_names, rng=self._rng)
            session.selected_roles = pool
            self._log(session, f"Randomized role pool for {requested} players.")
            return list(pool)

    def random_assign_roles(self, code: object, connection_id: str) -> GameSession:
        with self._as_host(code, connection_id) as session:
            if not session.players:
                raise NoPlayers()
            source = session.selected_roles or self.catalog.role_names
            pool = shuffle(generate_role_pool(len(session.players), source, rng=self._rng), self._rng)
            # Pools cap at 20; seats beyond that are left without a role.
            for index, player in enumerate(session.players):
                player.role = pool[index] if index < len(pool) else None
            self._log(session, f"Randomly assigned roles to {len(session.players)} players.")
            return session

    # -- game flow -----------------------------------------------------------

    def start(self, code: object, connection_id: str) -> GameSession:
        with self._as_host(code, connection_id) as session:
            session.status = SessionStatus.IN_PROGRESS
            session.phase = Phase.NIGHT
            session.day = 1
            self._log(session, "Game started: Night 1 begins.")
            logger.info("[engine] Game %s started with %d players", session.code, len(session.players))
            return session

    def next_phase(self, code: object, connection_id: str) -> GameSession:
        # No status guard: calling this in the lobby moves phase off "setup".
        with self._as_host(code, connection_id) as session:
            if session.phase is Phase.NIGHT:
                session.phase = Phase.DAY
                self._log(session, f"Day {session.day} begins.")
            else:
                session.phase = Phase.NIGHT
                session.day += 1
                self._log(session, f"Night {session.day} begins.")
            return session

    def toggle_alive(self, code: object, connection_id: str, player_id: str | None) -> GameSession:
        with self._as_host(code, connection_id) as session:
            player = session.find_player(player_id or "")
            if player is None:
                raise ParticipantNotFound()
            player.alive = not player.alive
            self._log(session, f"{player.name} is now {'alive' if player.alive else 'dead'}.")
            return session

    def assign_role(self, code: object, connection_id: str, player_id: str | None, role: str | None) -> GameSession:
        with self._as_host(code, connection_id) as session:
            player = session.find_player(player_id or "")
            if player is None:
                raise ParticipantNotFound()
            player.role = (role or "").strip() or None
            change = f"set to {player.role}" if player.role else "cleared"
            self._log(session, f"{player.name} role {change}.")
            return session

    def add_log_entry(self, code: object, connection_id: str, text: str | None) -> GameSession:
        with self._as_host(code, connection_id) as session:
            entry = (text or "").strip()
            if not entry:
                raise EmptyEntry()
            self._log(session, entry)
            return session

    # -- connection loss -----------------------------------------------------

    def disconnect(self, connection_id: str) -> list[GameSession]:
        """Run host resolution in every game the connection sits in; return those games."""
        affected: list[GameSession] = []
        for session in self.store.all():
            with self.store.lock_for(session.code):
                if resolve_disconnect(session, connection_id, now=_now()):
                    affected.append(session)
        if affected:
            logger.info("[engine] Connection %s left %d game(s)", connection_id, len(affected))
        return affected
