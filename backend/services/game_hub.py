from __future__ import annotations

import asyncio
import logging
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Protocol

from models import GameSession

from .views import project

logger = logging.getLogger(__name__)


class Publisher(Protocol):
    async def publish(self, connection_id: str, payload: dict[str, Any]) -> None: ...


class GameHub:
    """
    In-memory pubsub delivering game-state pushes to WebSocket connections.

    Subscribers are keyed by connection id rather than game code, because
    every viewer gets its own projection of the game.

    - Each subscriber gets an asyncio.Queue(maxsize=16).
    - When a queue is full the oldest payload is dropped; state pushes are
      full snapshots so a slow viewer only ever misses stale ones.
    """

    def __init__(self, maxsize: int = 16) -> None:
        self._lock = asyncio.Lock()
        self._maxsize = maxsize
        self._queues: dict[str, set[asyncio.Queue[dict[str, Any]]]] = {}

    async def subscribe(self, connection_id: str) -> asyncio.Queue[dict[str, Any]]:
        q: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self._maxsize)
        async with self._lock:
            self._queues.setdefault(connection_id, set()).add(q)
        return q

    async def unsubscribe(self, connection_id: str, q: asyncio.Queue[dict[str, Any]]) -> None:
        async with self._lock:
            queues = self._queues.get(connection_id, set())
            queues.discard(q)
            if not queues:
                self._queues.pop(connection_id, None)

    async def publish(self, connection_id: str, payload: dict[str, Any]) -> None:
        async with self._lock:
            queues = list(self._queues.get(connection_id, ()))
        for q in queues:
            if _put_latest(q, payload):
                logger.debug("[game_hub] Dropped stale push for connection %s", connection_id)


def _put_latest(q: asyncio.Queue[dict[str, Any]], payload: dict[str, Any]) -> bool:
    """Enqueue ``payload``, evicting the oldest entry when full. Returns True if one was evicted."""
    evicted = False
    while True:
        try:
            q.put_nowait(payload)
            return evicted
        except asyncio.QueueFull:
            q.get_nowait()
            evicted = True


def state_pushes(session: GameSession) -> list[tuple[str, dict[str, Any]]]:
    """One ``game:state`` payload per connected player, each with its own projection."""
    return [
        (p.connection_id, {"event": "game:state", "data": project(session, p.connection_id).to_payload()})
        for p in session.connected_players()
    ]


async def broadcast_state(
    publisher: Publisher,
    session: GameSession,
    lock: AbstractContextManager[Any] | None = None,
) -> None:
    # Snapshot under the game's lock, deliver outside it.
    with lock or nullcontext():
        pushes = state_pushes(session)
    for connection_id, payload in pushes:
        await publisher.publish(connection_id, payload)
