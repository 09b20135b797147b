from __future__ import annotations

import asyncio
from typing import Any

import pytest

from models import RoleCatalog
from services.engine import GameEngine
from services.game_hub import GameHub, broadcast_state
from services.store import SessionStore


class _RecordingPublisher:
    def __init__(self) -> None:
        self.pushes: list[tuple[str, dict[str, Any]]] = []

    async def publish(self, connection_id: str, payload: dict[str, Any]) -> None:
        self.pushes.append((connection_id, payload))


@pytest.mark.asyncio
async def test_game_hub_delivers_to_subscribed_connection() -> None:
    hub = GameHub()
    q = await hub.subscribe("conn-1")
    other = await hub.subscribe("conn-2")

    await hub.publish("conn-1", {"event": "game:state", "data": {"day": 1}})

    got = await asyncio.wait_for(q.get(), timeout=0.5)
    assert got["data"] == {"day": 1}
    assert other.empty()

    await hub.unsubscribe("conn-1", q)
    await hub.publish("conn-1", {"event": "game:state", "data": {"day": 2}})
    assert q.empty()
    await hub.unsubscribe("conn-2", other)


@pytest.mark.asyncio
async def test_game_hub_drops_oldest_when_full() -> None:
    hub = GameHub(maxsize=2)
    q = await hub.subscribe("slow")
    for day in range(5):
        await hub.publish("slow", {"data": {"day": day}})

    assert q.qsize() == 2
    assert (await q.get())["data"]["day"] == 3
    assert (await q.get())["data"]["day"] == 4
    await hub.unsubscribe("slow", q)


@pytest.mark.asyncio
async def test_unsubscribed_queue_no_longer_receives_pushes() -> None:
    hub = GameHub()
    kept = await hub.subscribe("conn-1")
    dropped = await hub.subscribe("conn-1")
    await hub.unsubscribe("conn-1", dropped)
    await hub.unsubscribe("conn-1", dropped)

    await hub.publish("conn-1", {"data": {"day": 2}})

    assert kept.qsize() == 1
    assert dropped.empty()


@pytest.mark.asyncio
async def test_publish_without_subscribers_is_a_no_op() -> None:
    hub = GameHub()
    await hub.publish("nobody", {"event": "game:state"})


@pytest.mark.asyncio
async def test_broadcast_state_pushes_one_projection_per_connected_player() -> None:
    engine = GameEngine(SessionStore(), RoleCatalog.default())
    session = engine.create("host", "Alice", [])
    engine.join(session.code, "guest", "Bob")
    engine.join(session.code, "gone", "Cara")
    engine.disconnect("gone")
    publisher = _RecordingPublisher()

    await broadcast_state(publisher, session, engine.store.lock_for(session.code))

    assert [cid for cid, _ in publisher.pushes] == ["host", "guest"]
    by_conn = {cid: payload for cid, payload in publisher.pushes}
    assert by_conn["host"]["event"] == "game:state"
    assert len(by_conn["host"]["data"]["log"]) == len(session.log)
    assert by_conn["guest"]["data"]["log"] == []
