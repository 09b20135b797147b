from __future__ import annotations

import asyncio
import json
import logging
import secrets
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.dispatcher import dispatch
from services.engine import GameEngine
from services.game_hub import GameHub, broadcast_state

router = APIRouter(tags=["games"])
logger = logging.getLogger(__name__)

Send = Callable[[dict[str, Any]], Awaitable[None]]


async def _pump(q: asyncio.Queue[dict[str, Any]], send: Send) -> None:
    while True:
        payload = await q.get()
        await send(payload)


@router.websocket("/ws")
async def ws_game(websocket: WebSocket) -> None:
    """
    One bidirectional channel per client.

    Client frames:  {"event": "game:<op>", "ref": any, "data": {...}}
    Server frames:  {"event": "connected", "data": {"connectionId": str}}
                    {"event": "ack", "ref": any, "data": {"ok": bool, ...}}
                    {"event": "game:state", "data": GameView}
    """
    engine: GameEngine = websocket.app.state.engine
    hub: GameHub = websocket.app.state.hub

    await websocket.accept()
    connection_id = secrets.token_urlsafe(12)
    send_lock = asyncio.Lock()

    async def send(message: dict[str, Any]) -> None:
        async with send_lock:
            await websocket.send_json(message)

    q = await hub.subscribe(connection_id)
    pusher = asyncio.create_task(_pump(q, send))
    logger.info("[games_ws] Connection opened: %s", connection_id)
    try:
        await send({"event": "connected", "data": {"connectionId": connection_id}})
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                message = None
            if not isinstance(message, dict):
                await send({"event": "ack", "ref": None, "data": {"ok": False, "message": "Invalid request."}})
                continue

            result = dispatch(engine, connection_id, str(message.get("event", "")), message.get("data"))
            await send({"event": "ack", "ref": message.get("ref"), "data": result.ack})
            if result.session is not None:
                await broadcast_state(hub, result.session, engine.store.lock_for(result.session.code))
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("[games_ws] Connection %s failed", connection_id)
    finally:
        pusher.cancel()
        try:
            await pusher
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.warning("[games_ws] Push task for %s failed", connection_id, exc_info=True)
        try:
            await hub.unsubscribe(connection_id, q)
        finally:
            # Host hand-over must run however the socket went away.
            for session in engine.disconnect(connection_id):
                await broadcast_state(hub, session, engine.store.lock_for(session.code))
            logger.info("[games_ws] Connection closed: %s", connection_id)
