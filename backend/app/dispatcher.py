"""Maps inbound WebSocket events onto engine operations and builds acks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from app.schemas import (
    AddLogRequest,
    AssignRoleRequest,
    CreateRequest,
    GameRequest,
    JoinRequest,
    PlayerRequest,
    RandomizeRolePoolRequest,
    UpdateRolesRequest,
)
from models import GameSession
from services.engine import GameEngine
from services.errors import GameError

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    ack: dict[str, Any]
    session: GameSession | None = None      # game to broadcast, when the request changed one


Handler = Callable[[GameEngine, str, Any], tuple[dict[str, Any], GameSession]]


def _create(engine: GameEngine, cid: str, req: CreateRequest) -> tuple[dict[str, Any], GameSession]:
    session = engine.create(cid, req.host_name, req.selected_roles)
    return {"gameId": session.code, "defaults": list(engine.catalog.role_names)}, session


def _join(engine: GameEngine, cid: str, req: JoinRequest) -> tuple[dict[str, Any], GameSession]:
    session = engine.join(req.game_id, cid, req.name)
    return {"gameId": session.code}, session


def _update_roles(engine: GameEngine, cid: str, req: UpdateRolesRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.update_roles(req.game_id, cid, req.selected_roles)


def _randomize_role_pool(
    engine: GameEngine, cid: str, req: RandomizeRolePoolRequest
) -> tuple[dict[str, Any], GameSession]:
    pool = engine.randomize_role_pool(req.game_id, cid, req.player_count)
    return {"selectedRoles": pool}, engine.store.require(req.game_id)


def _random_assign_roles(engine: GameEngine, cid: str, req: GameRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.random_assign_roles(req.game_id, cid)


def _start(engine: GameEngine, cid: str, req: GameRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.start(req.game_id, cid)


def _next_phase(engine: GameEngine, cid: str, req: GameRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.next_phase(req.game_id, cid)


def _toggle_alive(engine: GameEngine, cid: str, req: PlayerRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.toggle_alive(req.game_id, cid, req.player_id)


def _assign_role(engine: GameEngine, cid: str, req: AssignRoleRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.assign_role(req.game_id, cid, req.player_id, req.role)


def _add_log(engine: GameEngine, cid: str, req: AddLogRequest) -> tuple[dict[str, Any], GameSession]:
    return {}, engine.add_log_entry(req.game_id, cid, req.text)


EVENTS: dict[str, tuple[type[BaseModel], Handler]] = {
    "game:create": (CreateRequest, _create),
    "game:join": (JoinRequest, _join),
    "game:updateRoles": (UpdateRolesRequest, _update_roles),
    "game:randomizeRolePool": (RandomizeRolePoolRequest, _randomize_role_pool),
    "game:randomAssignRoles": (GameRequest, _random_assign_roles),
    "game:start": (GameRequest, _start),
    "game:nextPhase": (GameRequest, _next_phase),
    "game:toggleAlive": (PlayerRequest, _toggle_alive),
    "game:assignRole": (AssignRoleRequest, _assign_role),
    "game:addLog": (AddLogRequest, _add_log),
}


def dispatch(engine: GameEngine, connection_id: str, event: str, data: Any) -> DispatchResult:
    """Run one event for ``connection_id``. Never raises for a rejected request."""
    entry = EVENTS.get(event)
    if entry is None:
        logger.info("[dispatcher] Unknown event %r from %s", event, connection_id)
        return DispatchResult(ack={"ok": False, "message": "Unknown event."})

    model, handler = entry
    try:
        request = model.model_validate(data if isinstance(data, dict) else {})
    except ValidationError as e:
        logger.info("[dispatcher] Invalid %s payload from %s: %s", event, connection_id, e.error_count())
        return DispatchResult(ack={"ok": False, "message": "Invalid request."})

    try:
        payload, session = handler(engine, connection_id, request)
    except GameError as e:
        logger.info("[dispatcher] %s rejected for %s: %s", event, connection_id, e.message)
        return DispatchResult(ack={"ok": False, "message": e.message})

    return DispatchResult(ack={"ok": True, **payload}, session=session)
