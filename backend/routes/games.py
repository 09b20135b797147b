"""Read-only HTTP endpoints: role catalog and public game view."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from services.engine import GameEngine
from services.views import project

router = APIRouter(tags=["games"])
logger = logging.getLogger(__name__)


def get_engine(request: Request) -> GameEngine:
    return request.app.state.engine


@router.get("/roles")
def get_roles(engine: GameEngine = Depends(get_engine)) -> dict[str, Any]:
    """Role names and per-role metadata known to this server."""
    catalog = engine.catalog
    return {
        "roleNames": list(catalog.role_names),
        "roleInfo": {
            name: {"team": info.team, "description": info.description}
            for name, info in catalog.role_info.items()
        },
    }


@router.get("/games/{code}")
def get_game(code: str, engine: GameEngine = Depends(get_engine)) -> dict[str, Any]:
    """Spectator view of a game (no event log). Used by clients to check a code before joining."""
    logger.info("[games] GET /api/games/%s called", code)
    session = engine.store.lookup(code)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    with engine.store.lock_for(session.code):
        view = project(session, None)
    return view.to_payload()
