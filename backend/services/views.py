"""Per-viewer projection of a game."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models import GameSession, Phase, SessionStatus


class _View(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleInfoView(_View):
    team: str | None = None
    description: str | None = None


class PlayerView(_View):
    id: str
    connection_id: str
    name: str
    alive: bool
    connected: bool
    role: str | None = None


class LogEntryView(_View):
    ts: datetime
    text: str


class GameView(_View):
    id: str
    host_connection_id: str
    host_name: str
    status: SessionStatus
    phase: Phase
    day: int
    selected_roles: list[str]
    role_info: dict[str, RoleInfoView]
    players: list[PlayerView]
    log: list[LogEntryView]

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def project(session: GameSession, viewer_connection_id: str | None) -> GameView:
    """
    Build the view of ``session`` sent to one viewer.

    Only the host sees the event log. Everything else, including every
    player's assigned role, is the same for all viewers.
    """
    is_host = viewer_connection_id is not None and viewer_connection_id == session.host_connection_id
    return GameView(
        id=session.code,
        host_connection_id=session.host_connection_id,
        host_name=session.host_name,
        status=session.status,
        phase=session.phase,
        day=session.day,
        selected_roles=list(session.selected_roles),
        role_info={
            name: RoleInfoView(team=info.team, description=info.description)
            for name, info in session.role_info.items()
        },
        players=[
            PlayerView(
                id=p.id,
                connection_id=p.connection_id,
                name=p.name,
                alive=p.alive,
                connected=p.connected,
                role=p.role,
            )
            for p in session.players
        ],
        log=[LogEntryView(ts=e.ts, text=e.text) for e in session.log] if is_host else [],
    )
