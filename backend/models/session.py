from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .roles import RoleInfo


class SessionStatus(str, Enum):
    LOBBY = "lobby"
    IN_PROGRESS = "in-progress"


class Phase(str, Enum):
    SETUP = "setup"
    NIGHT = "night"
    DAY = "day"


@dataclass
class LogEntry:
    ts: datetime
    text: str


@dataclass
class Player:
    id: str                                # stable, survives rejoin on the same connection
    connection_id: str
    name: str
    alive: bool = True
    connected: bool = True
    role: str | None = None


@dataclass
class GameSession:
    code: str                              # 6 chars, unambiguous alphabet
    host_connection_id: str
    host_name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: SessionStatus = SessionStatus.LOBBY
    phase: Phase = Phase.SETUP
    day: int = 0
    selected_roles: list[str] = field(default_factory=list)
    role_info: dict[str, RoleInfo] = field(default_factory=dict)
    players: list[Player] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)

    def find_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def find_connection(self, connection_id: str) -> Player | None:
        return next((p for p in self.players if p.connection_id == connection_id), None)

    def connected_players(self) -> list[Player]:
        return [p for p in self.players if p.connected]
