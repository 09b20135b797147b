from datetime import datetime

from models import (
    DEFAULT_ROLES,
    GameSession,
    LogEntry,
    Phase,
    Player,
    RoleCatalog,
    SessionStatus,
)


def test_game_session_defaults() -> None:
    session = GameSession(code="ABC234", host_connection_id="conn-1", host_name="Alice")
    assert session.status is SessionStatus.LOBBY
    assert session.phase is Phase.SETUP
    assert session.day == 0
    assert isinstance(session.created_at, datetime)
    assert session.selected_roles == []
    assert session.players == []
    assert session.log == []


def test_player_defaults() -> None:
    player = Player(id="AB23", connection_id="conn-1", name="Alice")
    assert player.alive is True
    assert player.connected is True
    assert player.role is None


def test_find_helpers() -> None:
    session = GameSession(code="ABC234", host_connection_id="conn-1", host_name="Alice")
    alice = Player(id="AAAA", connection_id="conn-1", name="Alice")
    bob = Player(id="BBBB", connection_id="conn-2", name="Bob", connected=False)
    session.players.extend([alice, bob])
    session.log.append(LogEntry(ts=session.created_at, text="Alice hosted the game."))

    assert session.find_player("BBBB") is bob
    assert session.find_player("ZZZZ") is None
    assert session.find_connection("conn-1") is alice
    assert session.connected_players() == [alice]


def test_default_catalog() -> None:
    catalog = RoleCatalog.default()
    assert len(catalog.role_names) == 17
    assert catalog.role_names[0] == "Washerwoman"
    assert catalog.role_names[-1] == "Imp"
    assert catalog.default_selection() == DEFAULT_ROLES[:10]
    assert catalog.role_info == {}
