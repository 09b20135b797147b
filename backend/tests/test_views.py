from models import RoleCatalog, RoleInfo
from services.engine import GameEngine
from services.store import SessionStore
from services.views import project


def _engine() -> GameEngine:
    catalog = RoleCatalog(
        role_names=("Imp", "Chef"),
        role_info={"Imp": RoleInfo(team="demon", description="Kills each night.")},
    )
    return GameEngine(SessionStore(), catalog)


def test_only_host_sees_the_log() -> None:
    engine = _engine()
    session = engine.create("host", "Alice", [])
    engine.join(session.code, "guest", "Bob")
    for i in range(5):
        engine.add_log_entry(session.code, "host", f"note {i}")

    host_view = project(session, "host")
    guest_view = project(session, "guest")
    anonymous_view = project(session, None)

    assert [e.text for e in host_view.log] == [e.text for e in session.log]
    assert len(host_view.log) == 7
    assert guest_view.log == []
    assert anonymous_view.log == []


def test_roster_and_roles_are_visible_to_everyone() -> None:
    engine = _engine()
    session = engine.create("host", "Alice", ["Imp"])
    engine.join(session.code, "guest", "Bob")
    engine.assign_role(session.code, "host", session.players[1].id, "Imp")

    guest_view = project(session, "guest")

    assert guest_view.id == session.code
    assert guest_view.host_name == "Alice"
    assert [p.name for p in guest_view.players] == ["Alice", "Bob"]
    assert guest_view.players[1].role == "Imp"
    assert guest_view.selected_roles == ["Imp"]
    assert guest_view.role_info["Imp"].team == "demon"


def test_payload_uses_camel_case_wire_names() -> None:
    engine = _engine()
    session = engine.create("host", "Alice", [])
    engine.start(session.code, "host")

    payload = project(session, "host").to_payload()

    assert payload["hostConnectionId"] == "host"
    assert payload["hostName"] == "Alice"
    assert payload["status"] == "in-progress"
    assert payload["phase"] == "night"
    assert payload["day"] == 1
    assert payload["selectedRoles"] == ["Imp", "Chef"]
    assert payload["roleInfo"] == {"Imp": {"team": "demon", "description": "Kills each night."}}
    assert payload["players"][0]["connectionId"] == "host"
    assert isinstance(payload["log"][0]["ts"], str)
    assert payload["log"][-1]["text"] == "Game started: Night 1 begins."


def test_projection_is_a_snapshot() -> None:
    engine = _engine()
    session = engine.create("host", "Alice", ["Imp"])
    view = project(session, "host")
    engine.update_roles(session.code, "host", ["Chef"])
    assert view.selected_roles == ["Imp"]
    assert len(view.log) == 1
