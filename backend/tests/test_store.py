"""Tests for game code allocation and lookup."""

import threading

import pytest

from models import RoleCatalog, RoleInfo, SessionStatus
from services.errors import SessionNotFound
from services.ids import CODE_ALPHABET, normalize_code
from services.store import SessionStore, clean_role_names


def test_code_alphabet_has_no_ambiguous_symbols() -> None:
    assert len(CODE_ALPHABET) == 32
    assert not set("01IO") & set(CODE_ALPHABET)


def test_create_seeds_session() -> None:
    store = SessionStore()
    session = store.create("conn-1", "Alice", ["Imp", "Baron"], RoleCatalog.default())

    assert len(session.code) == 6
    assert set(session.code) <= set(CODE_ALPHABET)
    assert session.host_connection_id == "conn-1"
    assert session.host_name == "Alice"
    assert session.status is SessionStatus.LOBBY
    assert session.selected_roles == ["Imp", "Baron"]
    assert [e.text for e in session.log] == ["Alice hosted the game."]
    assert store.lookup(session.code) is session


def test_create_without_roles_uses_first_ten_catalog_roles() -> None:
    catalog = RoleCatalog(
        role_names=tuple(f"Role {i}" for i in range(14)),
        role_info={"Role 0": RoleInfo(team="town")},
    )
    session = SessionStore().create("conn-1", "Alice", [], catalog)
    assert session.selected_roles == [f"Role {i}" for i in range(10)]
    assert session.role_info == {"Role 0": RoleInfo(team="town")}


def test_lookup_is_case_insensitive_and_trimmed() -> None:
    store = SessionStore()
    session = store.create("conn-1", "Alice", [], RoleCatalog.default())
    assert store.lookup(f"  {session.code.lower()} ") is session
    assert session.code in store
    assert store.lookup("zzzzzz") is None
    assert store.lookup(None) is None


def test_require_raises_when_missing() -> None:
    with pytest.raises(SessionNotFound) as exc:
        SessionStore().require("ZZZZZZ")
    assert exc.value.message == "Game not found."


def test_code_collision_is_regenerated(monkeypatch: pytest.MonkeyPatch) -> None:
    codes = iter(["AAAAAA", "AAAAAA", "AAAAAA", "BBBBBB"])
    monkeypatch.setattr("services.store.generate_id", lambda length: next(codes))
    store = SessionStore()

    first = store.create("conn-1", "Alice", [], RoleCatalog.default())
    second = store.create("conn-2", "Bob", [], RoleCatalog.default())

    assert first.code == "AAAAAA"
    assert second.code == "BBBBBB"
    assert len(store) == 2


def test_concurrent_creates_get_distinct_codes() -> None:
    store = SessionStore(code_length=2)
    catalog = RoleCatalog.default()

    def worker(i: int) -> None:
        for j in range(20):
            store.create(f"conn-{i}-{j}", "Host", [], catalog)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    codes = [s.code for s in store.all()]
    assert len(codes) == 160
    assert len(set(codes)) == 160


def test_clean_role_names() -> None:
    raw = ["  Imp ", "", "   ", "Baron"] + [f"R{i}" for i in range(40)]
    cleaned = clean_role_names(raw)
    assert cleaned[:2] == ["Imp", "Baron"]
    assert len(cleaned) == 25
    assert clean_role_names(None) == []


def test_normalize_code() -> None:
    assert normalize_code(" ab3def ") == "AB3DEF"
    assert normalize_code(None) == ""
