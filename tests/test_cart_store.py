# tests/test_cart_store.py
from coursecart.errors import ErrorCode
from coursecart.services import cart_store


def test_add_is_idempotent(db, cart_session, stored_section):
    sec = stored_section("10001", "CSCI-UA 101")

    first = cart_store.add(db, cart_session.id, sec)
    second = cart_store.add(db, cart_session.id, sec)

    assert first.ok and first.created
    assert second.ok and not second.created
    assert second.entry.id == first.entry.id
    assert len(cart_store.list_entries(db, cart_session.id)) == 1


def test_third_section_of_same_course_is_refused(db, cart_session, stored_section):
    a = stored_section("10001", "CSCI-UA 101")
    b = stored_section("10002", "CSCI-UA 101")
    c = stored_section("10003", "CSCI-UA 101")

    assert cart_store.add(db, cart_session.id, a).ok
    assert cart_store.add(db, cart_session.id, b).ok

    res = cart_store.add(db, cart_session.id, c)
    assert not res.ok
    assert res.code == ErrorCode.CAPACITY_EXCEEDED
    assert "CSCI-UA 101" in res.error
    assert len(cart_store.list_entries(db, cart_session.id)) == 2


def test_readding_a_held_section_at_the_cap_is_not_an_error(db, cart_session, stored_section):
    a = stored_section("10001", "CSCI-UA 101")
    b = stored_section("10002", "CSCI-UA 101")
    cart_store.add(db, cart_session.id, a)
    cart_store.add(db, cart_session.id, b)

    res = cart_store.add(db, cart_session.id, b)
    assert res.ok and not res.created


def test_remove_then_readd_succeeds(db, cart_session, stored_section):
    a = stored_section("10001", "CSCI-UA 101")
    b = stored_section("10002", "CSCI-UA 101")
    c = stored_section("10003", "CSCI-UA 101")
    cart_store.add(db, cart_session.id, a)
    cart_store.add(db, cart_session.id, b)

    assert cart_store.remove(db, cart_session.id, "10001") is True
    res = cart_store.add(db, cart_session.id, c)
    assert res.ok and res.created
    assert [e.class_number for e in cart_store.list_entries(db, cart_session.id)] == ["10002", "10003"]


def test_remove_missing_returns_false_and_keeps_cart(db, cart_session, stored_section):
    cart_store.add(db, cart_session.id, stored_section("10001", "CSCI-UA 101"))

    assert cart_store.remove(db, cart_session.id, "99999") is False
    assert [e.class_number for e in cart_store.list_entries(db, cart_session.id)] == ["10001"]


def test_list_keeps_insertion_order(db, cart_session, stored_section):
    for num, code in [("3", "MATH-UA 120"), ("1", "CSCI-UA 101"), ("2", "PHYS-UA 11")]:
        cart_store.add(db, cart_session.id, stored_section(num, code))

    assert [e.class_number for e in cart_store.list_entries(db, cart_session.id)] == ["3", "1", "2"]


def test_list_unknown_session_is_empty(db):
    assert cart_store.list_entries(db, "no-such-session") == []


def test_clear_only_touches_own_session(db, stored_section):
    from coursecart.services.sessions import create_demo_session

    s1 = create_demo_session(db)
    s2 = create_demo_session(db)
    sec = stored_section("10001", "CSCI-UA 101")
    cart_store.add(db, s1.id, sec)
    cart_store.add(db, s2.id, sec)

    assert cart_store.clear(db, s1.id) == 1
    assert cart_store.list_entries(db, s1.id) == []
    assert len(cart_store.list_entries(db, s2.id)) == 1


def test_limit_is_configurable(db, cart_session, stored_section, monkeypatch):
    from coursecart.config import settings

    monkeypatch.setattr(settings, "MAX_SECTIONS_PER_COURSE", 1)
    cart_store.add(db, cart_session.id, stored_section("10001", "CSCI-UA 101"))
    res = cart_store.add(db, cart_session.id, stored_section("10002", "CSCI-UA 101"))
    assert res.code == ErrorCode.CAPACITY_EXCEEDED

    res = cart_store.add(db, cart_session.id, stored_section("10002", "CSCI-UA 101"), max_per_course=3)
    assert res.ok


def test_add_after_logout_is_a_typed_failure(db, cart_session, stored_section):
    from coursecart.services.sessions import close_session

    sec = stored_section("10001", "CSCI-UA 101")
    close_session(db, cart_session.id)

    res = cart_store.add(db, cart_session.id, sec)
    assert not res.ok
    assert res.code == ErrorCode.UNKNOWN_SESSION
    assert cart_store.list_entries(db, cart_session.id) == []


def test_failed_write_is_rolled_back_and_reported(db, cart_session, stored_section, monkeypatch):
    from sqlalchemy.exc import OperationalError

    sec = stored_section("10001", "CSCI-UA 101")

    def boom():
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", boom)
    res = cart_store.add(db, cart_session.id, sec)
    monkeypatch.undo()

    assert not res.ok
    assert res.code == ErrorCode.CART_UPDATE_FAILED
    assert cart_store.list_entries(db, cart_session.id) == []
