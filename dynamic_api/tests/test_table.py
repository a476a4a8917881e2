"""Tests for the in-memory route table."""

from shared.registry.table import RouteTable


def test_missing_entry_returns_empty_object():
    table = RouteTable()
    assert table.get("GET", "/missing") == {}


def test_set_then_get():
    table = RouteTable()
    table.set("GET", "/test", {"message": "ok"})
    assert table.get("GET", "/test") == {"message": "ok"}


def test_lookup_is_exact_on_method_and_path():
    table = RouteTable()
    table.set("GET", "/test", [1, 2])

    assert table.get("POST", "/test") == {}
    assert table.get("GET", "/test/") == {}
    assert table.get("get", "/test") == {}


def test_falsy_payloads_are_returned_as_stored():
    table = RouteTable()
    table.set("GET", "/false", False)
    table.set("GET", "/null", None)

    assert table.get("GET", "/false") is False
    assert table.get("GET", "/null") is None


def test_instances_are_isolated():
    first = RouteTable()
    second = RouteTable()
    first.set("GET", "/a", 1)

    assert ("GET", "/a") in first
    assert ("GET", "/a") not in second
    assert len(second) == 0


def test_keys_and_clear():
    table = RouteTable()
    table.set("GET", "/a", 1)
    table.set("PUT", "/b", 2)

    assert sorted(table.keys()) == [("GET", "/a"), ("PUT", "/b")]

    table.clear()
    assert table.keys() == []
