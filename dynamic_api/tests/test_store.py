"""Tests for the file-backed route store."""

import json
import logging

import pytest

from shared.registry import (
    InvalidRouteError,
    RegistryError,
    RouteNotFoundError,
    RouteRecord,
    RouteStore,
)


def test_save_writes_formatted_document(apis_dir):
    store = RouteStore(apis_dir)
    filename = store.save(RouteRecord(path="/users/list", method="GET", response={"a": 1}))

    assert filename == "users_list.json"
    text = (apis_dir / filename).read_text()
    assert json.loads(text) == {"path": "/users/list", "method": "GET", "response": {"a": 1}}
    assert '\n  "path"' in text


def test_load_by_path_round_trips(apis_dir):
    store = RouteStore(apis_dir)
    store.save(RouteRecord(path="/test", method="POST", response=[1, 2]))

    record = store.load_by_path("/test")
    assert record == RouteRecord(path="/test", method="POST", response=[1, 2])


def test_load_by_path_missing_returns_none(apis_dir):
    store = RouteStore(apis_dir)
    assert store.load_by_path("/nothing") is None


def test_load_by_path_corrupt_file_raises(apis_dir, write_route_file):
    write_route_file("broken.json", "{not json")
    store = RouteStore(apis_dir)

    with pytest.raises(RegistryError) as exc_info:
        store.load_by_path("/broken")
    assert exc_info.value.status_code == 500


def test_same_path_different_method_overwrites(apis_dir):
    """The record id comes from the path alone, so the last save wins."""
    store = RouteStore(apis_dir)
    store.save(RouteRecord(path="/widgets", method="GET", response={"v": 1}))
    store.save(RouteRecord(path="/widgets", method="POST", response={"v": 2}))

    assert [p.name for p in apis_dir.iterdir()] == ["widgets.json"]
    assert store.load_by_path("/widgets") == RouteRecord(
        path="/widgets", method="POST", response={"v": 2}
    )


def test_update_replaces_response_only(apis_dir):
    store = RouteStore(apis_dir)
    store.save(RouteRecord(path="/test", method="PATCH", response={"old": True}))

    record = store.update("/test", {"new": True})

    assert record.method == "PATCH"
    assert record.path == "/test"
    assert store.load_by_path("/test").response == {"new": True}


def test_update_missing_raises_not_found(apis_dir):
    store = RouteStore(apis_dir)
    with pytest.raises(RouteNotFoundError):
        store.update("/never-created", {"x": 1})


def test_list_returns_valid_records(apis_dir, write_route_file):
    write_route_file("a.json", {"path": "/a", "method": "GET", "response": False})
    write_route_file("b.json", {"path": "/b", "method": "GET", "response": 0})

    records = RouteStore(apis_dir).list()

    assert [r.path for r in records] == ["/a", "/b"]
    assert [r.response for r in records] == [False, 0]


def test_list_skips_non_record_files(apis_dir, write_route_file):
    write_route_file("a.json", {"path": "/a", "method": "GET", "response": {}})
    write_route_file("notes.txt", "not a record")
    (apis_dir / "nested.json").mkdir()

    assert [r.path for r in RouteStore(apis_dir).list()] == ["/a"]


def test_list_continues_past_corrupt_file(apis_dir, write_route_file, caplog):
    write_route_file("a.json", "{broken")
    write_route_file("b.json", {"path": "/b", "method": "GET", "response": {}})

    with caplog.at_level(logging.ERROR, logger="shared.registry.store"):
        records = RouteStore(apis_dir).list()

    assert [r.path for r in records] == ["/b"]
    assert "Error loading route file a.json" in caplog.text


def test_list_warns_about_invalid_records(apis_dir, write_route_file, caplog):
    write_route_file("no_response.json", {"path": "/x", "method": "GET"})
    write_route_file("no_method.json", {"path": "/y", "response": {}})
    write_route_file("array.json", [1, 2, 3])

    with caplog.at_level(logging.WARNING, logger="shared.registry.store"):
        records = RouteStore(apis_dir).list()

    assert records == []
    assert "Skipping invalid route file: no_response.json" in caplog.text
    assert "Skipping invalid route file: array.json" in caplog.text


def test_list_on_missing_directory_is_empty(tmp_path):
    assert RouteStore(tmp_path / "absent").list() == []


def test_save_rejects_non_standard_numbers(apis_dir):
    store = RouteStore(apis_dir)

    with pytest.raises(InvalidRouteError):
        store.save(RouteRecord(path="/n", method="GET", response={"v": float("nan")}))

    assert not (apis_dir / "n.json").exists()


def test_list_treats_nan_file_as_corrupt(apis_dir, write_route_file, caplog):
    write_route_file("n.json", '{"path": "/n", "method": "GET", "response": {"v": NaN}}')
    write_route_file("ok.json", {"path": "/ok", "method": "GET", "response": {}})

    with caplog.at_level(logging.ERROR, logger="shared.registry.store"):
        records = RouteStore(apis_dir).list()

    assert [r.path for r in records] == ["/ok"]
    assert "Error loading route file n.json" in caplog.text


def test_update_rejects_infinity_and_keeps_record(apis_dir):
    store = RouteStore(apis_dir)
    store.save(RouteRecord(path="/test", method="GET", response={"v": 1}))

    with pytest.raises(InvalidRouteError):
        store.update("/test", float("inf"))

    assert store.load_by_path("/test").response == {"v": 1}


def test_record_key_upper_cases_method():
    assert RouteRecord(path="/b", method="put", response={}).key == "PUT /b"
