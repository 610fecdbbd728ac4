"""Unit tests for item construction helpers."""
from datetime import datetime, timezone

from jsonstash.items import (
    build_item,
    is_valid_item_id,
    merge_item,
    new_item_id,
    replace_item,
    utc_timestamp,
)


def test_new_item_id_is_valid_and_unique():
    ids = {new_item_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(is_valid_item_id(i) for i in ids)


def test_is_valid_item_id():
    assert is_valid_item_id("abc-DEF_123")
    assert not is_valid_item_id("")
    assert not is_valid_item_id("..")
    assert not is_valid_item_id("a/b")
    assert not is_valid_item_id("a.json")


def test_utc_timestamp_format():
    ts = utc_timestamp(datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc))
    assert ts == "2024-05-01T10:00:00.123Z"


def test_build_item_stamps_object_bodies():
    item = build_item({"title": "t"}, created_at="2024-01-01T00:00:00.000Z")
    assert item == {"title": "t", "createdAt": "2024-01-01T00:00:00.000Z"}


def test_build_item_wraps_other_values():
    assert build_item(["a"], created_at="x") == {"value": ["a"], "createdAt": "x"}
    assert build_item(None, created_at="x") == {"value": None, "createdAt": "x"}
    assert build_item(3, created_at="x") == {"value": 3, "createdAt": "x"}


def test_build_item_does_not_mutate_body():
    body = {"title": "t"}
    build_item(body)
    assert body == {"title": "t"}


def test_replace_keeps_created_at():
    existing = {"title": "t", "createdAt": "old"}
    assert replace_item(existing, {"content": "c", "createdAt": "client"}) == {
        "content": "c",
        "createdAt": "old",
    }


def test_replace_restamp():
    existing = {"title": "t", "createdAt": "old"}
    assert replace_item(existing, {}, restamp=True)["createdAt"] != "old"


def test_merge_is_shallow():
    existing = {"title": "t", "content": "c", "meta": {"a": 1}, "createdAt": "old"}
    merged = merge_item(existing, {"content": "x", "meta": {"b": 2}})
    assert merged == {"title": "t", "content": "x", "meta": {"b": 2}, "createdAt": "old"}


def test_merge_restamp():
    merged = merge_item({"createdAt": "old"}, {"a": 1}, restamp=True)
    assert merged["a"] == 1
    assert merged["createdAt"] != "old"
