"""Unit tests for the in-memory ItemStore."""
from concurrent.futures import ThreadPoolExecutor

from jsonstash.store import ItemStore


def test_put_get_delete():
    store = ItemStore()
    assert store.get("a") is None

    store.put("a", {"x": 1})
    assert store.get("a") == {"x": 1}
    assert "a" in store
    assert len(store) == 1

    assert store.delete("a") is True
    assert store.get("a") is None
    assert store.delete("a") is False


def test_values_are_copied_in_and_out():
    store = ItemStore()
    item = {"nested": {"x": 1}}
    store.put("a", item)

    item["nested"]["x"] = 2
    store.get("a")["nested"]["x"] = 3

    assert store.get("a") == {"nested": {"x": 1}}


def test_list_all_is_a_snapshot():
    store = ItemStore()
    store.put("a", {"x": 1})

    snapshot = store.list_all()
    store.put("b", {"x": 2})
    snapshot["c"] = {}

    assert set(snapshot) == {"a", "c"}
    assert set(store.list_all()) == {"a", "b"}


def test_concurrent_writers():
    store = ItemStore()

    def write(i):
        store.put(f"id-{i}", {"i": i})
        store.get(f"id-{i}")
        store.list_all()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(write, range(200)))

    assert len(store) == 200
    assert store.get("id-199") == {"i": 199}
