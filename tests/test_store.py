"""Tests for the keyed entity store."""
import pytest

from meditrack.errors import DuplicateKeyError
from meditrack.store import EntityStore


def test_add_then_get_returns_entity_and_grows_size():
    store = EntityStore()
    store.add("a", {"v": 1})

    assert store.get("a") == {"v": 1}
    assert store.size() == 1


def test_duplicate_key_is_rejected_and_size_unchanged():
    store = EntityStore()
    store.add("a", 1)

    with pytest.raises(DuplicateKeyError):
        store.add("a", 2)
    assert store.get("a") == 1
    assert len(store) == 1


def test_get_missing_returns_none():
    assert EntityStore().get("nope") is None


def test_get_all_keeps_insertion_order_and_is_a_copy():
    store = EntityStore()
    for key in ["c", "a", "b"]:
        store.add(key, key.upper())

    items = store.get_all()
    items.append("Z")

    assert store.get_all() == ["C", "A", "B"]
    assert list(store) == ["C", "A", "B"]


def test_search_preserves_order_and_may_be_empty():
    store = EntityStore()
    for i in range(6):
        store.add(str(i), i)

    assert store.search(lambda x: x % 2 == 0) == [0, 2, 4]
    assert store.search(lambda x: x > 10) == []


def test_update_keeps_position_and_ignores_unknown_keys():
    store = EntityStore()
    store.add("a", 1)
    store.add("b", 2)

    assert store.update("a", 10) is True
    assert store.update("missing", 99) is False
    assert store.get_all() == [10, 2]
    assert "missing" not in store


def test_delete_missing_key_is_noop():
    store = EntityStore()
    store.add("a", 1)

    assert store.delete("a") is True
    assert store.delete("a") is False
    assert store.delete("never") is False
    assert store.size() == 0


def test_delete_reports_true_for_a_stored_none():
    store = EntityStore()
    store.add("a", None)

    assert store.delete("a") is True
    assert store.size() == 0
