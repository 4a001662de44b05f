from __future__ import annotations

import logging

import pytest

from modern_lru.cache import LRUCache


def test_evicts_old_values() -> None:
    cache: LRUCache[str, str] = LRUCache(1)
    cache.set("first", "first")
    cache.set("second", "second")

    assert cache.size == 1
    assert not cache.has("first")
    assert cache.get("second") == "second"


def test_two_slot_scenario() -> None:
    cache: LRUCache[int, str] = LRUCache(2)
    cache.set(1, "a").set(2, "b").set(3, "c")

    assert cache.has(1) is False
    assert list(cache.keys()) == [3, 2]


@pytest.mark.parametrize("limit", [1, 2, 5, 17])
def test_limit_plus_one_inserts_evict_first_key(limit: int) -> None:
    cache: LRUCache[int, int] = LRUCache(limit)
    for i in range(limit + 1):
        cache.set(i, i)

    assert cache.size == limit
    assert cache.has(0) is False
    assert all(cache.has(i) for i in range(1, limit + 1))


def test_get_protects_key_from_eviction() -> None:
    cache: LRUCache[str, int] = LRUCache(3)
    cache.set("a", 1).set("b", 2).set("c", 3)

    assert cache.get("b") == 2
    assert list(cache.keys()) == ["b", "c", "a"]

    cache.set("d", 4)
    assert list(cache.keys()) == ["d", "b", "c"]
    assert not cache.has("a")


def test_get_of_tail_moves_tail_pointer() -> None:
    cache: LRUCache[str, int] = LRUCache(3)
    cache.set("a", 1).set("b", 2).set("c", 3)

    cache.get("a")
    cache.set("d", 4)
    assert list(cache.keys()) == ["d", "a", "c"]
    assert list(reversed(cache)) == ["c", "a", "d"]


def test_double_set_promotes() -> None:
    cache: LRUCache[str, str] = LRUCache(3)
    cache.set("first", "first")
    cache.set("second", "second")
    cache.set("third", "third")
    cache.set("second", "ha!")

    assert list(cache.keys()) == ["second", "third", "first"]
    assert cache.peek("second") == "ha!"


def test_overwrite_does_not_evict() -> None:
    cache: LRUCache[str, int] = LRUCache(2)
    cache.set("a", 1).set("b", 2).set("a", 3).set("b", 4)
    assert list(cache.items()) == [("b", 4), ("a", 3)]


def test_single_slot_cache_stays_consistent() -> None:
    cache: LRUCache[str, int] = LRUCache(1)
    cache.set("a", 1)
    assert cache.get("a") == 1
    cache.set("a", 2)
    assert list(cache.items()) == [("a", 2)]
    cache.set("b", 3)
    assert list(cache.items()) == [("b", 3)]
    assert list(reversed(cache.items())) == [("b", 3)]


def test_none_key_can_be_evicted() -> None:
    cache: LRUCache[object, int] = LRUCache(2)
    cache.set(None, 0).set(1, 1).set(2, 2)
    assert not cache.has(None)
    assert list(cache.keys()) == [2, 1]


def test_eviction_is_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="modern_lru.cache")
    cache: LRUCache[str, int] = LRUCache(1)
    cache.set("old", 1).set("new", 2)

    messages = [r.getMessage() for r in caplog.records if r.name == "modern_lru.cache"]
    assert any("Evicted 'old'" in m for m in messages)
