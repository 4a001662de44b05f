"""Fixed-capacity least-recently-used cache.

Entries live in a plain ``dict`` keyed by storage key (see
:mod:`modern_lru.keys`). Recency order is a doubly-linked list threaded
through the records themselves: each record holds the storage keys of its
neighbours rather than references to them, so the dict is the only owner of
every record.

``head`` is the most recently used key, ``tail`` the least recently used one.
All operations are O(1) amortized.

Not thread-safe: reads rewrite links, so a cache shared between threads must
be guarded by a single external lock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from modern_lru.errors import CacheArgumentError
from modern_lru.keys import to_original, to_storage
from modern_lru.views import LRUItemsView, LRUKeysView, LRUValuesView

logger = logging.getLogger("modern_lru.cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING: Any = object()


@dataclass(slots=True)
class _Record(Generic[V]):
    key: Hashable
    value: V
    # Storage keys of the neighbours; None marks the head (prev) or tail (next).
    prev: Hashable | None = None
    next: Hashable | None = None


def _iter_pairs(initial: Any) -> Iterator[tuple[Any, Any]]:
    pairs = initial.items() if isinstance(initial, Mapping) else initial
    try:
        it = iter(pairs)
    except TypeError as e:
        raise CacheArgumentError(
            f"initial must be an iterable of (key, value) pairs, got {type(initial).__name__}"
        ) from e

    for pair in it:
        try:
            key, value = pair
        except (TypeError, ValueError) as e:
            raise CacheArgumentError(
                f"initial items must be (key, value) pairs, got {pair!r}"
            ) from e
        yield key, value


class LRUCache(MutableMapping[K, V]):
    """A mapping that holds at most ``limit`` entries, evicting the least recently used.

    Reading (``get``, ``cache[key]``) and writing (``set``, ``cache[key] = v``)
    both count as a use and move the key to the most-recently-used position.
    ``has``/``in``, ``peek`` and traversal never change the order.

    Traversal (``keys()``, ``values()``, ``items()``, ``iter(cache)``) walks from
    the most recently used entry to the least recently used one. Mutating the
    cache while a traversal is in progress leaves that traversal's ordering
    undefined; reading the entry that was just yielded is the one exception.
    """

    def __init__(
        self,
        limit: int,
        initial: Iterable[tuple[K, V]] | Mapping[K, V] | None = None,
    ) -> None:
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            raise CacheArgumentError(f"limit must be a positive integer, got {limit!r}")

        self._limit = limit
        self._store: dict[Hashable, _Record[V]] = {}
        self._head: Hashable | None = None
        self._tail: Hashable | None = None

        if initial is not None:
            for key, value in _iter_pairs(initial):
                self.set(key, value)

        logger.debug("Created LRU cache (limit=%d, size=%d)", limit, len(self._store))

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def size(self) -> int:
        return len(self._store)

    # -- linked list -------------------------------------------------------

    def _unlink(self, record: _Record[V]) -> None:
        prev, nxt = record.prev, record.next
        if prev is None:
            self._head = nxt
        else:
            self._store[prev].next = nxt
        if nxt is None:
            self._tail = prev
        else:
            self._store[nxt].prev = prev
        record.prev = None
        record.next = None

    def _link_head(self, record: _Record[V]) -> None:
        record.prev = None
        record.next = self._head
        if self._head is None:
            self._tail = record.key
        else:
            self._store[self._head].prev = record.key
        self._head = record.key

    def _promote(self, record: _Record[V]) -> None:
        if record.prev is None:
            return
        self._unlink(record)
        self._link_head(record)

    def _remove(self, record: _Record[V]) -> None:
        self._unlink(record)
        del self._store[record.key]

    def _walk(self, *, reverse: bool = False) -> Iterator[_Record[V]]:
        store = self._store
        cursor = self._tail if reverse else self._head
        while cursor is not None:
            record = store.get(cursor)
            if record is None:
                # Removed behind our back; see the class docstring.
                return
            # Advance before yielding so that promoting the yielded record is safe.
            cursor = record.prev if reverse else record.next
            yield record

    # -- public operations -------------------------------------------------

    def has(self, key: K) -> bool:
        """Return True if ``key`` is cached. Does not affect recency."""

        return to_storage(key) in self._store

    def get(self, key: K, default: Any = None) -> Any:
        """Return the value for ``key`` and mark it most recently used, else ``default``."""

        record = self._store.get(to_storage(key))
        if record is None:
            return default
        self._promote(record)
        return record.value

    def peek(self, key: K, default: Any = None) -> Any:
        """Return the value for ``key`` without touching recency."""

        record = self._store.get(to_storage(key))
        if record is None:
            return default
        return record.value

    def set(self, key: K, value: V) -> LRUCache[K, V]:
        """Store ``value`` under ``key`` as the most recently used entry.

        Adding a new key to a full cache evicts the least recently used entry.
        Returns the cache so calls can be chained.
        """

        skey = to_storage(key)
        record = self._store.get(skey)
        if record is not None:
            record.value = value
            self._promote(record)
            return self

        record = _Record(skey, value)
        self._store[skey] = record
        self._link_head(record)

        if len(self._store) > self._limit:
            # limit >= 1, so the tail is never the record just inserted.
            evicted = self._store[self._tail]
            self._remove(evicted)
            logger.debug("Evicted %r (limit=%d)", to_original(evicted.key), self._limit)
        return self

    def delete(self, key: K) -> bool:
        """Remove ``key``; return True if it was present."""

        record = self._store.get(to_storage(key))
        if record is None:
            return False
        self._remove(record)
        return True

    def clear(self) -> None:
        self._store.clear()
        self._head = None
        self._tail = None

    def pop(self, key: K, default: Any = _MISSING) -> Any:
        record = self._store.get(to_storage(key))
        if record is None:
            if default is _MISSING:
                raise KeyError(key)
            return default
        self._remove(record)
        return record.value

    def popitem(self, last: bool = True) -> tuple[K, V]:
        """Remove and return the most recently used entry, or the least recently used if not ``last``."""

        skey = self._head if last else self._tail
        if skey is None:
            raise KeyError("popitem(): cache is empty")
        record = self._store[skey]
        self._remove(record)
        return to_original(record.key), record.value  # type: ignore[return-value]

    def copy(self) -> LRUCache[K, V]:
        """Return a shallow copy with the same limit and recency order."""

        return type(self)(self._limit, reversed(self.items()))

    def for_each(self, callback: Callable[[V, K, LRUCache[K, V]], object]) -> None:
        """Call ``callback(value, key, cache)`` for every entry, most recently used first."""

        for key, value in self.items():
            callback(value, key, self)

    def keys(self) -> LRUKeysView[K]:
        return LRUKeysView(self)

    def values(self) -> LRUValuesView[V]:
        return LRUValuesView(self)

    def items(self) -> LRUItemsView[K, V]:
        return LRUItemsView(self)

    entries = items

    # -- mapping protocol --------------------------------------------------

    def __getitem__(self, key: K) -> V:
        record = self._store.get(to_storage(key))
        if record is None:
            raise KeyError(key)
        self._promote(record)
        return record.value

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[K]:
        for record in self._walk():
            yield to_original(record.key)  # type: ignore[misc]

    def __reversed__(self) -> Iterator[K]:
        for record in self._walk(reverse=True):
            yield to_original(record.key)  # type: ignore[misc]

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._limit}, {list(self.items())!r})"
