"""Live traversal views over an :class:`~modern_lru.cache.LRUCache`.

Views behave like ``dict`` views: each ``iter()`` starts a fresh walk from the
cache's current most recently used entry, ``len()`` tracks the cache, and
``reversed()`` walks from the least recently used entry instead. Walking a view
never changes recency.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, KeysView, ValuesView
from typing import TYPE_CHECKING, Any, TypeVar

from modern_lru.keys import to_original

if TYPE_CHECKING:  # pragma: no cover
    from modern_lru.cache import LRUCache

K = TypeVar("K")
V = TypeVar("V")

_MISSING: Any = object()


class LRUKeysView(KeysView[K]):
    __slots__ = ()

    _mapping: LRUCache[Any, Any]

    def __reversed__(self) -> Iterator[K]:
        return reversed(self._mapping)


class LRUValuesView(ValuesView[V]):
    __slots__ = ()

    _mapping: LRUCache[Any, Any]

    def __iter__(self) -> Iterator[V]:
        for record in self._mapping._walk():
            yield record.value

    def __reversed__(self) -> Iterator[V]:
        for record in self._mapping._walk(reverse=True):
            yield record.value

    def __contains__(self, value: object) -> bool:
        return any(v is value or v == value for v in self)


class LRUItemsView(ItemsView[K, V]):
    __slots__ = ()

    _mapping: LRUCache[Any, Any]

    def __iter__(self) -> Iterator[tuple[K, V]]:
        for record in self._mapping._walk():
            yield to_original(record.key), record.value  # type: ignore[misc]

    def __reversed__(self) -> Iterator[tuple[K, V]]:
        for record in self._mapping._walk(reverse=True):
            yield to_original(record.key), record.value  # type: ignore[misc]

    def __contains__(self, item: object) -> bool:
        key, value = item  # type: ignore[misc]
        v = self._mapping.peek(key, _MISSING)
        return v is not _MISSING and (v is value or v == value)
