"""Storage key normalization.

Two caller keys do not behave like ordinary dict keys inside the cache:

- ``None`` is the value every "not found" path returns, so it is stored under
  its own substitute to keep lookups unambiguous.
- NaN floats are never equal to themselves, so two NaN objects would land in
  different dict slots (or the same object would stop matching once copied).

Both are mapped to members of a private enum. Every other key passes through
unchanged and keeps Python's own hash/equality semantics.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Hashable


class _SubstituteKey(enum.Enum):
    NONE = "none"
    NAN = "nan"

    def __repr__(self) -> str:
        return f"<storage key {self.value}>"


# Every NaN key comes back out of the cache as this one object.
CANONICAL_NAN = float("nan")


def is_nan(value: object) -> bool:
    """Return True for float NaN, the only key that is unequal to itself."""

    return isinstance(value, float) and math.isnan(value)


def to_storage(key: Hashable) -> Hashable:
    """Map a caller key to the key used inside the backing dict."""

    if key is None:
        return _SubstituteKey.NONE
    if is_nan(key):
        return _SubstituteKey.NAN
    return key


def to_original(storage_key: Hashable) -> Hashable:
    """Inverse of :func:`to_storage`."""

    if storage_key is _SubstituteKey.NONE:
        return None
    if storage_key is _SubstituteKey.NAN:
        return CANONICAL_NAN
    return storage_key
