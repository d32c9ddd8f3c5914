"""
Bounded memoization for seed and fingerprint lookups.

Callers that repeatedly need the seed of the same palette (export lists,
gallery views) can memoize through BoundedCache. The cache keeps at most
`maxsize` entries and discards the oldest insertion on overflow.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Hashable
from typing import Any

from cosgrad.codec import serialize
from cosgrad.coeffs import as_coeffs, as_globals
from cosgrad.constants import DEFAULT_CACHE_SIZE
from cosgrad.similarity import fingerprint
from cosgrad.validators import validate_positive

logger = logging.getLogger(__name__)


class BoundedCache:
    """
    Insertion-ordered mapping with a size cap.

    Example:
        >>> cache = BoundedCache(maxsize=2)
        >>> cache["a"] = 1; cache["b"] = 2; cache["c"] = 3
        >>> list(cache.keys())
        ['b', 'c']
    """

    __slots__ = ("maxsize", "_data")

    @validate_positive("maxsize")
    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE):
        self.maxsize = int(maxsize)
        self._data: OrderedDict[Hashable, Any] = OrderedDict()

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __getitem__(self, key: Hashable) -> Any:
        return self._data[key]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        if key in self._data:
            self._data[key] = value
            return
        self._data[key] = value
        while len(self._data) > self.maxsize:
            evicted, _ = self._data.popitem(last=False)
            logger.debug(f"[BoundedCache] Evicted oldest entry {evicted!r}")

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> list[Hashable]:
        return list(self._data.keys())

    def clear(self) -> None:
        self._data.clear()


_seed_cache = BoundedCache()
_fingerprint_cache = BoundedCache()


def seed_for(coeffs: Any, globals_: Any = None, cache: BoundedCache | None = None) -> str:
    """
    Memoized serialize().

    Args:
        coeffs: Coefficients to encode
        globals_: Global modifiers (identity when None)
        cache: Cache to use (module-level cache when None)

    Returns:
        Seed string
    """
    cache = _seed_cache if cache is None else cache
    key = (as_coeffs(coeffs), as_globals(globals_))
    seed = cache.get(key)
    if seed is None:
        seed = serialize(*key)
        cache[key] = seed
    return seed


def fingerprint_for(coeffs: Any, cache: BoundedCache | None = None) -> str:
    """Memoized fingerprint()."""
    cache = _fingerprint_cache if cache is None else cache
    key = as_coeffs(coeffs)
    value = cache.get(key)
    if value is None:
        value = fingerprint(key)
        cache[key] = value
    return value
