"""
Tests for bounded memoization.
"""

import pytest

from cosgrad import BoundedCache, CosineCoeffs, GlobalModifiers, fingerprint, fingerprint_for, seed_for, serialize


@pytest.fixture
def coeffs():
    """Reference palette."""
    return CosineCoeffs.from_rows(
        [
            [0.5, 0.5, 0.5, 1],
            [0.5, 0.5, 0.5, 1],
            [1.0, 1.0, 1.0, 1],
            [0.0, 0.333, 0.667, 1],
        ]
    )


class TestBoundedCache:
    """Test BoundedCache."""

    def test_default_size(self):
        """Test the default cap."""
        assert BoundedCache().maxsize == 50

    def test_evicts_oldest(self):
        """Test overflow discards the oldest insertion."""
        cache = BoundedCache(maxsize=3)
        for i in range(5):
            cache[i] = i * 10

        assert len(cache) == 3
        assert cache.keys() == [2, 3, 4]
        assert 0 not in cache
        assert cache[4] == 40

    def test_overwrite_keeps_position(self):
        """Test re-setting an existing key does not evict."""
        cache = BoundedCache(maxsize=2)
        cache["a"] = 1
        cache["b"] = 2
        cache["a"] = 3

        assert cache.keys() == ["a", "b"]
        assert cache["a"] == 3

    def test_get_default(self):
        """Test get() with a missing key."""
        cache = BoundedCache(maxsize=1)
        assert cache.get("missing") is None
        assert cache.get("missing", 7) == 7
        with pytest.raises(KeyError):
            cache["missing"]

    def test_clear(self):
        """Test clear() empties the cache."""
        cache = BoundedCache(maxsize=2)
        cache["a"] = 1
        cache.clear()
        assert len(cache) == 0

    @pytest.mark.parametrize("bad", [0, -1])
    def test_invalid_size(self, bad):
        """Test maxsize must be positive."""
        with pytest.raises(ValueError):
            BoundedCache(maxsize=bad)


class TestMemoizedHelpers:
    """Test seed_for() / fingerprint_for()."""

    def test_seed_for_matches_serialize(self, coeffs):
        """Test memoized seeds equal direct serialization."""
        cache = BoundedCache(maxsize=4)
        globals_ = GlobalModifiers(0.2, 1.5, 1.2, 0.5)

        assert seed_for(coeffs, globals_, cache=cache) == serialize(coeffs, globals_)
        assert seed_for(coeffs, cache=cache) == serialize(coeffs)
        assert len(cache) == 2

    def test_seed_for_hits_cache(self, coeffs):
        """Test repeated lookups reuse the stored seed."""
        cache = BoundedCache(maxsize=4)
        seed_for(coeffs, cache=cache)
        key = (coeffs, GlobalModifiers.identity())
        cache[key] = "sentinel"

        assert seed_for(coeffs.rows(), None, cache=cache) == "sentinel"

    def test_seed_cache_bounded(self, coeffs):
        """Test the seed cache never grows past maxsize."""
        cache = BoundedCache(maxsize=3)
        for i in range(6):
            seed_for(coeffs.with_channel(0, 0, i / 10), cache=cache)
        assert len(cache) == 3

    def test_fingerprint_for(self, coeffs):
        """Test memoized fingerprints."""
        cache = BoundedCache(maxsize=2)

        assert fingerprint_for(coeffs, cache=cache) == fingerprint(coeffs)
        assert fingerprint_for(coeffs.rows(), cache=cache) == fingerprint(coeffs)
        assert len(cache) == 1

    def test_module_cache(self, coeffs):
        """Test the shared module-level cache path."""
        assert seed_for(coeffs) == serialize(coeffs)
        assert fingerprint_for(coeffs) == fingerprint(coeffs)
