"""Tests for the expiring cache."""

import pytest

from mcp_tempo.utils.cache import (
    DEFAULT_TTL_SECONDS,
    CacheEntry,
    ExpiringCache,
    is_expired,
)


@pytest.mark.parametrize(
    "now,expected",
    [(1000.0, False), (1299.999, False), (1300.0, True), (1500.0, True)],
)
def test_is_expired(now, expected):
    assert is_expired(now, fetched_at=1000.0, ttl=300.0) is expected


def test_default_ttl_is_five_minutes():
    assert DEFAULT_TTL_SECONDS == 300
    assert ExpiringCache().ttl == 300


class TestExpiringCache:
    """Tests for the ExpiringCache class."""

    def test_put_stamps_entry(self, fake_clock):
        cache = ExpiringCache(clock=fake_clock)
        entry = cache.put("PROJ-1", "10001")
        assert entry == CacheEntry(value="10001", fetched_at=1000.0)

    def test_get_miss(self, fake_clock):
        cache = ExpiringCache(clock=fake_clock)
        assert cache.get("PROJ-1") is None

    def test_get_within_ttl(self, fake_clock):
        cache = ExpiringCache(ttl=300, clock=fake_clock)
        cache.put("PROJ-1", "10001")
        fake_clock.advance(299.5)
        assert cache.get("PROJ-1") == "10001"

    def test_get_after_ttl(self, fake_clock):
        cache = ExpiringCache(ttl=300, clock=fake_clock)
        cache.put("PROJ-1", "10001")
        fake_clock.advance(300)
        assert cache.get("PROJ-1") is None

    def test_put_refreshes_entry(self, fake_clock):
        cache = ExpiringCache(ttl=300, clock=fake_clock)
        cache.put("PROJ-1", "old")
        fake_clock.advance(301)
        cache.put("PROJ-1", "new")
        fake_clock.advance(200)
        assert cache.get("PROJ-1") == "new"

    def test_values_and_len(self, fake_clock):
        cache = ExpiringCache(ttl=300, clock=fake_clock)
        cache.put("PROJ-2", "b")
        fake_clock.advance(100)
        cache.put("PROJ-1", "a")
        assert cache.values() == ["b", "a"]
        assert len(cache) == 2

        fake_clock.advance(250)
        assert cache.values() == ["a"]
        assert len(cache) == 1

    def test_maxsize_bounds_memory(self, fake_clock):
        cache = ExpiringCache(clock=fake_clock, maxsize=2)
        for key in ("A-1", "A-2", "A-3"):
            cache.put(key, key)
        assert len(cache) == 2
