"""Tests for the loot dedup cache."""

import pytest

from loot_history.dedup import DEDUP_CLEANUP_AGE, DEDUP_WINDOW, DedupCache


@pytest.fixture
def cache():
    return DedupCache()


class TestDedupWindow:
    """Test suppression inside the window."""

    def test_first_observation_accepted(self, cache):
        assert cache.should_suppress("Thrall", "[Ore]", 0.0) is False
        assert len(cache) == 1

    def test_repeat_inside_window_suppressed(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        assert cache.should_suppress("Thrall", "[Ore]", 1.5) is True

    def test_repeat_after_window_accepted(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        assert cache.should_suppress("Thrall", "[Ore]", 2.5) is False

    def test_accepted_repeat_rearms_window(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        cache.should_suppress("Thrall", "[Ore]", 2.5)
        assert cache.should_suppress("Thrall", "[Ore]", 4.0) is True

    def test_suppressed_repeat_keeps_original_timestamp(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        assert cache.should_suppress("Thrall", "[Ore]", 1.9) is True
        # Window measured from t=0, not from the suppressed t=1.9
        assert cache.should_suppress("Thrall", "[Ore]", 2.1) is False

    def test_different_actor_not_suppressed(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        assert cache.should_suppress("Jaina", "[Ore]", 0.5) is False

    def test_different_item_not_suppressed(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        assert cache.should_suppress("Thrall", "[Cloth]", 0.5) is False

    def test_empty_actor(self, cache):
        cache.should_suppress("", "[Ore]", 0.0)
        assert cache.should_suppress("", "[Ore]", 1.0) is True
        assert DedupCache.make_key("", "[Ore]") in cache


class TestDedupCleanup:
    """Test lazy eviction of stale keys."""

    def test_key_kept_before_horizon(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        cache.should_suppress("Jaina", "[Cloth]", 4.9)
        assert "Thrall[Ore]" in cache

    def test_key_removed_after_horizon(self, cache):
        cache.should_suppress("Thrall", "[Ore]", 0.0)
        cache.should_suppress("Jaina", "[Cloth]", 5.1)
        assert "Thrall[Ore]" not in cache
        assert len(cache) == 1

    def test_cleanup_returns_count(self, cache):
        cache.should_suppress("A", "[1]", 0.0)
        cache.should_suppress("B", "[2]", 1.0)
        assert cache.cleanup(5.5) == 1
        assert cache.cleanup(10.0) == 1
        assert len(cache) == 0

    def test_clear(self, cache):
        cache.should_suppress("A", "[1]", 0.0)
        cache.clear()
        assert len(cache) == 0
        assert cache.should_suppress("A", "[1]", 0.1) is False

    def test_window_shorter_than_horizon(self):
        assert DEDUP_WINDOW < DEDUP_CLEANUP_AGE

    def test_invalid_thresholds_rejected(self):
        with pytest.raises(ValueError):
            DedupCache(window=5.0, cleanup_age=2.0)
