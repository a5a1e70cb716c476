"""Tests for the health report cache."""

import pytest

from src.taskboard.core.health import HealthCache

pytestmark = pytest.mark.unit

REPORT = {"status": "healthy", "database": "healthy", "cached": False, "timestamp": 100.0}


def test_empty_cache_misses():
    assert HealthCache().get(now=100.0) is None


def test_hit_within_ttl_is_marked_cached():
    cache = HealthCache(ttl=10)
    cache.store(REPORT, now=100.0)

    hit = cache.get(now=104.26)

    assert hit is not None
    assert hit["cached"] is True
    assert hit["cache_age_seconds"] == 4.3
    assert hit["database"] == "healthy"
    # Stored report is left untouched
    assert REPORT["cached"] is False


def test_expires_at_ttl():
    cache = HealthCache(ttl=10)
    cache.store(REPORT, now=100.0)

    assert cache.get(now=110.0) is None


def test_clear():
    cache = HealthCache()
    cache.store(REPORT, now=100.0)
    cache.clear()

    assert cache.get(now=100.5) is None
