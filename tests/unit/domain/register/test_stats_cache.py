"""Unit tests for StatsCache."""

from repertorium.domain.register.model.query import RegisterStats
from repertorium.domain.register.service.stats_cache import StatsCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _stats(year: int) -> RegisterStats:
    return RegisterStats(year=year, total_for_year=1, last_yearly_seq=1, per_month_counts={1: 1})


class TestStatsCache:
    def test_returns_cached_value_within_ttl(self):
        clock = FakeClock()
        cache = StatsCache(ttl_seconds=5, clock=clock)
        cache.put(_stats(2025), None)

        clock.now += 4.9

        assert cache.get(2025, None) == _stats(2025)

    def test_expires_after_ttl(self):
        clock = FakeClock()
        cache = StatsCache(ttl_seconds=5, clock=clock)
        cache.put(_stats(2025), None)

        clock.now += 5

        assert cache.get(2025, None) is None

    def test_offices_are_cached_separately(self):
        cache = StatsCache(ttl_seconds=5)
        cache.put(_stats(2025), "jakarta")

        assert cache.get(2025, None) is None
        assert cache.get(2025, "jakarta") is not None

    def test_invalidate_year_drops_all_offices(self):
        cache = StatsCache(ttl_seconds=5)
        cache.put(_stats(2025), None)
        cache.put(_stats(2025), "jakarta")
        cache.put(_stats(2024), None)

        cache.invalidate(2025)

        assert cache.get(2025, None) is None
        assert cache.get(2025, "jakarta") is None
        assert cache.get(2024, None) is not None

    def test_zero_ttl_disables(self):
        cache = StatsCache(ttl_seconds=0)
        cache.put(_stats(2025), None)

        assert cache.enabled is False
        assert cache.get(2025, None) is None

    def test_put_purges_expired_offices(self):
        clock = FakeClock()
        cache = StatsCache(ttl_seconds=5, clock=clock)
        for office in ("a", "b", "c"):
            cache.put(_stats(2025), office)

        clock.now += 5
        cache.put(_stats(2025), "d")

        assert len(cache) == 1
        assert cache.get(2025, "d") is not None

    def test_size_is_capped(self):
        clock = FakeClock()
        cache = StatsCache(ttl_seconds=60, clock=clock, max_entries=3)
        for i in range(10):
            clock.now += 1
            cache.put(_stats(2025), f"office-{i}")

        assert len(cache) == 3
        assert cache.get(2025, "office-0") is None
        assert cache.get(2025, "office-9") is not None
