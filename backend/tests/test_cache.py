"""Tests for the single-slot news cache."""

from datetime import datetime, timedelta, timezone

from civicfeed.core.cache import NewsCache
from civicfeed.models import AggregateResult


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def _result(source: str = "primary") -> AggregateResult:
    return AggregateResult(news=[], source=source, location="India")


def test_empty_cache_returns_none():
    assert NewsCache(ttl_seconds=1800).get() is None


def test_entry_served_until_ttl_elapses():
    clock = FakeClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))
    cache = NewsCache(ttl_seconds=1800, clock=clock)
    result = _result()
    cache.put(result)

    clock.advance(minutes=30)
    assert cache.get() is result

    clock.advance(seconds=1)
    assert cache.get() is None


def test_put_overwrites_single_slot():
    cache = NewsCache(ttl_seconds=1800)
    cache.put(_result("primary"))
    cache.put(_result("placeholder"))
    assert cache.get().source == "placeholder"


def test_invalidate_clears_entry():
    cache = NewsCache(ttl_seconds=1800)
    cache.put(_result())
    cache.invalidate()
    assert cache.get() is None
    cache.invalidate()
    assert cache.get() is None
