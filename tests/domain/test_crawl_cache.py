from locmatrix.domain.crawl_cache import CrawlCache
from locmatrix.domain.fetch_result import FetchResult


def test_cache_miss_returns_none():
    cache = CrawlCache()
    assert cache.get("entry", "e1") is None
    assert cache.hits == 0


def test_cache_stores_and_counts_hits():
    cache = CrawlCache()
    result = FetchResult.found({"sys": {"id": "e1"}})
    cache.set("entry", "e1", result)
    assert cache.get("entry", "e1") is result
    assert cache.hits == 1
    assert cache.misses == 1


def test_cache_keeps_not_found_outcomes():
    cache = CrawlCache()
    cache.set("entry", "gone", FetchResult.missing())
    assert cache.get("entry", "gone").not_found


def test_kinds_are_cached_separately():
    cache = CrawlCache()
    cache.set("entry", "x", FetchResult.found({"kind": "entry"}))
    assert cache.get("content_type", "x") is None
    assert len(cache) == 1


def test_hit_rate_ten_lookups_four_hits():
    cache = CrawlCache()
    for i in range(6):
        cache.set("entry", f"e{i}", FetchResult.missing())
    for i in range(4):
        cache.get("entry", f"e{i}")
    assert cache.hit_rate() == 40.0


def test_hit_rate_rounds_to_one_decimal():
    cache = CrawlCache()
    cache.set("entry", "a", FetchResult.missing())
    cache.set("entry", "b", FetchResult.missing())
    cache.get("entry", "a")
    assert cache.hit_rate() == 33.3


def test_hit_rate_without_lookups_is_zero():
    assert CrawlCache().hit_rate() == 0.0
