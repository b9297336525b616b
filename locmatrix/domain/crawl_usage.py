"""Crawl usage data model."""
from typing import NamedTuple


class CrawlUsage(NamedTuple):
    """Summary of what one crawl fetched.

    Reported to analytics once the top-level crawl completes.
    """
    entries_loaded: int
    """Entries fetched from the record store (cache misses only)"""

    assets_loaded: int
    """Assets fetched from the record store"""

    content_types_loaded: int
    """Content type definitions fetched from the record store"""

    cache_hits: int
    """References served from the per-crawl cache"""

    total_queries: int
    """Real record store calls"""

    cache_hit_rate: float
    """Percentage with one decimal digit, e.g. 40.0"""
