import math
from typing import Optional

from locmatrix.domain.fetch_result import FetchResult


class CrawlCache:
    """
    Per-crawl memo of fetched records keyed by (record kind, id).

    Lives for exactly one crawl: created empty when the crawl starts, filled on
    the first fetch of each record, read on every later reference and dropped
    when the crawl finishes. Not-found outcomes are stored too, so a missing
    link target is only asked for once.
    """

    def __init__(self):
        self._records: dict[tuple[str, str], FetchResult] = {}
        self.hits = 0
        self.misses = 0

    def get(self, kind: str, record_id: str) -> Optional[FetchResult]:
        """Return the cached outcome, counting a hit, or None on a miss."""
        result = self._records.get((kind, record_id))
        if result is None:
            return None
        self.hits += 1
        return result

    def set(self, kind: str, record_id: str, result: FetchResult) -> None:
        """Store the outcome of a real fetch."""
        self.misses += 1
        self._records[(kind, record_id)] = result

    def hit_rate(self) -> float:
        """Percentage of lookups served from the cache, one decimal digit."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return math.floor(self.hits / total * 1000 + 0.5) / 10

    def __len__(self) -> int:
        return len(self._records)
