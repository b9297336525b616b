from typing import NamedTuple, Optional


class FetchResult(NamedTuple):
    """Outcome of one record store read: either a record or "not found"."""
    record: Optional[dict]
    not_found: bool = False

    @classmethod
    def found(cls, record: dict) -> "FetchResult":
        return cls(record=record, not_found=False)

    @classmethod
    def missing(cls) -> "FetchResult":
        return cls(record=None, not_found=True)
