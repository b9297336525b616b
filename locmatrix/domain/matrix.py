from typing import Optional

from locmatrix.domain.filters import Filters
from locmatrix.domain.rows import Row, count_rows


class MatrixTableModel:
    """Pairs the locale columns with the crawled row tree."""

    def __init__(self, locales: list[str], rows: list[Row]):
        self.locales = list(locales)
        self.rows = rows

    @property
    def row_count(self) -> int:
        return count_rows(self.rows)

    def to_dict(self, filters: Optional[Filters] = None) -> dict:
        return {
            "locales": self.locales,
            "rows": [r.to_dict(filters) for r in self.rows],
            "row_count": self.row_count,
        }

    def __repr__(self):
        return f"<MatrixTableModel locales={self.locales} rows={len(self.rows)}>"
