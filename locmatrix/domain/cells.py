from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CellKind(str, Enum):
    FIELD_TEXT = "field_text"
    FIELD_IMAGE = "field_image"
    # marks that a linked entry belongs to a field's locale
    ENTRY_LEVEL = "entry_level"


ENTRY_LEVEL_MARKER = "+"


@dataclass(frozen=True)
class Cell:
    """One (field, locale) observation of the matrix.

    `field` is only set for clickable cells; the crawler carries it through for
    the presentation layer and never interprets it.
    """

    locale: str
    value: Optional[str]
    kind: CellKind = CellKind.FIELD_TEXT
    field: Optional[str] = None

    @property
    def clickable(self) -> bool:
        return self.field is not None

    @property
    def is_empty(self) -> bool:
        return self.value is None or self.value == ""

    def to_dict(self) -> dict:
        d = {"locale": self.locale, "value": self.value, "kind": self.kind.value}
        if self.field is not None:
            d["field"] = self.field
        return d
