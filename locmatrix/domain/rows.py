from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from locmatrix.domain.cells import Cell
from locmatrix.domain.entity import AssetDecorator, EntryDecorator
from locmatrix.domain.filters import Filters

Entity = Union[EntryDecorator, AssetDecorator]


class RowKind(str, Enum):
    LOCALIZABLE = "localizable"
    NON_LOCALIZABLE = "non_localizable"


@dataclass(eq=False)
class Row:
    """One matrix row: a field of an entity, or a linked entity itself.

    Rows are compared by identity. Link rows carry the decorated entity they
    point to; a circular link row is a back-edge and never has children.
    """

    field_name: str
    kind: RowKind
    cells: list[Cell] = field(default_factory=list)
    children: list[Row] = field(default_factory=list)
    entity: Optional[Entity] = None
    circular: bool = False

    @classmethod
    def localizable(cls, field_name: str, cells: list[Cell], children: Optional[list[Row]] = None) -> Row:
        return cls(field_name, RowKind.LOCALIZABLE, list(cells), list(children or []))

    @classmethod
    def non_localizable(cls, field_name: str, children: Optional[list[Row]] = None) -> Row:
        return cls(field_name, RowKind.NON_LOCALIZABLE, [], list(children or []))

    @classmethod
    def localizable_link(cls, field_name: str, entity: Entity, cells: list[Cell], children: Optional[list[Row]] = None, circular: bool = False) -> Row:
        return cls(field_name, RowKind.LOCALIZABLE, list(cells), list(children or []), entity, circular)

    @classmethod
    def non_localizable_link(cls, field_name: str, entity: Entity, children: Optional[list[Row]] = None, circular: bool = False) -> Row:
        return cls(field_name, RowKind.NON_LOCALIZABLE, [], list(children or []), entity, circular)

    @property
    def is_link(self) -> bool:
        return self.entity is not None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def fully_localized(self) -> bool:
        # an internal row ignores its own cells
        if self.children:
            return all(c.fully_localized() for c in self.children)
        if self.kind is RowKind.LOCALIZABLE:
            return all(not c.is_empty for c in self.cells)
        return True

    def fully_non_localized(self) -> bool:
        if self.children:
            return all(c.fully_non_localized() for c in self.children)
        if self.kind is RowKind.LOCALIZABLE:
            return all(c.is_empty for c in self.cells)
        return True

    def visible(self, filters: Filters) -> bool:
        # non-localizable rows are shown only through their children
        if self.kind is RowKind.NON_LOCALIZABLE or self.children:
            return any(c.visible(filters) for c in self.children)
        if filters.hide_localized and self.fully_localized():
            return False
        if filters.hide_fully_non_localized and self.fully_non_localized():
            return False
        return True

    def to_dict(self, filters: Optional[Filters] = None) -> dict:
        d = {
            "field_name": self.field_name,
            "kind": self.kind.value,
            "cells": [c.to_dict() for c in self.cells],
            "children": [c.to_dict(filters) for c in self.children],
        }
        if self.entity is not None:
            d["entity"] = self.entity.to_dict()
            d["circular"] = self.circular
        if filters is not None:
            d["visible"] = self.visible(filters)
        return d

    def __repr__(self):
        return f"<Row {self.kind.value} field={self.field_name!r} children={len(self.children)}>"


def count_rows(rows: list[Row]) -> int:
    """Total number of rows in a forest, descendants included."""
    return len(rows) + sum(count_rows(r.children) for r in rows)
