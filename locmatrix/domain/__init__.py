"""Domain objects for LocMatrix - explicit re-exports to satisfy linters."""
from .cells import Cell as Cell, CellKind as CellKind
from .rows import Row as Row, RowKind as RowKind
from .entity import EntryDecorator as EntryDecorator, AssetDecorator as AssetDecorator, EntityStatus as EntityStatus
from .filters import Filters as Filters, FilterLocaleMode as FilterLocaleMode
from .matrix import MatrixTableModel as MatrixTableModel
from .app_config import AppConfig as AppConfig

__all__ = [
    "Cell",
    "CellKind",
    "Row",
    "RowKind",
    "EntryDecorator",
    "AssetDecorator",
    "EntityStatus",
    "Filters",
    "FilterLocaleMode",
    "MatrixTableModel",
    "AppConfig",
]
