"""Decorated views over raw entry/asset records."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from locmatrix.exceptions import MalformedRecordError

UNDEFINED_NAME = "<undefined value>"


class EntityStatus(str, Enum):
    DRAFT = "draft"
    CHANGED = "changed"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    DELETED = "deleted"


def entity_status(sys: dict) -> EntityStatus:
    """Derive the lifecycle status from a record's `sys` block."""
    if sys.get("archivedVersion"):
        return EntityStatus.ARCHIVED
    published = sys.get("publishedVersion")
    if not published:
        return EntityStatus.DRAFT
    version = sys.get("version") or 0
    if version > published + 1:
        return EntityStatus.CHANGED
    if version == published + 1:
        return EntityStatus.PUBLISHED
    return EntityStatus.DELETED


def _require_sys(record: Any) -> dict:
    sys = record.get("sys") if isinstance(record, dict) else None
    if not isinstance(sys, dict):
        raise MalformedRecordError(None, "sys")
    if not sys.get("id"):
        raise MalformedRecordError(None, "sys.id")
    return sys


def content_type_id_of(entry: dict) -> str:
    sys = _require_sys(entry)
    ct_id = ((sys.get("contentType") or {}).get("sys") or {}).get("id")
    if not ct_id:
        raise MalformedRecordError(sys["id"], "sys.contentType.sys.id")
    return ct_id


@dataclass(frozen=True)
class EntryDecorator:
    id: str
    type: str
    status: EntityStatus
    name: str
    content_type_id: str
    content_type: dict = field(repr=False, compare=False)
    entry: dict = field(repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status.value,
            "name": self.name,
            "content_type_id": self.content_type_id,
        }


@dataclass(frozen=True)
class AssetDecorator:
    id: str
    type: str
    status: EntityStatus
    name: str = "Asset"
    content_type_id: str = "asset"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status.value,
            "name": self.name,
            "content_type_id": self.content_type_id,
        }


def _display_name(entry: dict, content_type: dict, default_locale: str) -> str:
    display_field: Optional[str] = content_type.get("displayField")
    if not display_field:
        return UNDEFINED_NAME
    value = (entry.get("fields") or {}).get(display_field)
    if isinstance(value, dict) and value.get(default_locale):
        return str(value[default_locale])
    return UNDEFINED_NAME


def decorate_entry(entry: dict, content_type: dict, default_locale: str = "en-US") -> EntryDecorator:
    sys = _require_sys(entry)
    return EntryDecorator(
        id=sys["id"],
        type=sys.get("type", "Entry"),
        status=entity_status(sys),
        name=_display_name(entry, content_type, default_locale),
        content_type_id=content_type_id_of(entry),
        content_type=content_type,
        entry=entry,
    )


def decorate_asset(asset: dict) -> AssetDecorator:
    sys = _require_sys(asset)
    return AssetDecorator(id=sys["id"], type=sys.get("type", "Asset"), status=entity_status(sys))
