import json
import logging
import time
from typing import Callable, Iterable, Optional, Union

from locmatrix.domain.cells import ENTRY_LEVEL_MARKER, Cell, CellKind
from locmatrix.domain.crawl_cache import CrawlCache
from locmatrix.domain.crawl_usage import CrawlUsage
from locmatrix.domain.entity import (
    AssetDecorator,
    EntryDecorator,
    content_type_id_of,
    decorate_asset,
    decorate_entry,
)
from locmatrix.domain.fetch_result import FetchResult
from locmatrix.domain.rows import Row
from locmatrix.domain.visited_path import VisitedPath
from locmatrix.exceptions import MalformedRecordError

logger = logging.getLogger(__name__)

ENTRY = "entry"
ASSET = "asset"
CONTENT_TYPE = "content_type"

ASSET_LINK = "Asset"
ENTRY_LINK = "Entry"

Entity = Union[EntryDecorator, AssetDecorator]


def cell_text(value) -> Optional[str]:
    """Render a raw field value as cell text.

    Link-shaped values contribute their target id, lists the joined texts of
    their items. Booleans and numbers are rendered as text, so a stored
    `False` or `0` is a value and its cell counts as localized; only an
    absent value, an empty string or an empty list leaves the cell empty.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        sys = value.get("sys")
        if isinstance(sys, dict) and sys.get("id"):
            return sys["id"]
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    if isinstance(value, list):
        texts = [t for t in (cell_text(v) for v in value) if t]
        return ", ".join(texts) or None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_link_field(field: dict) -> bool:
    if field.get("type") == "Link":
        return True
    return field.get("type") == "Array" and bool((field.get("items") or {}).get("linkType"))


def _check_fields(record_id: str, record) -> None:
    if not isinstance(record, dict) or not isinstance(record.get("fields") or {}, dict):
        raise MalformedRecordError(record_id, "fields mapping")


def _check_content_type(ct_id: str, content_type) -> None:
    if not isinstance(content_type, dict):
        raise MalformedRecordError(ct_id, "content type definition")
    fields = content_type.get("fields") or []
    if not isinstance(fields, list) or not all(isinstance(f, dict) and f.get("id") for f in fields):
        raise MalformedRecordError(ct_id, "field definitions with ids")


class EntityTreeBuilder:
    """Crawls an entry and everything it links to and builds the matrix row tree.

    One instance owns the per-crawl cache and counters; it can run several
    crawls one after another, each starting from an empty cache, but never two
    at the same time.
    """

    def __init__(
        self,
        locales: list[str],
        record_store,
        analytics=None,
        excluded_content_types: Iterable[str] = (),
        default_locale: str = "en-US",
        request_delay: float = 0.0,
    ):
        self.locales = list(locales)
        self.record_store = record_store
        self.analytics = analytics
        self.excluded_content_types = frozenset(excluded_content_types or ())
        self.default_locale = default_locale
        self.request_delay = float(request_delay or 0.0)

        self._cache = CrawlCache()
        self._loaded = {ENTRY: 0, ASSET: 0, CONTENT_TYPE: 0}
        self._usage = self._snapshot()
        self._running = False

    @property
    def usage(self) -> CrawlUsage:
        """Usage summary of the last completed crawl."""
        return self._usage

    def _snapshot(self) -> CrawlUsage:
        return CrawlUsage(
            entries_loaded=self._loaded[ENTRY],
            assets_loaded=self._loaded[ASSET],
            content_types_loaded=self._loaded[CONTENT_TYPE],
            cache_hits=self._cache.hits,
            total_queries=self._cache.misses,
            cache_hit_rate=self._cache.hit_rate(),
        )

    def _notify(self, call: Callable) -> None:
        """Forward a metric to analytics; its failures never affect the crawl."""
        if self.analytics is None:
            return
        try:
            call(self.analytics)
        except Exception as e:
            logger.warning("Analytics call failed: %s", e)

    def build_tree(self, root_id: str) -> list[Row]:
        """Crawl `root_id` and return its top-level rows.

        A root that cannot be found yields an empty list. Any other fetch
        failure propagates and no partial tree is returned.
        """
        if self._running:
            raise RuntimeError("a crawl is already running on this builder")
        self._running = True
        self._cache = CrawlCache()
        self._loaded = {ENTRY: 0, ASSET: 0, CONTENT_TYPE: 0}
        try:
            result = self._entity_rows(root_id, ENTRY_LINK, None, VisitedPath())
        finally:
            self._usage = self._snapshot()
            self._cache = CrawlCache()
            self._running = False

        self._notify(lambda a: a.log_cache_hit_rate(self._usage.cache_hit_rate))
        logger.info(
            "Crawled %s: %s queries, cache hit rate %s%%",
            root_id,
            self._usage.total_queries,
            self._usage.cache_hit_rate,
        )
        return result[0] if result else []

    def _fetch(self, kind: str, record_id: str) -> FetchResult:
        cached = self._cache.get(kind, record_id)
        if cached is not None:
            return cached

        self._loaded[kind] += 1
        self._notify(lambda a: a.log_entity(kind))
        if kind == ENTRY:
            result = self.record_store.get_entry(record_id)
        elif kind == ASSET:
            result = self.record_store.get_asset(record_id)
        else:
            result = self.record_store.get_content_type(record_id)
        self._cache.set(kind, record_id, result)
        logger.info(
            "Loaded %s '%s'... total queries: %s. Cache hit rate: %s%%",
            kind,
            record_id,
            self._cache.misses,
            self._cache.hit_rate(),
        )
        if self.request_delay:
            time.sleep(self.request_delay)
        return result

    def _load_entry(self, entry_id: str) -> Optional[EntryDecorator]:
        result = self._fetch(ENTRY, entry_id)
        if result.not_found:
            logger.debug("Entry %s was not found. Probably it was removed.", entry_id)
            return None
        ct_id = content_type_id_of(result.record)
        content_type = self._fetch(CONTENT_TYPE, ct_id)
        if content_type.not_found:
            raise MalformedRecordError(entry_id, f"content type '{ct_id}'")
        _check_fields(entry_id, result.record)
        _check_content_type(ct_id, content_type.record)
        return decorate_entry(result.record, content_type.record, self.default_locale)

    def _load_asset(self, asset_id: str) -> Optional[dict]:
        result = self._fetch(ASSET, asset_id)
        if result.not_found:
            logger.debug("Asset %s was not found. Probably it was removed.", asset_id)
            return None
        _check_fields(asset_id, result.record)
        return result.record

    def _load_entity(self, entity_id: str, link_type: str) -> Optional[Entity]:
        if link_type == ASSET_LINK:
            asset = self._load_asset(entity_id)
            return decorate_asset(asset) if asset is not None else None
        return self._load_entry(entity_id)

    def _entity_rows(
        self,
        entity_id: str,
        link_type: str,
        parent_type: Optional[str],
        path: VisitedPath,
    ) -> Optional[tuple[list[Row], Entity]]:
        if path.contains(entity_id):
            logger.debug("Entity %s is recursively nested into current tree branch. Skipping it.", entity_id)
            return None
        path = path.extend(entity_id)

        if link_type == ASSET_LINK:
            return self._asset_rows(entity_id)

        decorator = self._load_entry(entity_id)
        if decorator is None:
            return None

        if parent_type is not None and parent_type in self.excluded_content_types:
            logger.debug("Not expanding %s: parent content type %s is excluded", entity_id, parent_type)
            return [], decorator

        rows: list[Row] = []
        for field in decorator.content_type.get("fields") or []:
            if field.get("disabled"):
                continue
            if is_link_field(field):
                row = self._link_field_row(decorator, field, path)
            else:
                row = self._field_row(decorator.entry, field)
            if row is not None:
                rows.append(row)
        return rows, decorator

    def _field_values(self, entry: dict, field: dict) -> dict:
        values = (entry.get("fields") or {}).get(field["id"])
        return values if isinstance(values, dict) else {}

    def _field_row(self, entry: dict, field: dict, clickable: bool = True) -> Row:
        name = field.get("name") or field["id"]
        if not field.get("localized"):
            return Row.non_localizable(name)

        values = self._field_values(entry, field)
        cells = [
            Cell(locale, cell_text(values.get(locale)), CellKind.FIELD_TEXT, field["id"] if clickable else None)
            for locale in self.locales
        ]
        return Row.localizable(name, cells)

    def _links(self, entry: dict, field: dict, locale: str) -> list:
        value = self._field_values(entry, field).get(locale)
        if not value:
            return []
        return list(value) if field.get("type") == "Array" else [value]

    def _link_target(self, host_id: str, field: dict, link) -> tuple[str, str]:
        sys = link.get("sys") if isinstance(link, dict) else None
        if not isinstance(sys, dict) or not sys.get("id"):
            raise MalformedRecordError(host_id, f"link target id in field '{field['id']}'")
        link_type = sys.get("linkType") or field.get("linkType") or (field.get("items") or {}).get("linkType")
        return sys["id"], link_type or ENTRY_LINK

    def _link_field_row(self, host: EntryDecorator, field: dict, path: VisitedPath) -> Optional[Row]:
        row = self._field_row(host.entry, field, clickable=False)

        if field.get("localized"):
            # one child per distinct target, remembering which locales link it
            targets: dict[str, tuple[str, list[str]]] = {}
            for locale in self.locales:
                for link in self._links(host.entry, field, locale):
                    target_id, link_type = self._link_target(host.id, field, link)
                    targets.setdefault(target_id, (link_type, []))[1].append(locale)
            for target_id, (link_type, locales) in targets.items():
                child = self._linked_entity_row(field, target_id, link_type, locales, host.content_type_id, path)
                if child is not None:
                    row.children.append(child)
        else:
            for link in self._links(host.entry, field, self.default_locale):
                target_id, link_type = self._link_target(host.id, field, link)
                child = self._linked_entity_row(field, target_id, link_type, None, host.content_type_id, path)
                if child is not None:
                    row.children.append(child)

        return row if row.children else None

    def _linked_entity_row(
        self,
        field: dict,
        target_id: str,
        link_type: str,
        target_locales: Optional[list[str]],
        parent_type: str,
        path: VisitedPath,
    ) -> Optional[Row]:
        localized = bool(field.get("localized")) and target_locales is not None
        cells: list[Cell] = []
        if localized:
            cells = [
                Cell(
                    locale,
                    ENTRY_LEVEL_MARKER if locale in target_locales else None,
                    CellKind.ENTRY_LEVEL,
                    field["id"],
                )
                for locale in self.locales
            ]

        if path.contains(target_id):
            logger.debug("Entity %s is recursively nested into current tree branch. Skipping it.", target_id)
            entity = self._load_entity(target_id, link_type)
            if entity is None:
                return None
            return self._link_row(entity, cells, localized, [], circular=True)

        result = self._entity_rows(target_id, link_type, parent_type, path)
        if result is None:
            return None
        children, entity = result
        return self._link_row(entity, cells, localized, children)

    def _link_row(self, entity: Entity, cells: list[Cell], localized: bool, children: list[Row], circular: bool = False) -> Row:
        if localized:
            return Row.localizable_link(entity.name, entity, cells, children, circular)
        return Row.non_localizable_link(entity.name, entity, children, circular)

    def _asset_rows(self, asset_id: str) -> Optional[tuple[list[Row], AssetDecorator]]:
        asset = self._load_asset(asset_id)
        if asset is None:
            return None

        fields = asset.get("fields") or {}
        titles = fields.get("title") or {}
        descriptions = fields.get("description") or {}
        files = fields.get("file") or {}

        title_cells: list[Cell] = []
        description_cells: list[Cell] = []
        file_cells: list[Cell] = []
        for locale in self.locales:
            title_cells.append(Cell(locale, cell_text(titles.get(locale)), CellKind.FIELD_TEXT, "title"))
            description_cells.append(Cell(locale, cell_text(descriptions.get(locale)), CellKind.FIELD_TEXT, "description"))
            file = files.get(locale)
            url = file.get("url") if isinstance(file, dict) else None
            file_cells.append(Cell(locale, url or None, CellKind.FIELD_IMAGE, "file"))

        rows = [
            Row.localizable("title", title_cells),
            Row.localizable("description", description_cells),
            Row.localizable("file", file_cells),
        ]
        return rows, decorate_asset(asset)
