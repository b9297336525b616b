from __future__ import annotations

import logging
from typing import Protocol

from locmatrix.domain.fetch_result import FetchResult
from locmatrix.exceptions import HttpFetchError, RecordFetchError

logger = logging.getLogger(__name__)


class RecordStoreClient(Protocol):
    """Read-only access to entries, assets and content types.

    Each getter returns `FetchResult.missing()` when the record does not exist
    and raises `RecordFetchError` for every other failure.
    """

    def get_entry(self, entry_id: str) -> FetchResult: ...

    def get_asset(self, asset_id: str) -> FetchResult: ...

    def get_content_type(self, content_type_id: str) -> FetchResult: ...

    def list_locales(self) -> list[str]: ...


class ContentManagementClient:
    """RecordStoreClient backed by the Contentful Content Management REST API."""

    def __init__(self, http_service, base_url: str, space_id: str, environment_id: str = "master"):
        if not space_id:
            raise ValueError("space_id is required")
        self.http_service = http_service
        self.base_url = base_url.rstrip("/")
        self.space_id = space_id
        self.environment_id = environment_id

    def _url(self, path: str) -> str:
        return f"{self.base_url}/spaces/{self.space_id}/environments/{self.environment_id}/{path}"

    def _get(self, kind: str, collection: str, record_id: str) -> FetchResult:
        url = self._url(f"{collection}/{record_id}")
        try:
            response = self.http_service.fetch(url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s '%s': %s", kind, record_id, e)
            raise RecordFetchError(kind, record_id, str(e.original)) from e

        if response.status_code == 404:
            return FetchResult.missing()
        if response.status_code < 200 or response.status_code >= 300:
            raise RecordFetchError(kind, record_id, f"HTTP {response.status_code}")
        try:
            record = response.json()
        except ValueError as e:
            raise RecordFetchError(kind, record_id, "response is not valid JSON") from e
        return FetchResult.found(record)

    def get_entry(self, entry_id: str) -> FetchResult:
        return self._get("entry", "entries", entry_id)

    def get_asset(self, asset_id: str) -> FetchResult:
        return self._get("asset", "assets", asset_id)

    def get_content_type(self, content_type_id: str) -> FetchResult:
        return self._get("content_type", "content_types", content_type_id)

    def list_locales(self) -> list[str]:
        """Return the locale codes available in the environment."""
        url = self._url("locales")
        try:
            response = self.http_service.fetch(url)
        except HttpFetchError as e:
            raise RecordFetchError("locale", "*", str(e.original)) from e
        if response.status_code < 200 or response.status_code >= 300:
            raise RecordFetchError("locale", "*", f"HTTP {response.status_code}")
        try:
            body = response.json()
        except ValueError as e:
            raise RecordFetchError("locale", "*", "response is not valid JSON") from e
        if not isinstance(body, dict):
            raise RecordFetchError("locale", "*", "response is not a locale collection")
        items = body.get("items") or []
        return [item["code"] for item in items if isinstance(item, dict) and item.get("code")]
