import logging
import threading
from typing import Callable, Optional
from urllib.parse import urlencode

import requests

from locmatrix.domain.filters import Filters

logger = logging.getLogger(__name__)


class Analytics:
    """Collects usage metrics for one matrix build and sends them in a single GET.

    Sending is fire-and-forget: failures are logged and never reach the caller.
    """

    def __init__(self, target_url: str, http_client: Callable = requests.get, timeout: int = 10):
        self.target_url = target_url
        self.http_client = http_client
        self.timeout = timeout

        self.content_type = ""
        self.user_id = ""
        self.error_message = ""
        self.entries_loaded = 0
        self.assets_loaded = 0
        self.types_loaded = 0
        self.rows_count = 0
        self.cache_hit_rate = ""
        self.loading_time_seconds = 0.0
        self.locales: list[str] = []
        self.hide_non_localized: Optional[bool] = None
        self.hide_localized: Optional[bool] = None

    def payload(self) -> dict:
        return {
            "content_type": self.content_type,
            "user_id": self.user_id,
            "error_message": self.error_message,
            "entries_loaded": self.entries_loaded,
            "assets_loaded": self.assets_loaded,
            "types_loaded": self.types_loaded,
            "rows_count": self.rows_count,
            "cache_hit_rate": self.cache_hit_rate,
            "loading_time_seconds": self.loading_time_seconds,
            "locales": ",".join(self.locales),
            "hide_non_localized": self.hide_non_localized,
            "hide_localized": self.hide_localized,
        }

    def log_content_type(self, content_type: str) -> "Analytics":
        self.content_type = content_type
        return self

    def log_entity(self, kind: str) -> "Analytics":
        if kind == "entry":
            self.entries_loaded += 1
        elif kind == "asset":
            self.assets_loaded += 1
        else:
            self.types_loaded += 1
        return self

    def log_rows(self, count: int) -> "Analytics":
        self.rows_count = count
        return self

    def log_user(self, user_id: str) -> "Analytics":
        self.user_id = user_id
        return self

    def log_cache_hit_rate(self, hit_rate: float) -> "Analytics":
        self.cache_hit_rate = f"{hit_rate}%"
        return self

    def log_loading_time(self, ms: float) -> "Analytics":
        self.loading_time_seconds = ms / 1000
        return self

    def log_error(self, ex: Exception) -> "Analytics":
        self.error_message = str(ex)
        return self

    def log_filters(self, filters: Filters) -> "Analytics":
        self.hide_non_localized = filters.hide_fully_non_localized
        self.hide_localized = filters.hide_localized
        self.locales = list(filters.locales)
        return self

    def _url(self) -> str:
        separator = "&" if "?" in self.target_url else "?"
        params = {k: ("" if v is None else v) for k, v in self.payload().items()}
        return f"{self.target_url}{separator}{urlencode(params)}"

    def _deliver(self) -> None:
        url = self._url()
        try:
            resp = self.http_client(
                url,
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Failed to send analytics to %s: %s", self.target_url, e)
            return
        if resp.status_code != 200:
            logger.warning("Failed to send analytics to %s: HTTP %s", self.target_url, resp.status_code)

    def send(self, background: bool = True) -> None:
        logger.info("Sending analytics to %s", self.target_url)
        if background:
            threading.Thread(target=self._deliver, daemon=True).start()
        else:
            self._deliver()


class VoidAnalytics(Analytics):
    def __init__(self):
        super().__init__("")

    def send(self, background: bool = True) -> None:
        logger.info("Skipping sending the analytics: host url is not configured")


def make_analytics(host: Optional[str], http_client: Callable = requests.get, timeout: int = 10) -> Analytics:
    if not host:
        return VoidAnalytics()
    return Analytics(host, http_client=http_client, timeout=timeout)
