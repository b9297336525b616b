from typing import Callable, Optional

import requests

from locmatrix.domain.http_response import HttpResponse
from locmatrix.exceptions import HttpFetchError

CMA_MEDIA_TYPE = "application/vnd.contentful.management.v1+json"


class HttpService:
    """GET-only HTTP client for the record store.

    The `http_client` callable (normally `requests.get`) is injected so tests can
    hand in a Mock instead of patching.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10, auth_token: Optional[str] = None):
        self.user_agent = user_agent
        self.http_client = http_client
        self.timeout = timeout
        self.auth_token = auth_token

    def _headers(self) -> dict:
        headers = {"User-Agent": self.user_agent, "Accept": CMA_MEDIA_TYPE}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def fetch(self, url: str) -> HttpResponse:
        """GET `url`. Transport failures raise HttpFetchError; any status code is returned as is."""
        try:
            resp = self.http_client(url, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        headers = getattr(resp, "headers", None)
        media_type = headers.get("Content-Type") if headers is not None else None
        return HttpResponse(resp.status_code, resp.text, media_type)
