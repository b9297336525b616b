from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import requests

from locmatrix.domain.filters import Filters
from locmatrix.services.analytics import Analytics, VoidAnalytics, make_analytics


def _sent_params(http_client):
    url = http_client.call_args.args[0]
    return parse_qs(urlparse(url).query, keep_blank_values=True)


def test_collects_metrics_into_payload():
    analytics = Analytics("https://metrics.example.com/collect")
    analytics.log_content_type("page").log_user("u1").log_rows(12)
    analytics.log_entity("entry").log_entity("entry").log_entity("asset").log_entity("content_type")
    analytics.log_cache_hit_rate(40.0)
    analytics.log_loading_time(1500)
    analytics.log_filters(Filters(locales=["en-US", "de-DE"], hide_localized=True, hide_fully_non_localized=False))

    payload = analytics.payload()

    assert payload["content_type"] == "page"
    assert payload["user_id"] == "u1"
    assert payload["rows_count"] == 12
    assert payload["entries_loaded"] == 2
    assert payload["assets_loaded"] == 1
    assert payload["types_loaded"] == 1
    assert payload["cache_hit_rate"] == "40.0%"
    assert payload["loading_time_seconds"] == 1.5
    assert payload["locales"] == "en-US,de-DE"
    assert payload["hide_localized"] is True
    assert payload["hide_non_localized"] is False


def test_log_error_records_message():
    analytics = Analytics("https://metrics.example.com")
    analytics.log_error(RuntimeError("crawl failed"))
    assert analytics.payload()["error_message"] == "crawl failed"


def test_send_issues_single_get_with_query_params():
    http_client = Mock()
    http_client.return_value.status_code = 200
    analytics = Analytics("https://metrics.example.com/collect", http_client=http_client, timeout=5)
    analytics.log_content_type("page").log_rows(3)

    analytics.send(background=False)

    http_client.assert_called_once()
    assert http_client.call_args.kwargs["timeout"] == 5
    params = _sent_params(http_client)
    assert params["content_type"] == ["page"]
    assert params["rows_count"] == ["3"]
    assert params["hide_localized"] == [""]


def test_send_keeps_existing_query_string():
    http_client = Mock()
    http_client.return_value.status_code = 200
    analytics = Analytics("https://metrics.example.com/collect?app=matrix", http_client=http_client)

    analytics.send(background=False)

    params = _sent_params(http_client)
    assert params["app"] == ["matrix"]
    assert "entries_loaded" in params


def test_send_failures_are_logged_not_raised(caplog):
    http_client = Mock(side_effect=requests.exceptions.ConnectionError("down"))
    analytics = Analytics("https://metrics.example.com", http_client=http_client)

    analytics.send(background=False)

    assert "Failed to send analytics" in caplog.text


def test_send_non_200_is_logged(caplog):
    http_client = Mock()
    http_client.return_value.status_code = 503
    analytics = Analytics("https://metrics.example.com", http_client=http_client)

    analytics.send(background=False)

    assert "HTTP 503" in caplog.text


def test_void_analytics_never_sends():
    analytics = VoidAnalytics()
    analytics.log_rows(5)
    analytics.send(background=False)
    assert analytics.payload()["rows_count"] == 5


def test_make_analytics_without_host_is_void():
    assert isinstance(make_analytics(None), VoidAnalytics)
    assert isinstance(make_analytics(""), VoidAnalytics)


def test_make_analytics_with_host():
    http_client = Mock()
    analytics = make_analytics("https://metrics.example.com", http_client=http_client, timeout=2)
    assert type(analytics) is Analytics
    assert analytics.http_client is http_client
    assert analytics.timeout == 2
