import pytest

from locmatrix.domain.app_config import AppConfig
from locmatrix.domain.filters import FilterLocaleMode
from locmatrix.exceptions import InvalidFilterError
from locmatrix.services.locale_selection import ALL_MODE, LocaleSelection, sort_locales

AVAILABLE = ["en-US", "de-DE", "fr-FR", "pt-BR"]


def _config(**overrides):
    params = dict(
        default_locale="en-US",
        hide_fully_localized=True,
        hide_fully_non_localized=True,
        locales_order=["fr-FR", "en-US"],
        locales_modes=[
            FilterLocaleMode("locales_mode_europe", "Europe", ["de-DE", "fr-FR"]),
            FilterLocaleMode("locales_mode_americas", "Americas", ["pt-BR"]),
        ],
    )
    params.update(overrides)
    return AppConfig(**params)


def test_sort_locales_puts_ordered_first():
    assert sort_locales(["de-DE", "en-US", "fr-FR"], ["fr-FR", "xx-XX", "en-US"]) == ["fr-FR", "en-US", "de-DE"]
    assert sort_locales(["b", "a"], None) == ["b", "a"]


def test_default_locales_come_from_first_mode_plus_default():
    selection = LocaleSelection(_config())
    assert selection.default_locales() == ["de-DE", "fr-FR", "en-US"]


def test_default_locales_without_modes_is_default_locale():
    selection = LocaleSelection(_config(locales_modes=[]))
    assert selection.default_locales() == ["en-US"]


def test_resolve_without_request_uses_defaults_sorted():
    filters = LocaleSelection(_config()).resolve(AVAILABLE)
    assert filters.locales == ["fr-FR", "en-US", "de-DE"]
    assert not filters.hide_localized
    assert not filters.hide_fully_non_localized


def test_resolve_explicit_locales_always_include_default():
    filters = LocaleSelection(_config(locales_order=None)).resolve(AVAILABLE, locales=["pt-BR"])
    assert filters.locales == ["pt-BR", "en-US"]


def test_resolve_mode():
    filters = LocaleSelection(_config(locales_order=None)).resolve(AVAILABLE, mode="locales_mode_americas")
    assert filters.locales == ["pt-BR", "en-US"]


def test_resolve_all_mode_uses_every_available_locale():
    filters = LocaleSelection(_config()).resolve(AVAILABLE, mode=ALL_MODE)
    assert filters.locales == ["fr-FR", "en-US", "de-DE", "pt-BR"]


def test_all_mode_requires_order_parameter():
    with pytest.raises(InvalidFilterError):
        LocaleSelection(_config(locales_order=None)).resolve(AVAILABLE, mode=ALL_MODE)


def test_unknown_mode_is_rejected():
    with pytest.raises(InvalidFilterError):
        LocaleSelection(_config()).resolve(AVAILABLE, mode="locales_mode_asia")


def test_locales_and_mode_together_are_rejected():
    with pytest.raises(InvalidFilterError):
        LocaleSelection(_config()).resolve(AVAILABLE, locales=["de-DE"], mode="locales_mode_europe")


def test_unknown_locale_is_rejected():
    with pytest.raises(InvalidFilterError):
        LocaleSelection(_config()).resolve(AVAILABLE, locales=["xx-XX"])


def test_hide_switches_require_config_permission():
    selection = LocaleSelection(_config(hide_fully_localized=False))
    filters = selection.resolve(AVAILABLE, hide_localized=True, hide_fully_non_localized=True)
    assert filters.hide_localized is False
    assert filters.hide_fully_non_localized is True
