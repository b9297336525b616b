from unittest.mock import Mock

import pytest

from locmatrix.exceptions import InvalidConfigError
from locmatrix.services.app_config_parser import AppConfigParser, load_app_config, split_comma_separated


def test_parse_full_parameters():
    data = {
        "locales_default": "en-US",
        "locales_all_order": "en-US, de-DE,,fr-FR",
        "locales_clear_all": True,
        "locales_mode_europe": "Europe: de-DE, fr-FR",
        "locales_mode_americas": "Americas: pt-BR",
        "filter_fully_localized": True,
        "filter_fully_non_localized": False,
        "break_on_content_type": "navigationMenu, footer",
        "analytics_host": "https://metrics.example.com",
    }

    config = AppConfigParser().parse(data)

    assert config.default_locale == "en-US"
    assert config.locales_order == ["en-US", "de-DE", "fr-FR"]
    assert config.locales_all_option
    assert config.locales_clear_all
    assert [(m.id, m.name, m.locales) for m in config.locales_modes] == [
        ("locales_mode_europe", "Europe", ["de-DE", "fr-FR"]),
        ("locales_mode_americas", "Americas", ["pt-BR"]),
    ]
    assert config.hide_fully_localized is True
    assert config.hide_fully_non_localized is False
    assert config.excluded_content_types == ["navigationMenu", "footer"]
    assert config.analytics_host == "https://metrics.example.com"
    assert config.get_mode("locales_mode_americas").name == "Americas"
    assert config.get_mode("nope") is None


def test_parse_minimal_parameters_uses_defaults():
    config = AppConfigParser().parse({"locales_default": "de-DE"})

    assert config.default_locale == "de-DE"
    assert config.locales_order is None
    assert not config.locales_all_option
    assert config.locales_modes == []
    assert config.excluded_content_types == []
    assert config.analytics_host is None


def test_default_locale_is_required():
    with pytest.raises(InvalidConfigError) as exc:
        AppConfigParser().parse({})
    assert exc.value.parameter == "locales_default"


def test_mode_without_name_separator_is_rejected():
    with pytest.raises(InvalidConfigError) as exc:
        AppConfigParser().parse({"locales_default": "en-US", "locales_mode1": "de-DE, fr-FR"})
    assert exc.value.parameter == "locales_mode1"


def test_split_comma_separated_accepts_yaml_lists():
    assert split_comma_separated(["a", " b ", ""], "x") == ["a", "b"]
    assert split_comma_separated(None, "x") == []


def test_split_comma_separated_rejects_other_types():
    with pytest.raises(InvalidConfigError):
        split_comma_separated(42, "break_on_content_type")


def test_load_app_config_reads_through_file_store():
    file_store = Mock()
    file_store.load_yaml_dict.return_value = {"locales_default": "en-US"}

    config = load_app_config(file_store=file_store, parser=AppConfigParser(), config_path="configs/matrix.yml")

    file_store.load_yaml_dict.assert_called_once_with("configs/matrix.yml")
    assert config.default_locale == "en-US"
