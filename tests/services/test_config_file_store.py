import pytest

from locmatrix.exceptions import ConfigNotFoundError, InvalidConfigError
from locmatrix.services.config_file_store import ConfigFileStore


def test_load_yaml_dict_missing_file_raises(tmp_path):
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(ConfigNotFoundError) as exc:
        store.load_yaml_dict("missing.yml")
    assert exc.value.config_path == "missing.yml"


def test_load_yaml_dict_non_dict_raises(tmp_path):
    (tmp_path / "list.yml").write_text("- a\n- b\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(InvalidConfigError):
        store.load_yaml_dict("list.yml")


def test_load_yaml_dict_invalid_yaml_raises(tmp_path):
    (tmp_path / "bad.yml").write_text("locales_default: [unclosed\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(InvalidConfigError):
        store.load_yaml_dict("bad.yml")


def test_load_yaml_dict_empty_file_is_empty_dict(tmp_path):
    (tmp_path / "empty.yml").write_text("", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load_yaml_dict("empty.yml") == {}


def test_resolve_path_uses_configs_dir_for_relative(tmp_path):
    (tmp_path / "ok.yml").write_text("locales_default: en-US\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load_yaml_dict("ok.yml") == {"locales_default": "en-US"}


def test_resolve_path_allows_absolute(tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    cfg = other / "abs.yml"
    cfg.write_text("locales_default: de-DE\n", encoding="utf-8")

    store = ConfigFileStore(configs_dir=str(tmp_path / "elsewhere"))
    assert store.load_yaml_dict(str(cfg)) == {"locales_default": "de-DE"}


def test_read_raw_yaml(tmp_path):
    (tmp_path / "ok.yml").write_text("locales_default: en-US\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.read_raw_yaml("ok.yml") == "locales_default: en-US\n"
    assert store.read_raw_yaml("missing.yml") is None
