import logging
from typing import Optional

from locmatrix.domain.app_config import AppConfig
from locmatrix.domain.filters import FilterLocaleMode
from locmatrix.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

LOCALES_FORMAT_HINT = (
    "Please confirm the format is correct: en-US, pt-BR"
)


def split_comma_separated(value, parameter: str) -> list[str]:
    """Split `a, b,,c` (or a YAML list) into `["a", "b", "c"]`."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, str):
        items = value.split(",")
    else:
        raise InvalidConfigError(
            parameter,
            f"Unable to parse {parameter} into a comma separated list. {LOCALES_FORMAT_HINT}",
        )
    return [str(s).strip() for s in items if str(s).strip() != ""]


class AppConfigParser:
    """Parse the app parameters dict into an AppConfig.

    Responsibility: schema/validation for the parameters.
    It does NOT perform filesystem IO.
    """

    def _parse_modes(self, data: dict) -> list[FilterLocaleMode]:
        modes = []
        for key, value in data.items():
            if not str(key).startswith("locales_mode"):
                continue
            raw = str(value or "")
            if ":" not in raw:
                raise InvalidConfigError(
                    key,
                    f'Unable to parse parameter {key}: "{raw}". It must be in the following format: '
                    '"<Mode display name>: en-US, fr-FR"',
                )
            name, locales = raw.split(":", 1)
            modes.append(FilterLocaleMode(id=key, name=name.strip(), locales=split_comma_separated(locales, key)))
        return modes

    def parse(self, data: Optional[dict]) -> AppConfig:
        data = data or {}

        default_locale = data.get("locales_default")
        if not default_locale:
            raise InvalidConfigError("locales_default", "Default locale was not set in parameter locales_default")

        locales_order = None
        if data.get("locales_all_order"):
            locales_order = split_comma_separated(data["locales_all_order"], "locales_all_order")

        config = AppConfig(
            default_locale=str(default_locale).strip(),
            analytics_host=data.get("analytics_host") or None,
            hide_fully_localized=bool(data.get("filter_fully_localized", False)),
            hide_fully_non_localized=bool(data.get("filter_fully_non_localized", False)),
            locales_order=locales_order,
            locales_clear_all=bool(data.get("locales_clear_all", False)),
            locales_modes=self._parse_modes(data),
            excluded_content_types=split_comma_separated(data.get("break_on_content_type"), "break_on_content_type"),
        )
        logger.debug("Parsed app config: %s", config)
        return config


def load_app_config(*, file_store, parser: AppConfigParser, config_path: str) -> AppConfig:
    """Read the parameters file through `file_store` and parse it."""
    return parser.parse(file_store.load_yaml_dict(config_path))
