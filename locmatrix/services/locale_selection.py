import logging
from typing import Optional

from locmatrix.domain.app_config import AppConfig
from locmatrix.domain.filters import Filters
from locmatrix.exceptions import InvalidFilterError

logger = logging.getLogger(__name__)

ALL_MODE = "all"


def sort_locales(locales: list[str], order: Optional[list[str]]) -> list[str]:
    """Put locales named in `order` first, keeping the rest in their given order."""
    if not order:
        return list(locales)
    unknown = [x for x in order if x not in locales]
    if unknown:
        logger.debug("Locales in locales_all_order not among the given locales are skipped: %s", unknown)
    ordered = [x for x in order if x in locales]
    return ordered + [x for x in locales if x not in order]


def _with_default(locales: list[str], default_locale: str) -> list[str]:
    if default_locale in locales:
        return list(locales)
    return list(locales) + [default_locale]


class LocaleSelection:
    """Turns the app parameters plus a request into the Filters for one matrix."""

    def __init__(self, app_config: AppConfig):
        self.app_config = app_config

    def default_locales(self) -> list[str]:
        """First configured mode's locales, always including the default locale."""
        modes = self.app_config.locales_modes
        first = modes[0].locales if modes else []
        return _with_default(first, self.app_config.default_locale)

    def locales_for_mode(self, mode_id: str, available: list[str]) -> list[str]:
        if mode_id == ALL_MODE:
            if not self.app_config.locales_all_option:
                raise InvalidFilterError("The 'all' locale mode is not enabled")
            return sort_locales(available, self.app_config.locales_order)
        mode = self.app_config.get_mode(mode_id)
        if mode is None:
            raise InvalidFilterError(f"Unknown locale mode '{mode_id}'")
        return _with_default(mode.locales, self.app_config.default_locale)

    def resolve(
        self,
        available: list[str],
        locales: Optional[list[str]] = None,
        mode: Optional[str] = None,
        hide_localized: bool = False,
        hide_fully_non_localized: bool = False,
    ) -> Filters:
        if locales and mode:
            raise InvalidFilterError("Pass either explicit locales or a locale mode, not both")

        if locales:
            selected = _with_default(locales, self.app_config.default_locale)
        elif mode:
            selected = self.locales_for_mode(mode, available)
        else:
            selected = self.default_locales()

        if available:
            unknown = [x for x in selected if x not in available]
            if unknown:
                raise InvalidFilterError(f"Unknown locales: {', '.join(unknown)}")

        return Filters(
            locales=sort_locales(selected, self.app_config.locales_order),
            hide_localized=bool(hide_localized) and self.app_config.hide_fully_localized,
            hide_fully_non_localized=bool(hide_fully_non_localized) and self.app_config.hide_fully_non_localized,
        )
