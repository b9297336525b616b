from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from locmatrix.domain.filters import FilterLocaleMode


@dataclass(frozen=True)
class AppConfig:
    """App parameters supplied by the host installation."""

    default_locale: str
    analytics_host: Optional[str] = None
    hide_fully_localized: bool = False
    hide_fully_non_localized: bool = False
    locales_order: Optional[list[str]] = None
    locales_clear_all: bool = False
    locales_modes: list[FilterLocaleMode] = field(default_factory=list)
    excluded_content_types: list[str] = field(default_factory=list)

    @property
    def locales_all_option(self) -> bool:
        return bool(self.locales_order)

    def get_mode(self, mode_id: str) -> Optional[FilterLocaleMode]:
        for mode in self.locales_modes:
            if mode.id == mode_id:
                return mode
        return None
