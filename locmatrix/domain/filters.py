from dataclasses import dataclass, field


@dataclass(frozen=True)
class Filters:
    """Locales to show plus the row-hiding switches chosen for one matrix."""

    locales: list[str] = field(default_factory=list)
    hide_localized: bool = False
    hide_fully_non_localized: bool = False


@dataclass(frozen=True)
class FilterLocaleMode:
    """A named, preconfigured group of locales (the `locales_mode*` parameters)."""

    id: str
    name: str
    locales: list[str]
