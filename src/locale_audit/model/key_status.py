"""KeyStatus — presence flags for one translation key."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class KeyStatus:
    """Where a flattened key appears: in code and in each configured locale.

    ``presence`` has one entry per configured locale, default locale first.
    Locales that could not be loaded map to ``False``.
    """

    key: str
    in_code: bool
    presence: Mapping[str, bool] = field(default_factory=dict)
    default_locale: str = "en"

    def __post_init__(self) -> None:
        object.__setattr__(self, "presence", MappingProxyType(dict(self.presence)))

    def in_locale(self, locale: str) -> bool:
        return self.presence.get(locale, False)

    @property
    def in_default_locale(self) -> bool:
        return self.in_locale(self.default_locale)

    @property
    def in_other_locale(self) -> bool:
        """Presence in the first secondary locale (``False`` if none)."""
        others = [loc for loc in self.presence if loc != self.default_locale]
        return self.in_locale(others[0]) if others else False

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "in_code": self.in_code,
            "presence": dict(self.presence),
        }
