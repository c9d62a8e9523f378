"""AnalysisReport — the read-only result of one reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from locale_audit.model.key_status import KeyStatus

REPORT_SCHEMA_VERSION = "locale_audit_report_v1"


@dataclass(frozen=True)
class AnalysisReport:
    """Key statuses plus the inputs they were computed from.

    Mutation operations never edit a report; they act on the locale files
    and the caller re-runs the analysis.
    """

    locales_dir: Path
    default_locale: str
    other_locales: tuple[str, ...]
    available_locales: tuple[str, ...]
    locale_keys: Mapping[str, frozenset[str]]
    used_keys: frozenset[str]
    statuses: tuple[KeyStatus, ...] = field(default_factory=tuple)

    @property
    def locales(self) -> tuple[str, ...]:
        """Every configured locale, default first."""
        return (self.default_locale, *self.other_locales)

    @property
    def loaded_locales(self) -> tuple[str, ...]:
        """Locales that were actually loaded, default first."""
        return (self.default_locale, *self.available_locales)

    # ── derived queries ─────────────────────────────────────────────

    def missing_locales(self, status: KeyStatus) -> list[str]:
        """Loaded locales that lack *status.key*."""
        return [loc for loc in self.loaded_locales if not status.in_locale(loc)]

    def missing(self) -> list[KeyStatus]:
        """Keys used in code but absent from at least one loaded locale."""
        return [s for s in self.statuses if s.in_code and self.missing_locales(s)]

    def unused_in(self, locale: str) -> list[KeyStatus]:
        """Keys defined in *locale* that no source file references."""
        return [s for s in self.statuses if s.in_locale(locale) and not s.in_code]

    def summary(self) -> dict[str, Any]:
        return {
            "total_keys": len(self.statuses),
            "used_keys": len(self.used_keys),
            "missing": len(self.missing()),
            "unused": {loc: len(self.unused_in(loc)) for loc in self.loaded_locales},
        }

    @property
    def has_drift(self) -> bool:
        summary = self.summary()
        return bool(summary["missing"] or any(summary["unused"].values()))

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": REPORT_SCHEMA_VERSION,
            "locales_dir": self.locales_dir.as_posix(),
            "default_locale": self.default_locale,
            "locales": list(self.locales),
            "available_locales": list(self.available_locales),
            "keys": [s.to_dict() for s in self.statuses],
            "summary": self.summary(),
        }
