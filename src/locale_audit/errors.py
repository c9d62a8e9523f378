"""Error hierarchy for locale_audit.

Every error carries the path (or locale) it concerns so user-facing
diagnostics can name it.  The CLI maps the fatal subset to
``ExitCode.ERROR``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class LocaleAuditError(Exception):
    """Base class for all locale_audit errors."""


class ConfigError(LocaleAuditError):
    """Invalid configuration file or value."""


class LocalesDirNotFoundError(LocaleAuditError):
    """None of the candidate locale directories exist."""

    def __init__(self, candidates: Sequence[Path]) -> None:
        self.candidates = tuple(candidates)
        super().__init__(
            "Locales directory not found (searched "
            f"{len(self.candidates)} candidate path(s))"
        )


class LocaleStoreError(LocaleAuditError):
    """A locale file could not be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class LocaleParseError(LocaleStoreError):
    """A locale file exists but is not a JSON object."""


class DefaultLocaleError(LocaleAuditError):
    """The default locale (comparison baseline) is absent or unparsable."""

    def __init__(self, locale: str, path: Path, reason: str) -> None:
        self.locale = locale
        self.path = path
        self.reason = reason
        super().__init__(f"Default locale {locale!r} unusable ({path}): {reason}")
