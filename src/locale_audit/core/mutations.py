"""Add missing keys to, and delete unused keys from, locale files.

Both operations work against the locale files on disk, not against the
report: each edit re-loads the file it touches right before writing it.
Locale files an operation does not target are never opened for writing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from locale_audit.core.keys import Node, remove_at_path, set_at_path, split_key
from locale_audit.core.store import load_locale, locale_path, save_locale
from locale_audit.errors import LocaleStoreError
from locale_audit.model import AnalysisReport

_logger = logging.getLogger(__name__)

# Returns the translation for a key, or None/"" to use the placeholder.
ValueProvider = Callable[[str], Optional[str]]

# Receives the confirmation message, returns True to proceed.
Confirm = Callable[[str], bool]


def placeholder_for(key: str) -> str:
    """Visible stand-in for an untranslated key: ``"[key]"``."""
    return f"[{key}]"


@dataclass
class AddResult:
    """Outcome of :func:`add_missing_keys`."""

    # (key, locale) pairs in write order
    added: list[tuple[str, str]] = field(default_factory=list)
    values: dict[str, str] = field(default_factory=dict)
    # (key, locale, reason) for writes that failed; the pass carried on
    failed: list[tuple[str, str, str]] = field(default_factory=list)

    @property
    def keys_added(self) -> int:
        return len({key for key, _locale in self.added})


@dataclass
class DeleteResult:
    """Outcome of :func:`delete_unused_keys`."""

    locale: str
    candidates: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    aborted: bool = False

    @property
    def removed_count(self) -> int:
        return len(self.removed)


def add_missing_keys(report: AnalysisReport, value_for: ValueProvider) -> AddResult:
    """Add every key used in code but missing from a loaded locale.

    For each missing key, *value_for* supplies the translation; an empty
    answer falls back to :func:`placeholder_for`.  Every locale lacking the
    key gets its own read-modify-write.  A locale that cannot be read or
    written is logged and recorded in ``failed``; the pass continues with
    the remaining locales and keys.
    """
    result = AddResult()

    for status in report.missing():
        targets = report.missing_locales(status)
        value = value_for(status.key) or placeholder_for(status.key)
        result.values[status.key] = value
        segments = split_key(status.key)

        for locale in targets:
            try:
                tree = load_locale(locale, report.locales_dir)
                if tree is None:
                    tree = Node()
                set_at_path(tree, segments, value)
                save_locale(locale, report.locales_dir, tree)
            except LocaleStoreError as exc:
                _logger.warning("Could not add %r to %s: %s", status.key, exc.path, exc.reason)
                result.failed.append((status.key, locale, str(exc)))
                continue
            result.added.append((status.key, locale))
            _logger.info("Added %r to %s", status.key, locale)

    return result


def delete_unused_keys(
    report: AnalysisReport,
    locale: str,
    confirm: Confirm,
) -> DeleteResult:
    """Delete keys present in *locale* that no source file uses.

    *confirm* is asked twice, first to proceed with the listed keys and
    then for a final irreversible-action warning.  A negative answer to
    either leaves the file untouched and sets ``aborted``.
    """
    candidates = [s.key for s in report.unused_in(locale)]
    result = DeleteResult(locale=locale, candidates=candidates)
    if not candidates:
        return result

    if not confirm(
        f"Do you want to delete these {len(candidates)} key(s) from {locale}.json?"
    ):
        result.aborted = True
        return result
    if not confirm("Are you sure? This action cannot be undone!"):
        result.aborted = True
        return result

    tree = load_locale(locale, report.locales_dir)
    if tree is None:
        raise LocaleStoreError(
            locale_path(locale, report.locales_dir), "locale file disappeared"
        )

    for key in candidates:
        if remove_at_path(tree, split_key(key)):
            result.removed.append(key)
        else:
            _logger.debug("Key %r already absent from %s", key, locale)

    save_locale(locale, report.locales_dir, tree)
    _logger.info("Removed %d key(s) from %s", result.removed_count, locale)
    return result
