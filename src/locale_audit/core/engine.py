"""Compare locale key sets with source usage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

from locale_audit.config import AuditConfig
from locale_audit.core.keys import flatten
from locale_audit.core.scanner import scan_sources
from locale_audit.core.store import discover_locales_dir, load_locale, locale_path
from locale_audit.errors import (
    DefaultLocaleError,
    LocalesDirNotFoundError,
    LocaleStoreError,
)
from locale_audit.model import AnalysisReport, KeyStatus

_logger = logging.getLogger(__name__)


def build_report(
    *,
    locales_dir: Path,
    default_locale: str,
    other_locales: Sequence[str],
    locale_keys: Mapping[str, set[str] | frozenset[str]],
    used_keys: set[str] | frozenset[str],
) -> AnalysisReport:
    """Assemble an :class:`AnalysisReport` from already-extracted key sets.

    *locale_keys* holds only the locales that were loaded; the default
    locale must be among them.  Configured secondary locales missing from
    it are reported as unavailable.
    """
    if default_locale not in locale_keys:
        raise ValueError(f"build_report: no keys for default locale {default_locale!r}")

    frozen = {loc: frozenset(keys) for loc, keys in locale_keys.items()}
    used = frozenset(used_keys)
    available = tuple(loc for loc in other_locales if loc in frozen)

    universe: set[str] = set(used)
    for keys in frozen.values():
        universe |= keys

    all_locales = (default_locale, *other_locales)
    statuses = tuple(
        KeyStatus(
            key=key,
            in_code=key in used,
            presence={loc: key in frozen.get(loc, ()) for loc in all_locales},
            default_locale=default_locale,
        )
        # Plain str ordering: case-sensitive, by code point.
        for key in sorted(universe)
    )

    return AnalysisReport(
        locales_dir=locales_dir,
        default_locale=default_locale,
        other_locales=tuple(other_locales),
        available_locales=available,
        locale_keys=frozen,
        used_keys=used,
        statuses=statuses,
    )


def analyze(config: AuditConfig) -> AnalysisReport:
    """Run one full reconciliation pass for *config*.

    Raises
    ------
    LocalesDirNotFoundError
        No candidate locales directory exists.
    DefaultLocaleError
        The default locale file is absent or unparsable.
    """
    candidates = config.candidate_paths()
    locales_dir = discover_locales_dir(candidates)
    if locales_dir is None:
        raise LocalesDirNotFoundError(candidates)
    _logger.info("Found locales directory: %s", locales_dir)

    default_path = locale_path(config.default_locale, locales_dir)
    try:
        default_tree = load_locale(config.default_locale, locales_dir)
    except LocaleStoreError as exc:
        raise DefaultLocaleError(config.default_locale, exc.path, exc.reason) from exc
    if default_tree is None:
        raise DefaultLocaleError(config.default_locale, default_path, "file not found")

    locale_keys: dict[str, set[str]] = {config.default_locale: flatten(default_tree)}
    for locale in config.other_locales:
        try:
            tree = load_locale(locale, locales_dir)
        except LocaleStoreError as exc:
            _logger.warning("Skipping locale %r: %s", locale, exc)
            continue
        if tree is None:
            _logger.info(
                "Locale file %s not found; %r excluded",
                locale_path(locale, locales_dir),
                locale,
            )
            continue
        locale_keys[locale] = flatten(tree)

    scan = scan_sources(
        config.source_paths(),
        extensions=config.extensions,
        ignore_dirs=config.ignore_dirs,
    )

    return build_report(
        locales_dir=locales_dir,
        default_locale=config.default_locale,
        other_locales=config.other_locales,
        locale_keys=locale_keys,
        used_keys=scan.used_keys,
    )
