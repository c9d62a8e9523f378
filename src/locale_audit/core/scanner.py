"""Source scanner — collect translation keys referenced from source code.

Matching is purely lexical: any ``t("...")`` call counts, including an
unrelated function that happens to be named ``t``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from locale_audit.core.discover import iter_source_files

_logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = ":"

# ── Extraction patterns ───────────────────────────────────────────────

# Each entry: (regex, human-readable label).  Group 1 is the key literal.
# Delimiters may be ', " or `; ``t`` must not continue an identifier.
_RAW_PATTERNS: list[tuple[str, str]] = [
    # t("key")
    (r"""(?<![A-Za-z0-9_])t\s*\(\s*['"`]([^'"`]+)['"`]\s*\)""", "call"),
    # t("key", { ... })
    (r"""(?<![A-Za-z0-9_])t\s*\(\s*['"`]([^'"`]+)['"`]\s*,""", "call-with-options"),
    # i18n.t("key")
    (r"""i18n\.t\s*\(\s*['"`]([^'"`]+)['"`]\s*\)""", "i18n-object"),
    # t("namespace:key")
    (r"""(?<![A-Za-z0-9_])t\s*\(\s*['"`]([^'"`]+:[^'"`]+)['"`]\s*\)""", "namespaced"),
]

PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(p), label) for p, label in _RAW_PATTERNS
]


@dataclass
class ScanResult:
    """Outcome of a source scan."""

    used_keys: set[str] = field(default_factory=set)
    files_scanned: int = 0
    files_skipped: list[Path] = field(default_factory=list)


def normalize_key(raw: str) -> str:
    """Drop a ``namespace:`` prefix: ``"common:hello"`` → ``"hello"``.

    Only the segment after the first separator is kept, so
    ``"a:b:c"`` → ``"b"``.
    """
    if NAMESPACE_SEPARATOR in raw:
        return raw.split(NAMESPACE_SEPARATOR)[1]
    return raw


def extract_keys(text: str) -> set[str]:
    """Return the normalized keys referenced in *text*."""
    keys: set[str] = set()
    for compiled, _label in PATTERNS:
        for m in compiled.finditer(text):
            keys.add(normalize_key(m.group(1)))
    return keys


def scan_sources(
    source_dirs: Iterable[Path],
    *,
    extensions: Iterable[str],
    ignore_dirs: Iterable[str],
) -> ScanResult:
    """Walk every directory in *source_dirs* and collect the used keys.

    A file that cannot be read is logged, recorded in
    ``ScanResult.files_skipped`` and otherwise ignored.
    """
    result = ScanResult()
    exts = tuple(extensions)
    skip = frozenset(ignore_dirs)

    for root in source_dirs:
        for path in iter_source_files(root, extensions=exts, ignore_dirs=skip):
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                _logger.warning("Cannot read source file %s: %s", path, exc)
                result.files_skipped.append(path)
                continue
            result.files_scanned += 1
            result.used_keys |= extract_keys(text)

    _logger.debug(
        "Scanned %d file(s), %d used key(s)",
        result.files_scanned,
        len(result.used_keys),
    )
    return result
