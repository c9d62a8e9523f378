"""Canonical JSON serialization — one dump path per artifact kind.

Report artifacts (``stable_json_dumps``):
  - Stable key ordering (``sort_keys=True``)
  - Trailing newline at EOF
  - ``Path`` objects → POSIX strings
  - Dataclasses → dicts (via ``dataclasses.asdict``)
  - Sets → sorted lists

Locale files (``locale_json_dumps``) keep the author's key order: sorting
would reshuffle every translation file on the first edit.
"""

from __future__ import annotations

import json
from dataclasses import is_dataclass, asdict
from pathlib import Path
from typing import Any, IO, Mapping


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None:
        return None
    if isinstance(obj, (str, int, bool, float)):
        return obj
    if isinstance(obj, Path):
        return obj.as_posix()
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_builtin(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (set, frozenset)):
        return sorted(_to_builtin(v) for v in obj)
    if isinstance(obj, (list, tuple)):
        return [_to_builtin(v) for v in obj]
    # Fall back to string (keeps CLI resilient)
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Canonical JSON serialization used for CLI report output."""
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )
    return s + "\n"


def stable_json_dump(obj: Any, fp: IO[str], *, indent: int | None = 2) -> None:
    fp.write(stable_json_dumps(obj, indent=indent))


def locale_json_dumps(data: Mapping[str, Any]) -> str:
    """Serialize a locale document: 2-space indent, insertion order, UTF-8 text."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
