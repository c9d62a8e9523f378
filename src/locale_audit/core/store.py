"""Locale store — discover, load and persist ``<locale>.json`` files."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

import jsonschema

from locale_audit.contracts import validate_instance
from locale_audit.core.keys import Node, tree_from_json, tree_to_json
from locale_audit.errors import LocaleParseError, LocaleStoreError
from locale_audit.utils.json_norm import locale_json_dumps

_logger = logging.getLogger(__name__)

LOCALE_SCHEMA = "locale_file.schema.json"


def discover_locales_dir(candidates: Sequence[Path]) -> Path | None:
    """Return the first candidate that is an existing directory, else ``None``."""
    for candidate in candidates:
        if candidate.is_dir():
            _logger.debug("Locales directory: %s", candidate)
            return candidate
        _logger.debug("Locales candidate missing: %s", candidate)
    return None


def locale_path(locale: str, directory: Path) -> Path:
    return directory / f"{locale}.json"


def load_locale(locale: str, directory: Path) -> Node | None:
    """Load ``<directory>/<locale>.json``.

    Returns ``None`` when the file does not exist.  Raises
    :class:`LocaleParseError` when it exists but is not a JSON object, and
    :class:`LocaleStoreError` on any other read failure.
    """
    path = locale_path(locale, directory)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise LocaleStoreError(path, f"cannot read locale file ({exc})") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LocaleParseError(path, f"invalid JSON ({exc})") from exc

    try:
        validate_instance(raw, LOCALE_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise LocaleParseError(
            path, f"not a key/value document ({exc.message})"
        ) from exc

    tree = tree_from_json(raw)
    if not isinstance(tree, Node):
        raise LocaleParseError(path, "top level is not a JSON object")
    return tree


def save_locale(locale: str, directory: Path, tree: Node) -> Path:
    """Write *tree* to ``<directory>/<locale>.json`` via write-then-rename."""
    path = locale_path(locale, directory)
    data = locale_json_dumps(tree_to_json(tree))

    try:
        orig_mode = path.stat().st_mode & 0o777
    except OSError:
        orig_mode = 0o644

    tmp_name: str | None = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            dir=directory,
            prefix=f".{locale}.",
            suffix=".tmp",
            encoding="utf-8",
        ) as tf:
            tmp_name = tf.name
            tf.write(data)
            tf.flush()
            os.fsync(tf.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, orig_mode)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise LocaleStoreError(path, f"cannot write locale file ({exc})") from exc

    _logger.debug("Wrote %s", path)
    return path
