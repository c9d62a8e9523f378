"""Audit configuration.

An :class:`AuditConfig` is built once at startup by :func:`load_config` and
passed explicitly into every component entry point.

Precedence (lowest → highest):
  1. built-in defaults
  2. YAML config file (``--config FILE``, else ``locale-audit.yaml`` in
     the project root when present)
  3. environment variables ``LOCALE_AUDIT_*``
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from locale_audit.errors import ConfigError

_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "locale-audit.yaml"

# Probed in order, relative to the project root.
_DEFAULT_LOCALES_CANDIDATES: tuple[str, ...] = (
    "src/locales",
    "src/i18n/locales",
    "src/assets/locales",
    "public/locales",
    "locales",
)

_DEFAULT_IGNORE_DIRS = frozenset(
    {
        "node_modules",
        "dist",
        "build",
        ".git",
        ".next",
    }
)

# Environment variable → (config field, is comma-separated list)
_ENV_OVERRIDES: dict[str, tuple[str, bool]] = {
    "LOCALE_AUDIT_DEFAULT_LOCALE": ("default_locale", False),
    "LOCALE_AUDIT_OTHER_LOCALES": ("other_locales", True),
    "LOCALE_AUDIT_SOURCE_DIRS": ("source_dirs", True),
}


@dataclass(frozen=True)
class AuditConfig:
    """Immutable audit configuration."""

    project_root: Path = field(default_factory=lambda: Path("."))
    locales_candidates: tuple[str, ...] = _DEFAULT_LOCALES_CANDIDATES
    source_dirs: tuple[str, ...] = ("src",)
    extensions: tuple[str, ...] = (".tsx", ".ts", ".jsx", ".js")
    ignore_dirs: frozenset[str] = _DEFAULT_IGNORE_DIRS
    default_locale: str = "en"
    other_locales: tuple[str, ...] = ("es",)

    @property
    def locales(self) -> tuple[str, ...]:
        """Default locale first, then the secondary locales."""
        return (self.default_locale, *self.other_locales)

    def candidate_paths(self) -> list[Path]:
        return [self.project_root / c for c in self.locales_candidates]

    def source_paths(self) -> list[Path]:
        return [self.project_root / d for d in self.source_dirs]


def _as_str_tuple(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(v, str) and v for v in value
    ):
        raise ConfigError(f"{name}: expected a list of non-empty strings, got {value!r}")
    return tuple(value)


def _coerce(name: str, value: Any) -> Any:
    """Validate a raw config value and convert it to the field's type."""
    if name == "default_locale":
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{name}: expected a non-empty string, got {value!r}")
        return value
    if name == "ignore_dirs":
        return frozenset(_as_str_tuple(name, value))
    if name == "extensions":
        exts = _as_str_tuple(name, value)
        return tuple(e if e.startswith(".") else f".{e}" for e in exts)
    if name == "other_locales":
        # An empty list is allowed: audit the default locale alone.
        if value in ([], ()):
            return ()
        return _as_str_tuple(name, value)
    return _as_str_tuple(name, value)


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"{path}: cannot read config file ({exc})") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def load_config(
    root: Path,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AuditConfig:
    """Build the :class:`AuditConfig` for the project at *root*."""
    env = os.environ if environ is None else environ
    known = {f.name for f in dataclasses.fields(AuditConfig)} - {"project_root"}
    overrides: dict[str, Any] = {}

    if config_path is None and (root / DEFAULT_CONFIG_FILENAME).is_file():
        config_path = root / DEFAULT_CONFIG_FILENAME

    if config_path is not None:
        raw = _read_config_file(config_path)
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(
                f"{config_path}: unknown option(s): {', '.join(unknown)}"
            )
        for name, value in raw.items():
            overrides[name] = _coerce(name, value)
        _logger.debug("Loaded config file %s", config_path)

    for var, (name, is_list) in _ENV_OVERRIDES.items():
        env_value = env.get(var)
        if env_value is None:
            continue
        if is_list:
            value: Any = [v.strip() for v in env_value.split(",") if v.strip()]
        else:
            value = env_value.strip()
        overrides[name] = _coerce(name, value)
        _logger.debug("Config override from %s", var)

    cfg = AuditConfig(project_root=root, **overrides)
    if cfg.default_locale in cfg.other_locales:
        raise ConfigError(
            f"default locale {cfg.default_locale!r} is also listed in other_locales"
        )
    return cfg
