"""Shared utilities for locale_audit."""

from locale_audit.utils.exit_codes import ExitCode
from locale_audit.utils.json_norm import (
    locale_json_dumps,
    stable_json_dump,
    stable_json_dumps,
)

__all__ = [
    "ExitCode",
    "locale_json_dumps",
    "stable_json_dump",
    "stable_json_dumps",
]
