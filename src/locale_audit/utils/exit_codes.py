"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — graceful exit, or ``check`` found no drift
  1   Violation — ``check`` found missing or unused keys
  2   Error — locales directory not found, default locale absent or
      unparsable, invalid configuration or root
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
