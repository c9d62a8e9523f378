"""Data model shared by the engine, the session and the CLI."""

from __future__ import annotations

from locale_audit.model.key_status import KeyStatus
from locale_audit.model.report import REPORT_SCHEMA_VERSION, AnalysisReport

__all__ = ["AnalysisReport", "KeyStatus", "REPORT_SCHEMA_VERSION"]
