"""Reconcile i18n locale files with translation keys used in code."""

__all__ = [
    "__version__",
    "AuditConfig",
    "AnalysisReport",
    "KeyStatus",
    "analyze",
    "load_config",
    "lookup",
    "Translator",
]
__version__ = "0.1.0"

# Programmatic entrypoints.
from locale_audit.config import AuditConfig, load_config  # noqa: E402
from locale_audit.core.engine import analyze  # noqa: E402
from locale_audit.model import AnalysisReport, KeyStatus  # noqa: E402
from locale_audit.runtime import Translator, lookup  # noqa: E402
