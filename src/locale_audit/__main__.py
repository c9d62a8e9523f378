"""CLI entry-point for locale_audit.

Usage:
    python -m locale_audit [--root DIR] [--config FILE] [-v]
    python -m locale_audit status [--root DIR] [--config FILE] [--json]
    python -m locale_audit check [--root DIR] [--config FILE] [--json]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from locale_audit import __version__
from locale_audit.config import AuditConfig, load_config
from locale_audit.contracts import validate_instance
from locale_audit.core.engine import analyze
from locale_audit.errors import (
    ConfigError,
    DefaultLocaleError,
    LocalesDirNotFoundError,
)
from locale_audit.model import AnalysisReport
from locale_audit.session import ConsolePrompter, Prompter, render_status_table, run_session
from locale_audit.utils.exit_codes import ExitCode
from locale_audit.utils.json_norm import stable_json_dump

_KNOWN_COMMANDS = {"status", "check"}

REPORT_SCHEMA = "report.schema.json"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root containing the locales and source directories (default: .).",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: <root>/locale-audit.yaml when present).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )


def _add_json_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the report JSON to stdout.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="locale-audit",
        description="Reconcile i18n locale files with translation keys used in source code.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── status subcommand ────────────────────────────────────────────
    status_p = sub.add_parser(
        "status",
        help="Print the key status table (or report JSON) and exit.",
    )
    _add_common_args(status_p)
    _add_json_arg(status_p)

    # ── check subcommand ─────────────────────────────────────────────
    check_p = sub.add_parser(
        "check",
        help="Exit 1 when any key is missing from a locale or unused in code.",
    )
    _add_common_args(check_p)
    _add_json_arg(check_p)

    return p


def _build_default_parser() -> argparse.ArgumentParser:
    """Parser for the interactive (no subcommand) mode.

    Kept separate so ``locale-audit --root DIR`` works without argparse
    mistaking option values for a subcommand name.
    """
    p = argparse.ArgumentParser(
        prog="locale-audit",
        description="Reconcile i18n locale files with translation keys used in source code.",
    )
    _add_common_args(p)
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.set_defaults(command=None)
    return p


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load(args: argparse.Namespace, err: Console) -> AuditConfig | None:
    root: Path = args.root.resolve()
    if not root.is_dir():
        err.print(f"error: project root is not a directory: {escape(str(root))}")
        return None
    try:
        return load_config(root, args.config)
    except ConfigError as exc:
        err.print(f"error: {escape(str(exc))}")
        return None


def _report_fatal(exc: Exception, err: Console) -> int:
    """Print a fatal analysis error with the paths involved."""
    if isinstance(exc, LocalesDirNotFoundError):
        err.print("[red]Locales directory not found![/red]")
        err.print("Searched in:")
        for candidate in exc.candidates:
            err.print(f"  - {escape(str(candidate))}")
    elif isinstance(exc, DefaultLocaleError):
        err.print(
            f"[red]Default locale file {escape(str(exc.path))} unusable: "
            f"{escape(exc.reason)}[/red]"
        )
    else:
        err.print(f"[red]error: {escape(str(exc))}[/red]")
    return ExitCode.ERROR


def _emit_json(report: AnalysisReport) -> None:
    result_dict = report.to_dict()
    validate_instance(result_dict, REPORT_SCHEMA)
    stable_json_dump(result_dict, sys.stdout)


def _handle_report(args: argparse.Namespace, out: Console, err: Console) -> int:
    """Dispatch ``locale-audit status`` and ``locale-audit check``."""
    config = _load(args, err)
    if config is None:
        return ExitCode.ERROR
    try:
        report = analyze(config)
    except (LocalesDirNotFoundError, DefaultLocaleError) as exc:
        return _report_fatal(exc, err)

    if args.json_out:
        _emit_json(report)
    else:
        render_status_table(report, out)

    if args.command == "status":
        return ExitCode.SUCCESS

    summary = report.summary()
    if not report.has_drift:
        if not args.json_out:
            out.print("[green]All used keys are translated and no unused keys remain.[/green]")
        return ExitCode.SUCCESS

    if not args.json_out:
        unused = ", ".join(f"{loc}={n}" for loc, n in summary["unused"].items())
        out.print(
            f"[red]{summary['missing']} missing key(s); unused: {unused}[/red]"
        )
    return ExitCode.VIOLATION


def main(
    argv: list[str] | None = None,
    *,
    prompter: Prompter | None = None,
    console: Console | None = None,
) -> int:
    """Entry-point; returns an exit code (0 = ok, 1 = drift, 2 = error)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    first_positional = next(
        (a for a in effective_argv if not a.startswith("-")), None
    )
    if first_positional in _KNOWN_COMMANDS:
        args = _build_parser().parse_args(effective_argv)
    else:
        args = _build_default_parser().parse_args(effective_argv)

    _configure_logging(getattr(args, "verbose", False))
    out = console or Console()
    err = console or Console(stderr=True)

    if args.command in _KNOWN_COMMANDS:
        return _handle_report(args, out, err)

    # ── default interactive mode ─────────────────────────────────────
    config = _load(args, err)
    if config is None:
        return ExitCode.ERROR

    out.print("[bold]i18n Locale Analyzer[/bold]")
    out.print("[bold]" + "=" * 35 + "[/bold]")
    try:
        rc = run_session(config, prompter or ConsolePrompter(out), out)
    except (LocalesDirNotFoundError, DefaultLocaleError) as exc:
        return _report_fatal(exc, err)
    except (EOFError, KeyboardInterrupt):
        out.print()
        return ExitCode.SUCCESS
    out.print("[green]Analysis complete![/green]")
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
