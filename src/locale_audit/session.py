"""Interactive session: status table and menu-driven mutations.

Every question is a :class:`PromptStep`; a :class:`Prompter` answers it.
The console prompter blocks on stdin, tests plug in a scripted one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from locale_audit.config import AuditConfig
from locale_audit.core.engine import analyze
from locale_audit.core.mutations import add_missing_keys, delete_unused_keys
from locale_audit.errors import LocaleStoreError
from locale_audit.model import AnalysisReport
from locale_audit.utils.exit_codes import ExitCode

_logger = logging.getLogger(__name__)

_AFFIRMATIVE = frozenset({"y", "yes"})
_KEY_COLUMN_WIDTH = 32

# Returns an error message for invalid input, or None when accepted.
Validator = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class PromptStep:
    """One question put to the operator."""

    message: str
    validator: Validator | None = None


class Prompter(Protocol):
    def ask(self, step: PromptStep) -> str:
        """Return the (stripped) answer to *step*."""
        ...


class ConsolePrompter:
    """Reads answers from the terminal, re-asking until the validator passes."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def ask(self, step: PromptStep) -> str:
        while True:
            answer = self._console.input(escape(step.message)).strip()
            error = step.validator(answer) if step.validator else None
            if error is None:
                return answer
            self._console.print(f"[red]{escape(error)}[/red]")


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in _AFFIRMATIVE


def render_status_table(report: AnalysisReport, console: Console) -> None:
    """Print one row per key with a check or cross for code and each locale."""
    table = Table(title="Translation Keys Status", title_justify="left")
    table.add_column("Key", no_wrap=True)
    table.add_column("Code", justify="center")
    for locale in report.locales:
        table.add_column(locale.upper(), justify="center")

    def mark(flag: bool) -> Text:
        return Text("✓", style="green") if flag else Text("✗", style="red")

    for status in report.statuses:
        key = status.key
        if len(key) > _KEY_COLUMN_WIDTH:
            key = key[: _KEY_COLUMN_WIDTH - 3] + "..."
        table.add_row(
            Text(key),
            mark(status.in_code),
            *(mark(status.in_locale(loc)) for loc in report.locales),
        )

    console.print(table)
    console.print(f"Total keys: {len(report.statuses)}")


class InteractiveSession:
    """Menu loop over one project; re-analyzes after every mutation."""

    def __init__(
        self,
        config: AuditConfig,
        prompter: Prompter,
        console: Console,
    ) -> None:
        self._config = config
        self._prompter = prompter
        self._console = console
        self._report: AnalysisReport | None = None

    # ── prompt helpers ───────────────────────────────────────────────

    def _confirm(self, message: str) -> bool:
        answer = self._prompter.ask(PromptStep(f"{message} (y/n): "))
        return is_affirmative(answer)

    def _ask_text(self, message: str) -> str:
        return self._prompter.ask(PromptStep(message))

    # ── analysis ─────────────────────────────────────────────────────

    @property
    def report(self) -> AnalysisReport:
        if self._report is None:
            self._report = self.reanalyze()
        return self._report

    def reanalyze(self) -> AnalysisReport:
        """Run a fresh analysis; fatal errors propagate to the caller."""
        self._console.print("[cyan]Analyzing locales and source code...[/cyan]")
        self._report = analyze(self._config)
        self._console.print(
            f"[green]Found locales directory: {escape(str(self._report.locales_dir))}[/green]"
        )
        return self._report

    # ── actions ──────────────────────────────────────────────────────

    def show_table(self) -> None:
        render_status_table(self.report, self._console)

    def add_missing(self) -> None:
        report = self.report
        missing = report.missing()
        if not missing:
            self._console.print("[green]No missing keys found in locale files.[/green]")
            return

        self._console.print(
            f"[yellow]Found {len(missing)} key(s) in code that are missing "
            "from locale files:[/yellow]"
        )
        for status in missing:
            where = ", ".join(loc.upper() for loc in report.missing_locales(status))
            self._console.print(f"  - {escape(status.key)} (missing in: {where})")

        if not self._confirm("Do you want to add these keys to the locale files?"):
            self._console.print("[yellow]Operation cancelled.[/yellow]")
            return

        def value_for(key: str) -> str:
            return self._ask_text(
                f'Enter translation for "{key}" (or press enter for placeholder): '
            )

        result = add_missing_keys(report, value_for)
        self._console.print(
            f"[green]Added {result.keys_added} key(s) to locale files.[/green]"
        )
        for key, locale, reason in result.failed:
            self._console.print(
                f"[red]Could not add {escape(key)} to {locale.upper()}.json: {escape(reason)}[/red]"
            )
        self.reanalyze()

    def delete_unused(self, locale: str) -> None:
        report = self.report
        label = f"{locale.upper()}.json"
        unused = report.unused_in(locale)
        if not unused:
            self._console.print(f"[green]No unused keys found in {label}.[/green]")
            return

        self._console.print(
            f"[yellow]Found {len(unused)} unused key(s) in {label}:[/yellow]"
        )
        for status in unused:
            self._console.print(f"  - {escape(status.key)}")

        try:
            result = delete_unused_keys(report, locale, self._confirm)
        except LocaleStoreError as exc:
            self._console.print(f"[red]Could not update {escape(str(exc.path))}: {escape(exc.reason)}[/red]")
            return

        if result.aborted:
            self._console.print("[yellow]Operation cancelled.[/yellow]")
            return
        self._console.print(
            f"[green]Removed {result.removed_count} key(s) from {label}.[/green]"
        )
        self.reanalyze()

    # ── menu loop ────────────────────────────────────────────────────

    def _menu(self) -> list[tuple[str, Callable[[], None] | None]]:
        entries: list[tuple[str, Callable[[], None] | None]] = [
            ("Show keys table", self.show_table),
            ("Add missing keys to locale files", self.add_missing),
        ]
        for locale in self._config.locales:
            entries.append(
                (
                    f"Delete unused keys from {locale.upper()}.json",
                    lambda loc=locale: self.delete_unused(loc),
                )
            )
        entries.append(("Re-analyze project", None))
        entries.append(("Exit", None))
        return entries

    def run(self) -> int:
        """Drive the menu until the operator exits; return the exit code."""
        self.reanalyze()
        self.show_table()

        while True:
            entries = self._menu()
            reanalyze_choice = str(len(entries) - 1)
            exit_choice = str(len(entries))

            self._console.print("\n[bold]Main Menu[/bold]")
            self._console.print("=" * 30)
            for number, (label, _action) in enumerate(entries, start=1):
                self._console.print(f"{number}. {label}")
            self._console.print()

            choice = self._ask_text(f"Select an option (1-{len(entries)}): ")

            if choice == exit_choice:
                self._console.print("[green]Goodbye![/green]")
                return ExitCode.SUCCESS
            if choice == reanalyze_choice:
                self.reanalyze()
                self.show_table()
                continue

            action = None
            if choice.isdigit() and 1 <= int(choice) <= len(entries):
                action = entries[int(choice) - 1][1]
            if action is None:
                self._console.print("[red]Invalid option. Please try again.[/red]")
            else:
                action()

            if not self._confirm("Return to main menu?"):
                self._console.print("[green]Goodbye![/green]")
                return ExitCode.SUCCESS


def run_session(config: AuditConfig, prompter: Prompter, console: Console) -> int:
    return InteractiveSession(config, prompter, console).run()
