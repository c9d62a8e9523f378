"""Shared fixtures: throwaway projects and a scripted prompter."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from typing import Any, Iterable

import pytest
from rich.console import Console

from locale_audit.config import AuditConfig
from locale_audit.session import PromptStep


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_src(root: Path, name: str, content: str) -> Path:
    """Write a source file with dedented content."""
    p = root / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


class ScriptedPrompter:
    """Answers prompts from a fixed script and records the questions."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []

    def ask(self, step: PromptStep) -> str:
        self.asked.append(step.message)
        if not self._answers:
            raise AssertionError(f"unexpected prompt: {step.message!r}")
        answer = self._answers.pop(0)
        if step.validator is not None:
            assert step.validator(answer) is None, f"invalid scripted answer {answer!r}"
        return answer

    @property
    def remaining(self) -> list[str]:
        return list(self._answers)


@pytest.fixture
def make_project(tmp_path: Path):
    """Build a minimal project: ``src/locales/{en,es}.json`` plus sources.

    Pass ``None`` for a locale to leave its file out.
    """

    def _make(
        en: Any = None,
        es: Any = None,
        sources: dict[str, str] | None = None,
        locales_dir: str = "src/locales",
    ) -> AuditConfig:
        loc = tmp_path / locales_dir
        loc.mkdir(parents=True, exist_ok=True)
        if en is not None:
            write_json(loc / "en.json", en)
        if es is not None:
            write_json(loc / "es.json", es)
        (tmp_path / "src").mkdir(exist_ok=True)
        for name, content in (sources or {}).items():
            write_src(tmp_path / "src", name, content)
        return AuditConfig(project_root=tmp_path)

    return _make


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=300)


def console_text(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]
