"""Tests for the canonical JSON normalization layer."""

import json
from dataclasses import dataclass
from pathlib import Path

from locale_audit.utils.json_norm import (
    locale_json_dumps,
    stable_json_dump,
    stable_json_dumps,
)


def test_stable_json_dumps_sorts_keys_and_adds_newline():
    s = stable_json_dumps({"b": 1, "a": 2})
    assert s.endswith("\n")
    # Keys should be sorted in the serialized output
    assert s.index('"a"') < s.index('"b"')


def test_stable_json_dumps_normalizes_paths():
    s = stable_json_dumps({"p": Path("a") / "b"})
    obj = json.loads(s)
    assert obj["p"] == "a/b"


def test_stable_json_dumps_sorts_sets():
    obj = json.loads(stable_json_dumps({"keys": frozenset({"b", "c", "a"})}))
    assert obj["keys"] == ["a", "b", "c"]


def test_stable_json_dumps_expands_dataclasses():
    @dataclass
    class Point:
        y: int
        x: int

    assert json.loads(stable_json_dumps(Point(y=2, x=1))) == {"x": 1, "y": 2}


def test_stable_json_dump_writes_to_file_like(tmp_path):
    out = tmp_path / "x.json"
    with out.open("w", encoding="utf-8") as f:
        stable_json_dump({"b": 1, "a": 2}, f)
    txt = out.read_text(encoding="utf-8")
    assert txt.endswith("\n")
    assert '"a"' in txt and '"b"' in txt


def test_locale_json_dumps_keeps_author_order():
    s = locale_json_dumps({"zeta": "z", "alpha": {"b": "1", "a": "2"}})
    assert s.index('"zeta"') < s.index('"alpha"')
    assert s.index('"b"') < s.index('"a"')
    assert s.endswith("}\n")


def test_locale_json_dumps_keeps_non_ascii():
    assert '"¿Qué?"' in locale_json_dumps({"q": "¿Qué?"})
