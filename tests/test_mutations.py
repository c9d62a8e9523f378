"""Tests for add-missing / delete-unused mutation operations."""

from __future__ import annotations

import logging

import pytest

from locale_audit.core.engine import analyze
from locale_audit.core.mutations import (
    add_missing_keys,
    delete_unused_keys,
    placeholder_for,
)
from locale_audit.errors import LocaleStoreError

from conftest import read_json, write_json


def _locales(config):
    return config.project_root / "src" / "locales"


class TestAddMissingKeys:
    def test_placeholder_scenario(self, make_project):
        config = make_project(
            en={"a": "1"},
            es={},
            sources={"app.ts": 't("a"); t("b")'},
        )
        result = add_missing_keys(analyze(config), lambda key: None)

        assert read_json(_locales(config) / "en.json") == {"a": "1", "b": "[b]"}
        assert read_json(_locales(config) / "es.json") == {"a": "[a]", "b": "[b]"}
        assert result.values == {"a": "[a]", "b": "[b]"}
        assert result.added == [("a", "es"), ("b", "en"), ("b", "es")]

    def test_secondary_gets_only_what_it_lacks(self, make_project):
        config = make_project(
            en={"a": "1"},
            es={"a": "uno"},
            sources={"app.ts": 't("a"); t("b")'},
        )
        add_missing_keys(analyze(config), lambda key: "")
        assert read_json(_locales(config) / "en.json") == {"a": "1", "b": "[b]"}
        assert read_json(_locales(config) / "es.json") == {"a": "uno", "b": "[b]"}

    def test_supplied_value_used_for_every_locale(self, make_project):
        config = make_project(en={}, es={}, sources={"app.ts": 't("menu.file.open")'})
        add_missing_keys(analyze(config), lambda key: "Open")
        expected = {"menu": {"file": {"open": "Open"}}}
        assert read_json(_locales(config) / "en.json") == expected
        assert read_json(_locales(config) / "es.json") == expected

    def test_nested_insert_preserves_siblings(self, make_project):
        config = make_project(
            en={"menu": {"close": "Close"}},
            es={"menu": {"close": "Cerrar"}},
            sources={"app.ts": 't("menu.close"); t("menu.open")'},
        )
        add_missing_keys(analyze(config), lambda key: None)
        assert read_json(_locales(config) / "es.json") == {
            "menu": {"close": "Cerrar", "open": "[menu.open]"}
        }

    def test_rereads_disk_before_each_write(self, make_project):
        config = make_project(en={"a": "1"}, es={"a": "1"}, sources={"app.ts": 't("b")'})
        report = analyze(config)
        # Someone edits the file after analysis; the edit must survive.
        write_json(_locales(config) / "en.json", {"a": "1", "late": "edit"})
        add_missing_keys(report, lambda key: None)
        assert read_json(_locales(config) / "en.json") == {"a": "1", "late": "edit", "b": "[b]"}

    def test_unavailable_locale_untouched(self, make_project):
        config = make_project(en={"a": "1"}, sources={"app.ts": 't("a"); t("b")'})
        add_missing_keys(analyze(config), lambda key: None)
        assert read_json(_locales(config) / "en.json") == {"a": "1", "b": "[b]"}
        assert not (_locales(config) / "es.json").exists()

    def test_nothing_missing_writes_nothing(self, make_project):
        config = make_project(en={"a": "1"}, es={"a": "1"}, sources={"app.ts": 't("a")'})
        before = {p.name: p.stat().st_mtime_ns for p in _locales(config).iterdir()}
        result = add_missing_keys(analyze(config), lambda key: pytest.fail("no prompt expected"))
        assert result.added == []
        assert {p.name: p.stat().st_mtime_ns for p in _locales(config).iterdir()} == before

    def test_placeholder_is_derived_from_key(self):
        assert placeholder_for("home.title") == "[home.title]"


class TestDeleteUnusedKeys:
    def test_confirmed_deletion(self, make_project):
        config = make_project(en={"a": "1", "b": "2"}, es={"a": "1"}, sources={"app.ts": 't("a")'})
        questions: list[str] = []

        def confirm(message: str) -> bool:
            questions.append(message)
            return True

        result = delete_unused_keys(analyze(config), "en", confirm)
        assert read_json(_locales(config) / "en.json") == {"a": "1"}
        assert result.removed == ["b"]
        assert not result.aborted
        assert len(questions) == 2

    @pytest.mark.parametrize("answers", [[False], [True, False]])
    def test_declined_confirmation_changes_nothing(self, make_project, answers):
        config = make_project(en={"a": "1", "b": "2"}, es={}, sources={"app.ts": 't("a")'})
        en = _locales(config) / "en.json"
        before = en.read_bytes()
        scripted = iter(answers)

        result = delete_unused_keys(analyze(config), "en", lambda msg: next(scripted))

        assert result.aborted
        assert result.removed == []
        assert en.read_bytes() == before

    def test_nested_deletion_prunes_empty_parents(self, make_project):
        config = make_project(
            en={"a": {"b": {"c": "x"}}, "keep": "k"},
            es={},
            sources={"app.ts": 't("keep")'},
        )
        delete_unused_keys(analyze(config), "en", lambda msg: True)
        assert read_json(_locales(config) / "en.json") == {"keep": "k"}

    def test_only_target_locale_written(self, make_project):
        config = make_project(en={"a": "1", "x": "2"}, es={"x": "dos"}, sources={"app.ts": 't("a")'})
        es = _locales(config) / "es.json"
        before = es.read_bytes()
        delete_unused_keys(analyze(config), "en", lambda msg: True)
        assert es.read_bytes() == before
        assert read_json(_locales(config) / "en.json") == {"a": "1"}

    def test_secondary_locale(self, make_project):
        config = make_project(en={"a": "1"}, es={"a": "1", "old": "viejo"}, sources={"app.ts": 't("a")'})
        result = delete_unused_keys(analyze(config), "es", lambda msg: True)
        assert result.removed == ["old"]
        assert read_json(_locales(config) / "es.json") == {"a": "1"}

    def test_already_absent_keys_are_skipped(self, make_project):
        config = make_project(en={"a": "1", "b": "2", "c": "3"}, es={}, sources={"app.ts": 't("a")'})
        report = analyze(config)
        write_json(_locales(config) / "en.json", {"a": "1", "c": "3"})
        result = delete_unused_keys(report, "en", lambda msg: True)
        assert result.candidates == ["b", "c"]
        assert result.removed == ["c"]
        assert read_json(_locales(config) / "en.json") == {"a": "1"}

    def test_nothing_unused_skips_confirmation(self, make_project):
        config = make_project(en={"a": "1"}, es={"a": "1"}, sources={"app.ts": 't("a")'})
        result = delete_unused_keys(
            analyze(config), "en", lambda msg: pytest.fail("no confirmation expected")
        )
        assert result.candidates == []
        assert not result.aborted

    def test_file_removed_after_analysis(self, make_project):
        config = make_project(en={"a": "1"}, es={"old": "x"}, sources={"app.ts": 't("a")'})
        report = analyze(config)
        (_locales(config) / "es.json").unlink()
        with pytest.raises(LocaleStoreError) as exc_info:
            delete_unused_keys(report, "es", lambda msg: True)
        assert exc_info.value.path.name == "es.json"


class TestAddMissingKeysFailures:
    def test_unwritable_locale_does_not_stop_the_pass(self, make_project, caplog):
        config = make_project(
            en={"a": "1"},
            es={"a": "1"},
            sources={"app.ts": 't("a"); t("b"); t("c")'},
        )
        report = analyze(config)
        es = _locales(config) / "es.json"
        es.unlink()
        es.mkdir()

        with caplog.at_level(logging.WARNING):
            result = add_missing_keys(report, lambda key: None)

        assert read_json(_locales(config) / "en.json") == {"a": "1", "b": "[b]", "c": "[c]"}
        assert result.added == [("b", "en"), ("c", "en")]
        assert [(key, locale) for key, locale, _reason in result.failed] == [
            ("b", "es"),
            ("c", "es"),
        ]
        assert all("es.json" in reason for _key, _locale, reason in result.failed)
        assert "es.json" in caplog.text
        assert result.keys_added == 2

    def test_keys_added_counts_only_successful_writes(self, make_project):
        config = make_project(en={"a": "1"}, es={"a": "1", "b": "2"}, sources={"app.ts": 't("b")'})
        report = analyze(config)
        en = _locales(config) / "en.json"
        en.unlink()
        en.mkdir()

        result = add_missing_keys(report, lambda key: None)

        assert result.added == []
        assert result.keys_added == 0
        assert [key for key, _locale, _reason in result.failed] == ["b"]
