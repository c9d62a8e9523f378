"""Runtime lookup — resolve translation keys for display.

Missing translations degrade to the key itself, never to an exception or
blank text::

    tr = Translator.from_directory(Path("src/locales"), ["en", "es"])
    tr.set_locale("es")
    tr.t("common.greeting")   # "Hola", or "common.greeting" if absent
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from locale_audit.core.keys import Leaf, Node, Tree, split_key
from locale_audit.core.store import load_locale

_logger = logging.getLogger(__name__)


def lookup(dictionary: Tree, key: str) -> str:
    """Return the string at *key*, or *key* itself when it cannot be resolved."""
    current: Tree = dictionary
    for segment in split_key(key):
        if not isinstance(current, Node) or segment not in current.children:
            return key
        current = current.children[segment]
    if isinstance(current, Leaf) and isinstance(current.value, str):
        return current.value
    return key


class Translator:
    """Holds one dictionary per supported locale and an active locale."""

    def __init__(
        self,
        dictionaries: Mapping[str, Node],
        default_locale: str = "en",
    ) -> None:
        if default_locale not in dictionaries:
            raise ValueError(f"Translator: no dictionary for default locale {default_locale!r}")
        self._dictionaries = dict(dictionaries)
        self._default = default_locale
        self._locale = default_locale

    @classmethod
    def from_directory(
        cls,
        directory: Path,
        locales: Iterable[str],
        default_locale: str = "en",
    ) -> "Translator":
        """Load ``<locale>.json`` for each locale; absent files load as empty."""
        dictionaries: dict[str, Node] = {}
        for locale in locales:
            tree = load_locale(locale, directory)
            if tree is None:
                _logger.warning("No dictionary file for locale %r in %s", locale, directory)
                tree = Node()
            dictionaries[locale] = tree
        return cls(dictionaries, default_locale=default_locale)

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def supported_locales(self) -> tuple[str, ...]:
        return tuple(self._dictionaries)

    def set_locale(self, locale: str) -> None:
        if locale not in self._dictionaries:
            _logger.warning(
                "Unsupported locale %r. Falling back to %r.", locale, self._default
            )
            locale = self._default
        self._locale = locale

    def t(self, key: str) -> str:
        return lookup(self._dictionaries[self._locale], key)
