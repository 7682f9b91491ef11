# SPDX-License-Identifier: Apache-2.0
"""Data models for translation sessions.

This module defines the items a host application hands to a translator:
the locale wrappers used to group them and the match records a translator
appends to each item.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bulk_translator.translators.base import TranslatorBase


@dataclass(frozen=True)
class Culture:
    """Locale identifier such as "en", "zh-Hant" or "es-MX".

    Attributes:
        name: Full locale name. The empty string is the invariant culture.
    """

    name: str

    @property
    def two_letter_iso_language_name(self) -> str:
        """Primary language subtag, lower-cased ("zh" for "zh-Hant-TW")."""
        return self.name.replace("_", "-").split("-", 1)[0].lower()

    @property
    def is_invariant(self) -> bool:
        return not self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CultureKey:
    """Target language key of a translation item.

    A key without culture stands for the neutral resource language of the
    session.
    """

    culture: Culture | None = None

    @classmethod
    def from_name(cls, name: str | None) -> CultureKey:
        """Create a key from a locale name, None or "" meaning neutral."""
        return cls(Culture(name)) if name else cls()


@dataclass(frozen=True)
class TranslationMatch:
    """A single translation proposed for an item.

    Attributes:
        translator: Translator that produced the text.
        translated_text: Translated text (may be None if the provider sent none).
        rating: Ranking of the translator at the time of the match.
    """

    translator: TranslatorBase | Any
    translated_text: str | None
    rating: float


@dataclass
class TranslationItem:
    """One source string waiting for translation.

    Translators only ever append to ``results``.
    """

    source: str
    target_culture: CultureKey = field(default_factory=CultureKey)
    results: list[TranslationMatch] = field(default_factory=list)
    key: str | None = None

    @property
    def best_match(self) -> TranslationMatch | None:
        """Match with the highest rating, first one wins on ties."""
        best: TranslationMatch | None = None
        for match in self.results:
            if best is None or match.rating > best.rating:
                best = match
        return best
