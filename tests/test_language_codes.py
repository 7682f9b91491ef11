# SPDX-License-Identifier: Apache-2.0
"""Tests for locale to Youdao language code mapping."""

from __future__ import annotations

import pytest

from bulk_translator.core.models import Culture
from bulk_translator.translators.language_codes import (
    CULTURE_OVERRIDES,
    SIMPLIFIED_CHINESE,
    TRADITIONAL_CHINESE,
    youdao_language_code,
)


class TestChinese:
    """Chinese script disambiguation."""

    @pytest.mark.parametrize("name", ["zh-Hant", "zh-HK", "zh-MO", "zh-TW", "zh-CHT"])
    def test_traditional_variants(self, name: str) -> None:
        assert youdao_language_code(Culture(name)) == TRADITIONAL_CHINESE

    @pytest.mark.parametrize("name", ["ZH-HANT", "zh-hk", "Zh-Tw"])
    def test_case_insensitive(self, name: str) -> None:
        assert youdao_language_code(name) == TRADITIONAL_CHINESE

    @pytest.mark.parametrize("name", ["zh", "zh-Hans", "zh-CN", "zh-SG"])
    def test_simplified_variants(self, name: str) -> None:
        assert youdao_language_code(name) == SIMPLIFIED_CHINESE

    def test_codes(self) -> None:
        assert TRADITIONAL_CHINESE == "zh-CHT"
        assert SIMPLIFIED_CHINESE == "zh-CHS"


class TestOverrides:
    """Fixed per-locale codes."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("ja-JP", "ja"), ("vi-VN", "vi"), ("es-MX", "es")],
    )
    def test_override_table(self, name: str, expected: str) -> None:
        assert youdao_language_code(name) == expected

    def test_override_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            CULTURE_OVERRIDES["fr-FR"] = "fr"  # type: ignore[index]


class TestFallback:
    """Unmapped locales use the ISO language code."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("en", "en"), ("en-US", "en"), ("de-DE", "de"), ("fr-CA", "fr"), ("ko", "ko")],
    )
    def test_iso_language(self, name: str, expected: str) -> None:
        assert youdao_language_code(name) == expected

    @pytest.mark.parametrize("name", ["en", "pt-BR", "sr-Latn-RS", "ar", "ja", ""])
    def test_total(self, name: str) -> None:
        """Every locale should map to a string."""
        assert isinstance(youdao_language_code(name), str)


class TestCulture:
    """Culture helper properties."""

    def test_two_letter_name(self) -> None:
        assert Culture("zh-Hant-TW").two_letter_iso_language_name == "zh"
        assert Culture("EN_us").two_letter_iso_language_name == "en"

    def test_invariant(self) -> None:
        assert Culture("").is_invariant
        assert not Culture("en").is_invariant
