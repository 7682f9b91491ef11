# SPDX-License-Identifier: Apache-2.0
"""Mapping from locale names to Youdao language codes."""

from __future__ import annotations

from types import MappingProxyType

from bulk_translator.core.models import Culture

SIMPLIFIED_CHINESE = "zh-CHS"
TRADITIONAL_CHINESE = "zh-CHT"

TRADITIONAL_CHINESE_NAMES = frozenset({"zh-hant", "zh-cht", "zh-hk", "zh-mo", "zh-tw"})

# Exact locale names whose Youdao code differs from the ISO language code
CULTURE_OVERRIDES = MappingProxyType(
    {
        "ja-JP": "ja",
        "vi-VN": "vi",
        "es-MX": "es",
    }
)


def youdao_language_code(culture: Culture | str) -> str:
    """Map a locale to the language code expected by Youdao.

    Chinese resolves to traditional or simplified script by locale name,
    a few locales have fixed codes, and every other locale falls back to
    its two-letter ISO language code.

    Args:
        culture: Locale, or locale name.

    Returns:
        Youdao language code.
    """
    if isinstance(culture, str):
        culture = Culture(culture)

    iso1 = culture.two_letter_iso_language_name
    name = culture.name

    if iso1 == "zh":
        if name.lower() in TRADITIONAL_CHINESE_NAMES:
            return TRADITIONAL_CHINESE
        return SIMPLIFIED_CHINESE

    mapped = CULTURE_OVERRIDES.get(name)
    if mapped is not None:
        return mapped

    return iso1
