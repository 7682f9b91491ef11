#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Bulk translation sample script

Shows the basic use of bulk-translator: a few localization entries for
several target languages are translated in one session.

Usage:
    cd examples
    python translate_entries.py

Environment variables (loaded from .env automatically):
    YOUDAO_APP_KEY: Youdao application key
    YOUDAO_APP_SECRET: Youdao application secret
    YOUDAO_API_URL: Custom endpoint (optional)
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the project to the path (for development)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

load_dotenv(PROJECT_ROOT / ".env")


# =============================================================================
# Settings - change these to try different options
# =============================================================================

SOURCE_LANG = "en"

# Language used by entries without an explicit target
NEUTRAL_LANG = "zh-Hans"

# (source text, target locale); None targets NEUTRAL_LANG
ENTRIES: list[tuple[str, str | None]] = [
    ("Open file", "ja-JP"),
    ("Save changes?", "ja-JP"),
    ("Open file", "zh-TW"),
    ("Save changes?", "zh-TW"),
    ("Open file", None),
    ("Cancel", "es-MX"),
]

VERBOSE = False

# =============================================================================
# Main (usually no need to change)
# =============================================================================


async def main() -> None:
    from bulk_translator.core import CultureKey, InMemorySession, TranslationItem
    from bulk_translator.translators import YoudaoBulkTranslator

    app_key = os.environ.get("YOUDAO_APP_KEY")
    app_secret = os.environ.get("YOUDAO_APP_SECRET")
    if not app_key or not app_secret:
        print("Error: YOUDAO_APP_KEY and YOUDAO_APP_SECRET must be set")
        print("Set them with: export YOUDAO_APP_KEY='...' YOUDAO_APP_SECRET='...'")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if VERBOSE else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    items = [TranslationItem(text, CultureKey.from_name(target)) for text, target in ENTRIES]
    session = InMemorySession(items, SOURCE_LANG, NEUTRAL_LANG)

    print("=" * 60)
    print("Bulk Translation Example")
    print("=" * 60)
    print(f"Entries:   {len(items)}")
    print(f"Languages: {SOURCE_LANG} -> {sorted({t or NEUTRAL_LANG for _, t in ENTRIES})}")
    print("=" * 60)

    async with YoudaoBulkTranslator(
        app_key=app_key,
        app_secret=app_secret,
        api_url=os.environ.get("YOUDAO_API_URL"),
    ) as translator:
        await translator.translate(session)

    for item in items:
        match = item.best_match
        target = item.target_culture.culture or session.neutral_resources_language
        print(f"[{target}] {item.source} -> {match.translated_text if match else '(none)'}")

    for message in session.messages:
        print(f"Message: {message}")

    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
