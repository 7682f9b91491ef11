# SPDX-License-Identifier: Apache-2.0
"""
Bulk Translator - CLI Tool

Machine-translates localization entries with the Youdao batch API.

The input is a JSON array of entries::

    [{"key": "greeting", "source": "Hello", "target": "ja-JP"}, ...]

``target`` may be omitted, in which case the neutral language is used.
The output repeats the entries with a ``translation`` field added.

Usage:
    bulk-translate <entries.json> [options]

Examples:
    bulk-translate strings.json
    bulk-translate strings.json -o ./translated.json
    bulk-translate strings.json --source en --neutral zh-Hans
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, NoReturn

from dotenv import load_dotenv

from bulk_translator.core.models import CultureKey, TranslationItem
from bulk_translator.core.progress import ProgressCallback
from bulk_translator.core.session import InMemorySession
from bulk_translator.translators.base import TranslatorError
from bulk_translator.translators.youdao_bulk import YoudaoBulkTranslator

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="bulk-translate",
        description="Bulk Translation Tool - Translates localization entries with Youdao",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s strings.json                       # Translate to each entry's target
  %(prog)s strings.json -o result.json        # Specify output file
  %(prog)s strings.json -s en --neutral ja    # Entries without target go to ja

Environment Variables:
  YOUDAO_APP_KEY     Youdao application key
  YOUDAO_APP_SECRET  Youdao application secret
  YOUDAO_API_URL     Custom API endpoint (optional)
""",
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Path to JSON entries file",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: <input>_translated.json)",
    )

    # Language options
    parser.add_argument(
        "-s",
        "--source",
        default="en",
        help="Source language (default: en)",
    )
    parser.add_argument(
        "--neutral",
        help="Language for entries without target (default: source language)",
    )

    # Youdao options
    youdao_group = parser.add_argument_group("Youdao options")
    youdao_group.add_argument(
        "--app-key",
        help="Youdao application key (or set YOUDAO_APP_KEY)",
    )
    youdao_group.add_argument(
        "--app-secret",
        help="Youdao application secret (or set YOUDAO_APP_SECRET)",
    )
    youdao_group.add_argument(
        "--api-url",
        help="Custom API URL (or set YOUDAO_API_URL)",
    )
    youdao_group.add_argument(
        "--ranking",
        type=float,
        default=1.0,
        help="Rating of produced matches (default: 1.0)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def create_translator(
    args: argparse.Namespace,
    progress_callback: ProgressCallback | None = None,
) -> YoudaoBulkTranslator:
    """Create translator from arguments, falling back to environment variables.

    Missing credentials are not checked here; the translator reports them
    as session messages.
    """
    return YoudaoBulkTranslator(
        app_key=args.app_key or os.environ.get("YOUDAO_APP_KEY", ""),
        app_secret=args.app_secret or os.environ.get("YOUDAO_APP_SECRET", ""),
        api_url=args.api_url or os.environ.get("YOUDAO_API_URL"),
        ranking=args.ranking,
        progress_callback=progress_callback,
    )


def load_entries(path: Path) -> list[dict[str, Any]]:
    """Load entries from a JSON file.

    Raises:
        ValueError: If the file is not a list of objects with a "source" string,
            or an entry has a "target" that is neither a string nor null.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Entries file must contain a JSON array")
    for i, entry in enumerate(data):
        if not isinstance(entry, dict) or not isinstance(entry.get("source"), str):
            raise ValueError(f"Entry {i} must be an object with a 'source' string")
        target = entry.get("target")
        if target is not None and not isinstance(target, str):
            raise ValueError(f"Entry {i} has a non-string 'target': {target!r}")
    return data


def build_items(entries: list[dict[str, Any]]) -> list[TranslationItem]:
    """Create translation items in entry order."""
    return [
        TranslationItem(
            source=entry["source"],
            target_culture=CultureKey.from_name(entry.get("target")),
            key=entry.get("key"),
        )
        for entry in entries
    ]


def merge_results(
    entries: list[dict[str, Any]],
    items: list[TranslationItem],
) -> list[dict[str, Any]]:
    """Copy entries, adding the best translation of each item."""
    merged = []
    for entry, item in zip(entries, items):
        out = dict(entry)
        match = item.best_match
        out["translation"] = match.translated_text if match else None
        merged.append(out)
    return merged


def _log_progress(stage: str, current: int, total: int, message: str = "") -> None:
    logger.debug("%s: %d/%d %s", stage, current, total, message)


async def run(args: argparse.Namespace) -> int:
    """Execute translation.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        entries = load_entries(input_path)
    except (json.JSONDecodeError, ValueError) as e:
        print(f"Error: Invalid entries file: {e}", file=sys.stderr)
        return 1

    output_path: Path = args.output or input_path.with_name(
        f"{input_path.stem}_translated.json"
    )

    items = build_items(entries)
    session = InMemorySession(
        items,
        source_language=args.source,
        neutral_resources_language=args.neutral,
    )

    print(f"Input: {input_path}")
    print(f"Output: {output_path}")
    print(f"Entries: {len(items)}")
    print()

    translator = create_translator(args, progress_callback=_log_progress)

    try:
        print("Translating...")
        async with translator:
            await translator.translate(session)
    except TranslatorError as e:
        print(f"Error: Translation failed: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    for message in session.messages:
        print(f"Message: {message}", file=sys.stderr)

    merged = merge_results(entries, items)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(merged, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
    )

    translated = sum(1 for entry in merged if entry["translation"] is not None)
    print()
    print(f"Complete: {output_path}")
    print(f"  Translated: {translated}")
    print(f"  Untranslated: {len(merged) - translated}")

    return 0 if not session.messages else 1


def main() -> NoReturn:
    """Main entry point."""
    # API keys may come from a .env file in the working directory
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
