# SPDX-License-Identifier: Apache-2.0
"""Translation backend modules.

This module provides the Youdao batch translation backend together with
its signing, language mapping and transport helpers.

Usage:
    from bulk_translator.core import CultureKey, InMemorySession, TranslationItem
    from bulk_translator.translators import YoudaoBulkTranslator

    session = InMemorySession([TranslationItem("Hello", CultureKey.from_name("ja"))])
    async with YoudaoBulkTranslator(app_key="...", app_secret="...") as translator:
        await translator.translate(session)
"""

from bulk_translator.translators.base import (
    CredentialItem,
    TranslationError,
    TranslatorBackend,
    TranslatorBase,
    TranslatorError,
    TransportError,
)
from bulk_translator.translators.language_codes import youdao_language_code
from bulk_translator.translators.signing import SignedRequest, compute_hash, sign, truncate
from bulk_translator.translators.transport import AiohttpTransport, Transport, build_url
from bulk_translator.translators.youdao_bulk import (
    ERROR_CODES,
    ProviderResponse,
    YoudaoBulkTranslator,
)

__all__ = [
    # Protocol and exceptions
    "TranslatorBackend",
    "TranslatorBase",
    "TranslatorError",
    "TranslationError",
    "TransportError",
    "CredentialItem",
    # Youdao batch backend
    "YoudaoBulkTranslator",
    "ProviderResponse",
    "ERROR_CODES",
    # Helpers
    "SignedRequest",
    "compute_hash",
    "sign",
    "truncate",
    "youdao_language_code",
    "Transport",
    "AiohttpTransport",
    "build_url",
]
