# SPDX-License-Identifier: Apache-2.0
"""Youdao batch translation backend.

Translates all items of a session through the Youdao v2 batch API: items
are grouped by target culture, sent in chunks of at most ten texts per
signed request, and the results are written back onto the items on the
session's coordinating context.
"""

from __future__ import annotations

import itertools
import json
import logging
import time
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable
from urllib.parse import quote_plus

from bulk_translator.core.models import Culture, CultureKey, TranslationItem, TranslationMatch
from bulk_translator.core.progress import ProgressCallback
from bulk_translator.core.session import TranslationSession
from bulk_translator.translators.base import CredentialItem, TranslatorBase, TransportError
from bulk_translator.translators.language_codes import youdao_language_code
from bulk_translator.translators.signing import SIGN_TYPE, SignedRequest, sign_texts
from bulk_translator.translators.transport import AiohttpTransport, Transport, build_url

logger = logging.getLogger(__name__)

SUCCESS_CODE = "0"

ERROR_CODES: Mapping[str, str] = MappingProxyType(
    {
        "102": "Unsupported language type",
        "103": "Translation text too long",
        "202": (
            "Signature check failed. If the application ID and secret are correct "
            "this is usually an encoding problem; make sure q is UTF-8 encoded"
        ),
        "207": "Replayed request",
        "302": "Translation query failed",
        "303": "Other server-side exception",
        "304": "Translation failed, please contact support",
        "401": "Account is in arrears, please top up the account",
        "411": "Access frequency limited, please try again later",
        "412": "Too many long requests, please try again later",
    }
)


def get_error_name(error_code: str) -> str:
    """Return the description of a provider error code."""
    return ERROR_CODES.get(error_code, "Unknown Error")


@dataclass(frozen=True)
class TranslateResult:
    """One entry of ``translateResults``."""

    query: str | None = None
    translation: str | None = None
    type: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TranslateResult:
        return cls(
            query=data.get("query"),
            translation=data.get("translation"),
            type=data.get("type"),
        )


@dataclass(frozen=True)
class ProviderResponse:
    """Decoded batch API response."""

    error_code: str = ""
    error_index: tuple[int, ...] | None = None
    translate_results: tuple[TranslateResult, ...] | None = None

    @property
    def is_success(self) -> bool:
        return self.error_code == SUCCESS_CODE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProviderResponse:
        error_index = data.get("errorIndex")
        results = data.get("translateResults")
        return cls(
            error_code=str(data.get("errorCode", "")),
            error_index=tuple(int(i) for i in error_index) if error_index is not None else None,
            translate_results=(
                tuple(TranslateResult.from_dict(r) for r in results)
                if results is not None
                else None
            ),
        )

    @classmethod
    def from_json(cls, body: str) -> ProviderResponse:
        """Decode a raw response body.

        Raises:
            TransportError: If the body is not a JSON object or its fields
                have the wrong shape.
        """
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise TransportError(f"Malformed response: {e}") from e
        if data is None:
            raise TransportError("Empty response.")
        if not isinstance(data, dict):
            raise TransportError("Malformed response: expected a JSON object")
        try:
            return cls.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise TransportError(f"Malformed response: {e}") from e


class YoudaoBulkTranslator(TranslatorBase):
    """Youdao batch translation backend.

    Requires an application key and secret. A custom endpoint can be set
    through the optional ``ApiUrl`` credential.

    Attributes:
        name: Backend identifier ("YoudaoBulk").
    """

    DEFAULT_API_URL = "https://openapi.youdao.com/v2/api"
    MAX_ITEMS_PER_REQUEST = 10

    APP_KEY = "appKey"
    APP_SECRET = "appSecret"
    API_URL = "ApiUrl"

    def __init__(
        self,
        app_key: str | None = None,
        app_secret: str | None = None,
        api_url: str | None = None,
        transport: Transport | None = None,
        ranking: float = 1.0,
        progress_callback: ProgressCallback | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize YoudaoBulkTranslator.

        Args:
            app_key: Youdao application key.
            app_secret: Youdao application secret.
            api_url: Custom endpoint (default: DEFAULT_API_URL).
            transport: HTTP transport (default: an owned AiohttpTransport).
            ranking: Rating stamped on produced matches.
            progress_callback: Notified after each translated chunk.
            clock: Time source in seconds since the epoch, used for signing.
        """
        super().__init__(
            "YoudaoBulk",
            "YoudaoBulk",
            "https://ai.youdao.com/DOCSIRMA/html/trans/api/wbfy/index.html",
            [
                CredentialItem(self.APP_KEY, "API Key", value=app_key),
                CredentialItem(self.APP_SECRET, "Secret Key", value=app_secret),
                CredentialItem(self.API_URL, "Api Url", is_mandatory=False, value=api_url),
            ],
            ranking=ranking,
        )
        self._transport = transport
        self._owns_transport = transport is None
        self._progress_callback = progress_callback
        self._clock = clock

    @property
    def app_key(self) -> str | None:
        return self.get_credential(self.APP_KEY)

    @property
    def app_secret(self) -> str | None:
        return self.get_credential(self.APP_SECRET)

    @property
    def api_url(self) -> str:
        """Configured endpoint, or the default one when blank."""
        url = self.get_credential(self.API_URL)
        if url is None or not url.strip():
            return self.DEFAULT_API_URL
        return url

    async def __aenter__(self) -> YoudaoBulkTranslator:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    def _ensure_transport(self) -> Transport:
        if self._transport is None:
            self._transport = AiohttpTransport()
        return self._transport

    async def translate(self, session: TranslationSession) -> None:
        """Translate all items of a session.

        Stops early, without raising, when credentials are missing, when the
        session is canceled, or when the provider reports an error; the
        reason is added to the session messages. Results of chunks that
        completed before stopping are kept.

        Args:
            session: Session holding the items to translate.

        Raises:
            TransportError: On HTTP failure or undecodable response.
        """
        app_key = self.app_key
        app_secret = self.app_secret
        if not app_key:
            session.add_message("YoudaoBulk Translator requires App Key.")
            return
        if not app_secret:
            session.add_message("YoudaoBulk Translator requires App Secret.")
            return

        total = len(session.items)
        done = 0

        for key, group in self._group_by_culture(session.items):
            if session.is_canceled:
                break

            target_culture = key.culture or session.neutral_resources_language

            for chunk in self._chunks(group, session):
                response = await self._translate_chunk(
                    chunk,
                    session.source_language,
                    target_culture,
                    app_key,
                    app_secret,
                )

                if not response.is_success:
                    indices = ",".join(str(i) for i in response.error_index or ())
                    logger.warning(
                        "YoudaoBulk error %s (%s), rows: %s",
                        response.error_code,
                        get_error_name(response.error_code),
                        indices,
                    )
                    session.add_message(
                        f"YoudaoBulk Translator Error {response.error_code}:"
                        f"{get_error_name(response.error_code)},row Index:{indices}"
                    )
                    return

                await self._apply_results(session, chunk, response)
                done += len(chunk)
                self._notify("translate", done, total)

    @staticmethod
    def _group_by_culture(
        items: Sequence[TranslationItem],
    ) -> list[tuple[CultureKey, list[TranslationItem]]]:
        """Group items by target culture, keeping first-seen order."""
        groups: dict[CultureKey, list[TranslationItem]] = {}
        for item in items:
            groups.setdefault(item.target_culture, []).append(item)
        return list(groups.items())

    def _chunks(
        self,
        group: Sequence[TranslationItem],
        session: TranslationSession,
    ) -> Iterator[list[TranslationItem]]:
        """Yield consecutive chunks until the group is exhausted or canceled."""
        iterator = iter(group)
        while True:
            chunk = list(itertools.islice(iterator, self.MAX_ITEMS_PER_REQUEST))
            if session.is_canceled or not chunk:
                return
            yield chunk

    async def _translate_chunk(
        self,
        chunk: Sequence[TranslationItem],
        source_language: Culture,
        target_culture: Culture,
        app_key: str,
        app_secret: str,
    ) -> ProviderResponse:
        texts = [item.source for item in chunk]
        signed = sign_texts(app_key, app_secret, texts, clock=self._clock)
        parameters = self._build_parameters(
            texts, source_language, target_culture, app_key, signed
        )
        url = build_url(self.api_url, parameters)

        logger.debug(
            "YoudaoBulk request: %d items, %s -> %s",
            len(chunk),
            source_language,
            target_culture,
        )
        body = await self._ensure_transport().send(url)
        return ProviderResponse.from_json(body)

    @staticmethod
    def _build_parameters(
        texts: Sequence[str],
        source_language: Culture,
        target_culture: Culture,
        app_key: str,
        signed: SignedRequest,
    ) -> list[str]:
        """Build the flat name/value list of a batch request.

        The order of the parameters is the one the provider documents.
        """
        parameters = ["curtime", signed.curtime]
        for text in texts:
            parameters += ["q", quote_plus(text)]
        parameters += [
            "from", youdao_language_code(source_language),
            "to", youdao_language_code(target_culture),
            "signType", SIGN_TYPE,
            "appKey", app_key,
            "salt", signed.salt,
            "sign", signed.sign,
            "strict", "true",
        ]  # fmt: skip
        return parameters

    async def _apply_results(
        self,
        session: TranslationSession,
        chunk: Sequence[TranslationItem],
        response: ProviderResponse,
    ) -> None:
        results = response.translate_results
        if results is None:
            return

        pairs = list(zip(chunk, results))

        def _append_matches() -> None:
            for item, result in pairs:
                item.results.append(TranslationMatch(self, result.translation, self.ranking))

        await session.main_thread.start_new(_append_matches)

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)

    async def close(self) -> None:
        """Close the owned HTTP transport."""
        if self._owns_transport and isinstance(self._transport, AiohttpTransport):
            await self._transport.close()
            self._transport = None
