# SPDX-License-Identifier: Apache-2.0
"""Translation session contract and an in-memory implementation."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from typing import Callable, Protocol, Sequence, runtime_checkable

from bulk_translator.core.models import Culture, TranslationItem

logger = logging.getLogger(__name__)


@runtime_checkable
class Dispatcher(Protocol):
    """Runs callbacks on the context that owns the session's item state."""

    async def start_new(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the coordinating context and wait for it."""
        ...


@runtime_checkable
class TranslationSession(Protocol):
    """Protocol definition for a host translation session.

    A session lives for one user-initiated translation run.
    """

    @property
    def items(self) -> Sequence[TranslationItem]: ...

    @property
    def source_language(self) -> Culture: ...

    @property
    def neutral_resources_language(self) -> Culture: ...

    @property
    def is_canceled(self) -> bool: ...

    @property
    def main_thread(self) -> Dispatcher: ...

    def add_message(self, text: str) -> None: ...


class LoopDispatcher:
    """Dispatcher bound to an asyncio event loop.

    Callbacks issued from the owning loop run inline. Callbacks issued from
    any other thread or loop are scheduled with ``call_soon_threadsafe`` and
    awaited, so item state is only mutated on the owning loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize LoopDispatcher.

        Args:
            loop: Owning event loop. If None, callbacks always run inline.
        """
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    async def start_new(self, callback: Callable[[], None]) -> None:
        running = asyncio.get_running_loop()
        if self._loop is None or self._loop is running:
            callback()
            return

        future: concurrent.futures.Future[None] = concurrent.futures.Future()

        def _run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                callback()
            except BaseException as exc:
                future.set_exception(exc)
            else:
                future.set_result(None)

        self._loop.call_soon_threadsafe(_run)
        await asyncio.wrap_future(future)


class InMemorySession:
    """Self-contained translation session.

    Used by the CLI and by tests; hosts with their own item model implement
    :class:`TranslationSession` directly.
    """

    def __init__(
        self,
        items: Sequence[TranslationItem],
        source_language: Culture | str = "en",
        neutral_resources_language: Culture | str | None = None,
        main_thread: Dispatcher | None = None,
    ) -> None:
        """Initialize InMemorySession.

        Args:
            items: Items to translate, in document order.
            source_language: Language of the source texts.
            neutral_resources_language: Language used for items without an
                explicit target culture (default: source language).
            main_thread: Coordinating dispatcher (default: inline).
        """
        if isinstance(source_language, str):
            source_language = Culture(source_language)
        if neutral_resources_language is None:
            neutral_resources_language = source_language
        elif isinstance(neutral_resources_language, str):
            neutral_resources_language = Culture(neutral_resources_language)

        self._items = list(items)
        self._source_language = source_language
        self._neutral_resources_language = neutral_resources_language
        self._main_thread = main_thread or LoopDispatcher()
        self._canceled = threading.Event()
        self.messages: list[str] = []

    @property
    def items(self) -> list[TranslationItem]:
        return self._items

    @property
    def source_language(self) -> Culture:
        return self._source_language

    @property
    def neutral_resources_language(self) -> Culture:
        return self._neutral_resources_language

    @property
    def main_thread(self) -> Dispatcher:
        return self._main_thread

    @property
    def is_canceled(self) -> bool:
        return self._canceled.is_set()

    def cancel(self) -> None:
        """Request cancellation; safe to call from any thread."""
        self._canceled.set()

    def add_message(self, text: str) -> None:
        logger.info("Session message: %s", text)
        self.messages.append(text)
