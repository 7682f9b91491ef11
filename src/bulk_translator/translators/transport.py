# SPDX-License-Identifier: Apache-2.0
"""HTTP transport used by the bulk translator."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from bulk_translator.translators.base import TransportError

if TYPE_CHECKING:
    import aiohttp


@runtime_checkable
class Transport(Protocol):
    """Narrow capability to fetch a URL and return its body."""

    async def send(self, url: str) -> str:
        """GET ``url`` and return the response body.

        Raises:
            TransportError: On non-success status, empty or undecodable body.
        """
        ...


def build_url(base_url: str, pairs: Sequence[str]) -> str:
    """Build a URL from a base and flat name/value pairs.

    Values are appended as given; callers encode them beforehand.

    Args:
        base_url: Endpoint URL.
        pairs: Names and values, alternating.

    Returns:
        Resulting URL.

    Raises:
        ValueError: If ``pairs`` has an odd number of entries.
    """
    if len(pairs) % 2 != 0:
        raise ValueError("There must be an even number of strings supplied for parameters.")
    if not pairs:
        return base_url
    query = "&".join(f"{name}={value}" for name, value in zip(pairs[::2], pairs[1::2]))
    return f"{base_url}?{query}"


class AiohttpTransport:
    """Transport backed by an aiohttp client session.

    The query string is sent exactly as built; aiohttp does not re-quote it.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize AiohttpTransport.

        Args:
            timeout: Total request timeout in seconds.

        Raises:
            ImportError: If aiohttp is not installed.
        """
        try:
            import aiohttp as _aiohttp
            import yarl as _yarl

            self._aiohttp = _aiohttp
            self._yarl = _yarl
        except ImportError:
            raise ImportError(
                "aiohttp is required for the HTTP transport. "
                "Install with: pip install bulk-translator"
            ) from None

        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AiohttpTransport:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            self._session = self._aiohttp.ClientSession(
                timeout=self._aiohttp.ClientTimeout(total=self._timeout)
            )
        return self._session

    async def send(self, url: str) -> str:
        session = await self._ensure_session()
        try:
            async with session.get(self._yarl.URL(url, encoded=True)) as response:
                if not 200 <= response.status < 300:
                    raise TransportError(
                        f"Request failed (status {response.status})",
                        status=response.status,
                    )
                try:
                    body = await response.text(encoding="utf-8")
                except UnicodeDecodeError as e:
                    raise TransportError(
                        f"Malformed response: {e}", status=response.status
                    ) from e
        except self._aiohttp.ClientError as e:
            raise TransportError(f"Request failed: {e}") from e

        if not body:
            raise TransportError("Empty response.", status=response.status)
        return body

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
