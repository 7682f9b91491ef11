# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for translation backends."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bulk_translator.core.session import TranslationSession


class TranslatorError(Exception):
    """Base exception for translator module."""

    pass


class TranslationError(TranslatorError):
    """Error during translation (API call failure, bad response, etc.).

    This error type is potentially retryable by the caller.
    """

    pass


class TransportError(TranslationError):
    """HTTP level failure: non-success status, empty or undecodable body.

    Attributes:
        status: HTTP status code, if a response was received.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass
class CredentialItem:
    """A named credential field of a translator.

    Attributes:
        key: Field name used for persistence ("appKey").
        description: Human readable label ("API Key").
        is_mandatory: Whether the translator needs the field to run.
        value: Current value.
    """

    key: str
    description: str
    is_mandatory: bool = True
    value: str | None = None


@runtime_checkable
class TranslatorBackend(Protocol):
    """Protocol definition for session translators.

    All translator implementations must conform to this protocol.
    """

    @property
    def name(self) -> str:
        """Backend name ("YoudaoBulk")."""
        ...

    async def translate(self, session: TranslationSession) -> None:
        """Translate all items of a session.

        Results are appended to the items; recoverable problems are
        reported through ``session.add_message``.

        Raises:
            TransportError: On fatal transport failure.
        """
        ...


class TranslatorBase:
    """Common state of session translators.

    Holds the translator identity, its credential fields and the ranking
    stamped on every match it produces.
    """

    def __init__(
        self,
        id: str,
        display_name: str,
        uri: str | None = None,
        credentials: Sequence[CredentialItem] = (),
        ranking: float = 1.0,
    ) -> None:
        self.id = id
        self.display_name = display_name
        self.uri = uri
        self.credentials = [
            CredentialItem(c.key, c.description, c.is_mandatory, c.value)
            for c in credentials
        ]
        self.ranking = ranking
        self.is_enabled = True
        self.save_credentials = False

    @property
    def name(self) -> str:
        """Return backend name."""
        return self.id

    def get_credential(self, key: str) -> str | None:
        """Return the value of a credential field.

        Raises:
            KeyError: If the translator has no such field.
        """
        return self._credential(key).value

    def set_credential(self, key: str, value: str | None) -> None:
        self._credential(key).value = value

    def _credential(self, key: str) -> CredentialItem:
        for item in self.credentials:
            if item.key == key:
                return item
        raise KeyError(f"{self.id} has no credential named {key!r}")

    def to_config(self) -> dict[str, Any]:
        """Serialize translator settings.

        Mandatory credentials are secrets and are only written when
        ``save_credentials`` is set; optional fields are always written.
        """
        config: dict[str, Any] = {
            "isEnabled": self.is_enabled,
            "saveCredentials": self.save_credentials,
            "ranking": self.ranking,
        }
        for item in self.credentials:
            if item.is_mandatory and not self.save_credentials:
                continue
            config[item.key] = item.value
        return config

    def load_config(self, config: Mapping[str, Any]) -> None:
        """Restore settings written by :meth:`to_config`. Unknown keys are ignored."""
        self.is_enabled = bool(config.get("isEnabled", self.is_enabled))
        self.save_credentials = bool(config.get("saveCredentials", self.save_credentials))
        self.ranking = float(config.get("ranking", self.ranking))
        for item in self.credentials:
            if item.key in config:
                item.value = config[item.key]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
