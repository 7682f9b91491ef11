# SPDX-License-Identifier: Apache-2.0
"""Request signing for the Youdao v3 signature scheme.

The provider signs ``appKey + input + salt + curtime + appSecret`` with
SHA-256, where ``input`` is the query text shortened to
``first 10 chars + length + last 10 chars`` once it exceeds 20 characters.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

SIGN_TYPE = "v3"


@dataclass(frozen=True)
class SignedRequest:
    """Signing material of one provider call. Never reused across calls."""

    curtime: str
    salt: str
    sign: str


def truncate(text: str | None) -> str | None:
    """Shorten text the way the provider does before signing.

    Args:
        text: Concatenated query text.

    Returns:
        None for None, the text itself up to 20 characters, otherwise the
        first 10 characters, the length in decimal and the last 10 characters.
    """
    if text is None:
        return None
    length = len(text)
    if length <= 20:
        return text
    return text[:10] + str(length) + text[-10:]


def compute_hash(text: str, algorithm: str = "sha256") -> str:
    """Hash UTF-8 text and return uppercase hex without separators."""
    digest = hashlib.new(algorithm, text.encode("utf-8"))
    return digest.hexdigest().upper()


def sign(
    app_key: str,
    text: str | None,
    salt: str,
    curtime: str,
    app_secret: str,
) -> str:
    """Compute the v3 request signature.

    Args:
        app_key: Application key.
        text: Concatenated source text of the request (not yet truncated).
        salt: Per-request salt.
        curtime: Request time in whole seconds since the epoch.
        app_secret: Application secret.

    Returns:
        Uppercase hex SHA-256 signature.
    """
    return compute_hash(app_key + (truncate(text) or "") + salt + curtime + app_secret)


def sign_texts(
    app_key: str,
    app_secret: str,
    texts: Sequence[str],
    clock: Callable[[], float] = time.time,
) -> SignedRequest:
    """Create fresh signing material for a batch of texts.

    ``curtime`` is the clock truncated to whole seconds; ``salt`` is the
    millisecond part of the same reading.
    """
    millis = int(clock() * 1000)
    curtime = str(millis // 1000)
    salt = str(millis % 1000)
    signature = sign(app_key, "".join(texts), salt, curtime, app_secret)
    return SignedRequest(curtime=curtime, salt=salt, sign=signature)
