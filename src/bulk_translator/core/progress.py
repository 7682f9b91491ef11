# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for translation runs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol.

    Translators call it after each applied chunk with stage "translate",
    the number of items handled so far and the session's item count.
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
