# SPDX-License-Identifier: Apache-2.0
"""Host-side session model."""

from .models import Culture, CultureKey, TranslationItem, TranslationMatch
from .progress import ProgressCallback
from .session import Dispatcher, InMemorySession, LoopDispatcher, TranslationSession

__all__ = [
    "Culture",
    "CultureKey",
    "Dispatcher",
    "InMemorySession",
    "LoopDispatcher",
    "ProgressCallback",
    "TranslationItem",
    "TranslationMatch",
    "TranslationSession",
]
