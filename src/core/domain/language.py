"""Language utilities for FjordVind.

This module centralizes the language options supported for user-facing
error strings. Keeping it in the domain layer allows both CLI and service
layers to share a single source of truth without creating circular
imports with adapters.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    NORWEGIAN = "nb"
    ENGLISH = "en"

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "English" if self is Language.ENGLISH else "Norsk (bokmål)"
